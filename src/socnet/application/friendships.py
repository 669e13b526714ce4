"""Friend operations on a Person: add, remove, list, friends-of-friends."""

import logging
from collections.abc import Iterator

from socnet.application.ports import UnitOfWork
from socnet.domain import InvalidOperationError, Person
from socnet.domain.graph import FRIEND, NAME, Direction

logger = logging.getLogger(__name__)


def friend_ids(uow: UnitOfWork, node_id: str) -> list[str]:
    """Ids of direct friends in edge-creation order."""
    return uow.adjacency(node_id, FRIEND, Direction.BOTH)


def load_person(uow: UnitOfWork, node_id: str) -> Person:
    return Person(node_id=node_id, name=uow.get_property(node_id, NAME, ""))


class Friendships:
    """Symmetric FRIEND edges. Each friendship is one stored edge read from both ends."""

    def add_friend(self, uow: UnitOfWork, person: Person, other: Person) -> None:
        """Befriend other. Adding an existing friendship is a no-op."""
        if person == other:
            raise InvalidOperationError("A person cannot befriend themselves.")
        # Held until commit so a concurrent add sees this edge.
        uow.lock_nodes(person.node_id, other.node_id)
        if self.is_friend(uow, person, other):
            return
        uow.create_edge(person.node_id, other.node_id, FRIEND)
        logger.debug("Friendship added: %s <-> %s", person.name, other.name)

    def remove_friend(self, uow: UnitOfWork, person: Person, other: Person) -> None:
        """Remove the friendship if present; no-op otherwise."""
        removed = uow.delete_edge(person.node_id, other.node_id, FRIEND)
        if not removed:
            removed = uow.delete_edge(other.node_id, person.node_id, FRIEND)
        if removed:
            logger.debug("Friendship removed: %s <-> %s", person.name, other.name)

    def is_friend(self, uow: UnitOfWork, person: Person, other: Person) -> bool:
        return other.node_id in friend_ids(uow, person.node_id)

    def get_friends(self, uow: UnitOfWork, person: Person) -> Iterator[Person]:
        for node_id in friend_ids(uow, person.node_id):
            yield load_person(uow, node_id)

    def get_nr_of_friends(self, uow: UnitOfWork, person: Person) -> int:
        return len(friend_ids(uow, person.node_id))

    def get_friends_of_friends(self, uow: UnitOfWork, person: Person) -> list[Person]:
        """Friends of each direct friend, excluding the person only.

        A two-hop neighbour that is also a direct friend is included.
        """
        seen: set[str] = set()
        out: list[Person] = []
        for friend_id in friend_ids(uow, person.node_id):
            for fof_id in friend_ids(uow, friend_id):
                if fof_id == person.node_id or fof_id in seen:
                    continue
                seen.add(fof_id)
                out.append(load_person(uow, fof_id))
        return out
