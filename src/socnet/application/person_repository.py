"""Create, look up and delete Person nodes. Names are unique."""

import logging
from collections.abc import Iterator

from socnet.application.ports import UnitOfWork
from socnet.application.status_feed import StatusFeed
from socnet.domain import DuplicateNameError, NotFoundError, Person
from socnet.domain.entities import clean_name
from socnet.domain.graph import FRIEND, NAME, PERSON, Direction

logger = logging.getLogger(__name__)


class PersonRepository:
    """Person lifecycle over a unit-of-work. Holds no graph state of its own.

    get_all_persons() is lazy: deleting persons while iterating it is
    undefined, so callers snapshot it first (see delete_all_persons).
    """

    def __init__(self, status_feed: StatusFeed | None = None) -> None:
        self._status_feed = status_feed or StatusFeed()

    def create_person(self, uow: UnitOfWork, name: str) -> Person:
        """Create a person. Raises DuplicateNameError if the name is taken."""
        name = clean_name(name)
        if uow.index_lookup(PERSON, NAME, name) is not None:
            raise DuplicateNameError(name)
        node_id = uow.create_node(PERSON)
        uow.set_property(node_id, NAME, name)
        logger.info("Created person %r (%s)", name, node_id)
        return Person(node_id=node_id, name=name)

    def get_person_by_name(self, uow: UnitOfWork, name: str) -> Person:
        cleaned = (name or "").strip()
        node_id = uow.index_lookup(PERSON, NAME, cleaned) if cleaned else None
        if node_id is None:
            raise NotFoundError(f"No person named {name!r}.")
        return Person(node_id=node_id, name=cleaned)

    def get_person_by_id(self, uow: UnitOfWork, node_id: str) -> Person:
        if not uow.has_node(node_id, PERSON):
            raise NotFoundError(f"No person with id {node_id!r}.")
        return Person(node_id=node_id, name=uow.get_property(node_id, NAME, ""))

    def get_all_persons(self, uow: UnitOfWork) -> Iterator[Person]:
        for node_id in uow.nodes(PERSON):
            yield Person(node_id=node_id, name=uow.get_property(node_id, NAME, ""))

    def count_persons(self, uow: UnitOfWork) -> int:
        return sum(1 for _ in uow.nodes(PERSON))

    def delete_person(self, uow: UnitOfWork, person: Person) -> None:
        """Delete a person with its friendships and status updates.

        Edges and status updates go first, the person node last. On a store
        whose units of work are not atomic, a crash mid-cascade can leave an
        orphaned status chain behind; both shipped stores are atomic.
        """
        if not uow.has_node(person.node_id, PERSON):
            raise NotFoundError(f"No person with id {person.node_id!r}.")
        friends = uow.adjacency(person.node_id, FRIEND, Direction.BOTH)
        for friend_id in friends:
            if not uow.delete_edge(person.node_id, friend_id, FRIEND):
                uow.delete_edge(friend_id, person.node_id, FRIEND)
        removed = self._status_feed.delete_statuses(uow, person)
        uow.delete_node(person.node_id)
        logger.info(
            "Deleted person %r (%d friendships, %d status updates)",
            person.name,
            len(friends),
            removed,
        )

    def delete_all_persons(self, uow: UnitOfWork) -> int:
        """Delete every person. Returns how many were deleted."""
        persons = list(self.get_all_persons(uow))
        for person in persons:
            self.delete_person(uow, person)
        return len(persons)
