"""Per-person status chains and the merged, time-ordered feed of a person's friends.

Chain shape: (Person)-[:STATUS]->(newest)-[:NEXT]->(older)-[:NEXT]->...
"""

import heapq
import logging
from collections.abc import Callable, Iterator
from datetime import datetime, timezone

from socnet.application.friendships import friend_ids, load_person
from socnet.application.ports import UnitOfWork
from socnet.domain import NotFoundError, Person, StatusUpdate
from socnet.domain.entities import clean_status_text
from socnet.domain.graph import (
    CREATED_AT,
    NEXT,
    SEQUENCE,
    STATUS,
    STATUS_SEQUENCE,
    STATUS_UPDATE,
    TEXT,
    Direction,
)

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _datetime_to_iso(dt: datetime) -> str:
    return dt.isoformat()


def _iso_to_datetime(s: str) -> datetime:
    return datetime.fromisoformat(s.replace("Z", "+00:00"))


def _first(ids: list[str]) -> str | None:
    return ids[0] if ids else None


class StatusFeed:
    """Adds status updates and reads them back newest-first."""

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self._clock = clock or _utcnow

    def add_status(self, uow: UnitOfWork, person: Person, text: str) -> StatusUpdate:
        """Push a new update onto the head of the person's chain."""
        text = clean_status_text(text)
        head_id = _first(uow.adjacency(person.node_id, STATUS, Direction.OUTGOING))
        created_at = self._clock()
        if head_id is not None:
            previous = _iso_to_datetime(uow.get_property(head_id, CREATED_AT))
            # Never older than the current head.
            created_at = max(created_at, previous)
        sequence = uow.next_sequence(STATUS_SEQUENCE)

        node_id = uow.create_node(STATUS_UPDATE)
        uow.set_property(node_id, TEXT, text)
        uow.set_property(node_id, CREATED_AT, _datetime_to_iso(created_at))
        uow.set_property(node_id, SEQUENCE, sequence)
        if head_id is not None:
            uow.delete_edge(person.node_id, head_id, STATUS)
            uow.create_edge(node_id, head_id, NEXT)
        uow.create_edge(person.node_id, node_id, STATUS)
        logger.debug("Status #%d added for %s", sequence, person.name)
        return StatusUpdate(
            node_id=node_id,
            text=text,
            created_at=created_at,
            sequence=sequence,
            author=person,
        )

    def get_status(self, uow: UnitOfWork, person: Person) -> Iterator[StatusUpdate]:
        """The person's own updates, most recent first."""
        for node_id in self._chain(uow, person.node_id):
            yield self._load(uow, node_id, person)

    def friend_statuses(
        self, uow: UnitOfWork, person: Person
    ) -> Iterator[StatusUpdate]:
        """Updates of all direct friends merged newest-first.

        Each chain is already newest-first, so this is a k-way merge on
        (created_at, sequence).
        """
        chains = [
            self.get_status(uow, load_person(uow, friend_id))
            for friend_id in friend_ids(uow, person.node_id)
        ]
        return heapq.merge(*chains, key=lambda s: s.sort_key, reverse=True)

    def get_status_by_id(self, uow: UnitOfWork, node_id: str) -> StatusUpdate:
        """Load one update and resolve its author by walking the chain back to the head."""
        if not uow.has_node(node_id, STATUS_UPDATE):
            raise NotFoundError(f"No status update with id {node_id!r}.")
        current = node_id
        visited = {current}
        while True:
            newer = _first(uow.adjacency(current, NEXT, Direction.INCOMING))
            if newer is None or newer in visited:
                break
            visited.add(newer)
            current = newer
        author_id = _first(uow.adjacency(current, STATUS, Direction.INCOMING))
        if author_id is None:
            raise NotFoundError(f"Status update {node_id!r} has no author.")
        return self._load(uow, node_id, load_person(uow, author_id))

    def delete_statuses(self, uow: UnitOfWork, person: Person) -> int:
        """Delete the whole chain of a person. Returns how many updates were removed."""
        chain = list(self._chain(uow, person.node_id))
        if not chain:
            return 0
        uow.delete_edge(person.node_id, chain[0], STATUS)
        for newer, older in zip(chain, chain[1:]):
            uow.delete_edge(newer, older, NEXT)
        for node_id in chain:
            uow.delete_node(node_id)
        return len(chain)

    def _chain(self, uow: UnitOfWork, person_id: str) -> Iterator[str]:
        current = _first(uow.adjacency(person_id, STATUS, Direction.OUTGOING))
        visited: set[str] = set()
        while current is not None and current not in visited:
            visited.add(current)
            yield current
            current = _first(uow.adjacency(current, NEXT, Direction.OUTGOING))

    def _load(self, uow: UnitOfWork, node_id: str, author: Person) -> StatusUpdate:
        return StatusUpdate(
            node_id=node_id,
            text=uow.get_property(node_id, TEXT),
            created_at=_iso_to_datetime(uow.get_property(node_id, CREATED_AT)),
            sequence=uow.get_property(node_id, SEQUENCE),
            author=author,
        )
