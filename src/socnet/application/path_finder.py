"""Bounded-depth shortest path between two people over FRIEND edges."""

import logging
from collections import deque

from socnet.application.friendships import friend_ids, load_person
from socnet.application.ports import UnitOfWork
from socnet.domain import InvalidArgumentError, NotFoundError, Person

logger = logging.getLogger(__name__)


class PathFinder:
    """Breadth-first search with a visited set.

    Neighbours are expanded in the store's adjacency order (edge-creation
    order), so for a fixed graph the first shortest path discovered is
    always the same one.
    """

    def shortest_path(
        self, uow: UnitOfWork, source: Person, target: Person, max_depth: int
    ) -> list[Person]:
        """Return [source, ..., target] or raise NotFoundError beyond max_depth hops."""
        if max_depth < 0:
            raise InvalidArgumentError("max_depth must be >= 0.")
        if source == target:
            return [source]

        parents: dict[str, str | None] = {source.node_id: None}
        frontier = deque([source.node_id])
        for depth in range(1, max_depth + 1):
            next_frontier: deque[str] = deque()
            while frontier:
                node_id = frontier.popleft()
                for neighbour in friend_ids(uow, node_id):
                    if neighbour in parents:
                        continue
                    parents[neighbour] = node_id
                    if neighbour == target.node_id:
                        logger.debug(
                            "Path %s -> %s found at depth %d", source, target, depth
                        )
                        return self._walk_back(uow, parents, neighbour)
                    next_frontier.append(neighbour)
            if not next_frontier:
                break
            frontier = next_frontier

        raise NotFoundError(
            f"No path between {source.name!r} and {target.name!r} "
            f"within {max_depth} hops."
        )

    def _walk_back(
        self, uow: UnitOfWork, parents: dict[str, str | None], node_id: str
    ) -> list[Person]:
        path: list[Person] = []
        current: str | None = node_id
        while current is not None:
            path.append(load_person(uow, current))
            current = parents[current]
        path.reverse()
        return path
