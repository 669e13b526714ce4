"""Application ports (interfaces). Implemented by infrastructure adapters."""

from collections.abc import Iterator
from typing import Any, Protocol

from socnet.domain.graph import Direction


class UnitOfWork(Protocol):
    """Scoped, atomic sequence of reads and writes against the graph store.

    Reads observe this unit's own uncommitted writes. Leaving the `with`
    block without commit() rolls back. Write conflicts with other units
    surface as ConcurrentModificationError, at the latest on commit().
    """

    def __enter__(self) -> "UnitOfWork": ...

    def __exit__(self, exc_type, exc, tb) -> None: ...

    def commit(self) -> None:
        """Make all writes visible to later units of work."""
        ...

    def rollback(self) -> None:
        """Discard all writes. Safe to call more than once."""
        ...

    def create_node(self, label: str) -> str:
        """Create a node and return its id."""
        ...

    def delete_node(self, node_id: str) -> None:
        """Delete a node. Raises InvalidOperationError while it still has edges."""
        ...

    def has_node(self, node_id: str, label: str | None = None) -> bool:
        ...

    def set_property(self, node_id: str, key: str, value: Any) -> None:
        ...

    def get_property(self, node_id: str, key: str, default: Any = None) -> Any:
        ...

    def create_edge(self, a: str, b: str, rel_type: str) -> None:
        """Create a directed a->b edge of rel_type."""
        ...

    def delete_edge(self, a: str, b: str, rel_type: str) -> bool:
        """Delete the a->b edge of rel_type. Returns False if there was none."""
        ...

    def adjacency(
        self, node_id: str, rel_type: str, direction: Direction = Direction.BOTH
    ) -> list[str]:
        """Return neighbour ids over rel_type edges, in edge-creation order."""
        ...

    def index_lookup(self, label: str, key: str, value: Any) -> str | None:
        """Return the id of the node with label whose key equals value, or None."""
        ...

    def nodes(self, label: str) -> Iterator[str]:
        """Iterate ids of all nodes with label, in creation order."""
        ...

    def lock_nodes(self, *node_ids: str) -> None:
        """Claim the nodes for writing, so reads made after this stay valid until commit.

        Raises NotFoundError for a missing node. A competing unit of work either
        waits for this one or fails with ConcurrentModificationError.
        """
        ...

    def next_sequence(self, name: str) -> int:
        """Return the next value of a named, store-wide counter (starts at 1)."""
        ...


class GraphStore(Protocol):
    """Graph storage capability consumed by the core."""

    def begin_unit_of_work(self) -> UnitOfWork:
        ...

    def close(self) -> None:
        ...
