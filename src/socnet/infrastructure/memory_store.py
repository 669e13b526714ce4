"""In-memory implementation of GraphStore (no DB).

Each unit-of-work works on a private copy of the committed graph taken at
begin (snapshot isolation, read-your-writes). Commit is optimistic: if any
node, index entry or counter written by the unit was changed by a later
commit, ConcurrentModificationError is raised and nothing is applied.
Otherwise the recorded writes are replayed onto the committed graph.
Iteration order everywhere is insertion order.

Meant for tests and small graphs: begin copies the whole graph and commit
copies it again before swapping, so every unit of work costs O(V+E).
Person.name is always indexed, whatever extra indexes are passed in.
"""

import copy
import logging
import threading
import uuid
from collections.abc import Hashable, Iterator
from typing import Any

from socnet.domain import (
    ConcurrentModificationError,
    InvalidOperationError,
    NotFoundError,
)
from socnet.domain.graph import NAME, PERSON, Direction

logger = logging.getLogger(__name__)

EdgeKey = tuple[str, str, str]

DEFAULT_INDEXES = frozenset({(PERSON, NAME)})


class _GraphState:
    """Nodes, properties, typed edges, property indexes and named counters."""

    def __init__(self, indexes: frozenset[tuple[str, str]]) -> None:
        self.indexes = indexes
        self.labels: dict[str, str] = {}
        self.props: dict[str, dict[str, Any]] = {}
        # node id -> edges touching it, in creation order
        self.edges: dict[str, dict[EdgeKey, None]] = {}
        self.index: dict[tuple[str, str, Any], str] = {}
        self.counters: dict[str, int] = {}

    def copy(self) -> "_GraphState":
        clone = _GraphState(self.indexes)
        clone.labels = dict(self.labels)
        clone.props = copy.deepcopy(self.props)
        clone.edges = {node_id: dict(e) for node_id, e in self.edges.items()}
        clone.index = dict(self.index)
        clone.counters = dict(self.counters)
        return clone

    def require(self, node_id: str) -> str:
        label = self.labels.get(node_id)
        if label is None:
            raise NotFoundError(f"No node with id {node_id!r}.")
        return label

    def create_node(self, node_id: str, label: str) -> None:
        self.labels[node_id] = label
        self.props[node_id] = {}
        self.edges[node_id] = {}

    def delete_node(self, node_id: str) -> None:
        label = self.require(node_id)
        if self.edges[node_id]:
            raise InvalidOperationError(
                f"Node {node_id!r} still has {len(self.edges[node_id])} edge(s)."
            )
        for key, value in self.props[node_id].items():
            self._unindex(label, key, value, node_id)
        del self.labels[node_id]
        del self.props[node_id]
        del self.edges[node_id]

    def set_property(self, node_id: str, key: str, value: Any) -> None:
        label = self.require(node_id)
        props = self.props[node_id]
        if key in props:
            self._unindex(label, key, props[key], node_id)
        props[key] = value
        if (label, key) in self.indexes:
            self.index.setdefault((label, key, value), node_id)

    def create_edge(self, a: str, b: str, rel_type: str) -> None:
        self.require(a)
        self.require(b)
        edge = (a, b, rel_type)
        self.edges[a][edge] = None
        self.edges[b][edge] = None

    def delete_edge(self, a: str, b: str, rel_type: str) -> bool:
        edge = (a, b, rel_type)
        if edge not in self.edges.get(a, {}):
            return False
        del self.edges[a][edge]
        self.edges[b].pop(edge, None)
        return True

    def next_sequence(self, name: str) -> int:
        value = self.counters.get(name, 0) + 1
        self.counters[name] = value
        return value

    def _unindex(self, label: str, key: str, value: Any, node_id: str) -> None:
        if self.index.get((label, key, value)) == node_id:
            del self.index[(label, key, value)]


class InMemoryUnitOfWork:
    """Unit-of-work over a private copy of the store's graph."""

    def __init__(self, store: "InMemoryGraphStore", state: _GraphState, version: int):
        self._store = store
        self._state = state
        self._begin_version = version
        self._ops: list[tuple[str, tuple]] = []
        self._touched: set[Hashable] = set()
        self._closed = False

    def __enter__(self) -> "InMemoryUnitOfWork":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if not self._closed:
            self.rollback()

    @property
    def closed(self) -> bool:
        return self._closed

    def commit(self) -> None:
        self._check_open()
        self._closed = True
        self._store._apply(self._begin_version, self._ops, self._touched)

    def rollback(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._ops.clear()
        logger.debug("Unit of work rolled back")

    def create_node(self, label: str) -> str:
        node_id = str(uuid.uuid4())
        self._write("create_node", (node_id, label), node_id)
        return node_id

    def delete_node(self, node_id: str) -> None:
        self._check_open()
        props = self._state.props.get(node_id, {})
        label = self._state.labels.get(node_id)
        touched = [("index", label, k, v) for k, v in props.items()
                   if (label, k) in self._state.indexes]
        self._write("delete_node", (node_id,), node_id, *touched)

    def has_node(self, node_id: str, label: str | None = None) -> bool:
        self._check_open()
        found = self._state.labels.get(node_id)
        return found is not None and (label is None or found == label)

    def set_property(self, node_id: str, key: str, value: Any) -> None:
        self._check_open()
        label = self._state.require(node_id)
        touched: list[Hashable] = []
        if (label, key) in self._state.indexes:
            touched.append(("index", label, key, value))
            old = self._state.props[node_id].get(key)
            if old is not None:
                touched.append(("index", label, key, old))
        self._write("set_property", (node_id, key, value), node_id, *touched)

    def get_property(self, node_id: str, key: str, default: Any = None) -> Any:
        self._check_open()
        self._state.require(node_id)
        return self._state.props[node_id].get(key, default)

    def create_edge(self, a: str, b: str, rel_type: str) -> None:
        self._write("create_edge", (a, b, rel_type), a, b)

    def delete_edge(self, a: str, b: str, rel_type: str) -> bool:
        self._check_open()
        if (a, b, rel_type) not in self._state.edges.get(a, {}):
            return False
        self._write("delete_edge", (a, b, rel_type), a, b)
        return True

    def adjacency(
        self, node_id: str, rel_type: str, direction: Direction = Direction.BOTH
    ) -> list[str]:
        self._check_open()
        self._state.require(node_id)
        out: list[str] = []
        for a, b, edge_type in self._state.edges[node_id]:
            if edge_type != rel_type:
                continue
            if a == node_id and direction in (Direction.OUTGOING, Direction.BOTH):
                out.append(b)
            elif b == node_id and direction in (Direction.INCOMING, Direction.BOTH):
                out.append(a)
        return out

    def index_lookup(self, label: str, key: str, value: Any) -> str | None:
        self._check_open()
        if (label, key) in self._state.indexes:
            return self._state.index.get((label, key, value))
        for node_id, node_label in self._state.labels.items():
            if node_label == label and self._state.props[node_id].get(key) == value:
                return node_id
        return None

    def nodes(self, label: str) -> Iterator[str]:
        self._check_open()
        # Live view: mutating labels while iterating raises RuntimeError.
        for node_id, node_label in self._state.labels.items():
            if node_label == label:
                yield node_id

    def lock_nodes(self, *node_ids: str) -> None:
        self._check_open()
        for node_id in node_ids:
            self._state.require(node_id)
        self._touched.update(node_ids)

    def next_sequence(self, name: str) -> int:
        self._write("next_sequence", (name,), ("counter", name))
        return self._state.counters[name]

    def _write(self, op: str, args: tuple, *resources: Hashable) -> None:
        self._check_open()
        getattr(self._state, op)(*args)
        self._ops.append((op, args))
        self._touched.update(resources)

    def _check_open(self) -> None:
        if self._closed:
            raise InvalidOperationError("Unit of work is already closed.")


class InMemoryGraphStore:
    """Stores the graph in memory. Safe to share between threads."""

    def __init__(self, indexes: frozenset[tuple[str, str]] = DEFAULT_INDEXES) -> None:
        self._state = _GraphState(frozenset(indexes) | DEFAULT_INDEXES)
        self._lock = threading.Lock()
        self._version = 0
        self._versions: dict[Hashable, int] = {}

    def begin_unit_of_work(self) -> InMemoryUnitOfWork:
        with self._lock:
            return InMemoryUnitOfWork(self, self._state.copy(), self._version)

    def close(self) -> None:
        pass

    def _apply(
        self, begin_version: int, ops: list[tuple[str, tuple]], touched: set[Hashable]
    ) -> None:
        with self._lock:
            conflicts = [r for r in touched if self._versions.get(r, 0) > begin_version]
            if conflicts:
                logger.info(
                    "Commit rejected: %d resource(s) changed concurrently", len(conflicts)
                )
                raise ConcurrentModificationError(
                    f"{len(conflicts)} resource(s) were modified by another unit of work."
                )
            if not ops:
                return
            staged = self._state.copy()
            try:
                for op, args in ops:
                    getattr(staged, op)(*args)
            except (NotFoundError, InvalidOperationError) as e:
                raise ConcurrentModificationError(str(e)) from e
            self._state = staged
            self._version += 1
            for resource in touched:
                self._versions[resource] = self._version
