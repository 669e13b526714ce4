"""Neo4j implementation of GraphStore.
Every node carries the :Node label and a uuid `id` property next to its own label,
e.g. (:Node:Person {id, name}). Edges are plain typed relationships. Node and
relationship creation time is kept in `_created` to give adjacency and label
scans a stable insertion order. One unit of work is one explicit driver transaction.
"""

import logging
import re
import time
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from neo4j.exceptions import ConstraintError, TransientError

from socnet.domain import (
    ConcurrentModificationError,
    InvalidArgumentError,
    InvalidOperationError,
    NotFoundError,
)
from socnet.domain.graph import NAME, PERSON, Direction

logger = logging.getLogger(__name__)

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

_NODE_ID_CONSTRAINT_QUERY = """
CREATE CONSTRAINT node_id_unique IF NOT EXISTS
FOR (n:Node) REQUIRE n.id IS UNIQUE
"""

_PERSON_NAME_CONSTRAINT_QUERY = f"""
CREATE CONSTRAINT person_name_unique IF NOT EXISTS
FOR (p:{PERSON}) REQUIRE p.{NAME} IS UNIQUE
"""

_COUNTER_NAME_CONSTRAINT_QUERY = """
CREATE CONSTRAINT counter_name_unique IF NOT EXISTS
FOR (c:Counter) REQUIRE c.name IS UNIQUE
"""

_HAS_NODE_QUERY = """
MATCH (n:Node {id: $id})
RETURN labels(n) AS labels
"""

_DEGREE_QUERY = """
MATCH (n:Node {id: $id})
OPTIONAL MATCH (n)-[r]-()
RETURN n.id AS id, count(r) AS degree
"""

_DELETE_NODE_QUERY = """
MATCH (n:Node {id: $id})
DELETE n
"""

_SET_PROPERTY_QUERY = """
MATCH (n:Node {id: $id})
SET n += $props
RETURN n.id AS id
"""

_GET_PROPERTY_QUERY = """
MATCH (n:Node {id: $id})
RETURN n[$key] AS value
"""

# Ids are sorted by the caller so competing transactions lock in the same order.
_LOCK_NODES_QUERY = """
UNWIND $ids AS id
MATCH (n:Node {id: id})
SET n._lock = true
RETURN count(n) AS locked
"""

_NEXT_SEQUENCE_QUERY = """
MERGE (c:Counter {name: $name})
ON CREATE SET c.value = 0
SET c.value = c.value + 1
RETURN c.value AS value
"""

_PATTERNS = {
    Direction.OUTGOING: "(n)-[r:{rel}]->(m:Node)",
    Direction.INCOMING: "(n)<-[r:{rel}]-(m:Node)",
    Direction.BOTH: "(n)-[r:{rel}]-(m:Node)",
}


def _identifier(value: str) -> str:
    """Labels, relationship types and property keys go into Cypher text; identifiers only."""
    if not _IDENTIFIER.match(value or ""):
        raise InvalidArgumentError(f"Invalid Cypher identifier: {value!r}")
    return value


def _index_lookup_query(label: str, key: str) -> str:
    # Inline property map so the planner can seek on the (label, key) index.
    return f"""
    MATCH (n:{_identifier(label)} {{{_identifier(key)}: $value}})
    RETURN n.id AS id
    ORDER BY n._created
    LIMIT 1
    """


def ensure_constraints(driver, database: str | None = None) -> None:
    """Create unique constraints on Node(id), Person(name) and Counter(name) if missing."""
    with driver.session(database=database) as session:
        session.run(_NODE_ID_CONSTRAINT_QUERY)
        session.run(_PERSON_NAME_CONSTRAINT_QUERY)
        session.run(_COUNTER_NAME_CONSTRAINT_QUERY)


@contextmanager
def _translate_errors():
    try:
        yield
    except TransientError as e:
        logger.info("Neo4j transient error: %s", e)
        raise ConcurrentModificationError(str(e)) from e
    except ConstraintError as e:
        logger.info("Neo4j constraint violation: %s", e)
        raise ConcurrentModificationError(str(e)) from e


class Neo4jUnitOfWork:
    """One explicit transaction on its own session."""

    def __init__(self, session) -> None:
        self._session = session
        self._tx = session.begin_transaction()
        self._closed = False

    def __enter__(self) -> "Neo4jUnitOfWork":
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
        try:
            with _translate_errors():
                self._tx.commit()
        finally:
            self._session.close()

    def rollback(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._tx.rollback()
        finally:
            self._session.close()

    def create_node(self, label: str) -> str:
        node_id = str(uuid.uuid4())
        self._run(
            f"CREATE (n:Node:{_identifier(label)} {{id: $id, _created: $created}})",
            id=node_id,
            created=time.time_ns(),
        )
        return node_id

    def delete_node(self, node_id: str) -> None:
        record = self._single(_DEGREE_QUERY, id=node_id)
        if record is None:
            raise NotFoundError(f"No node with id {node_id!r}.")
        if record["degree"]:
            raise InvalidOperationError(
                f"Node {node_id!r} still has {record['degree']} edge(s)."
            )
        self._run(_DELETE_NODE_QUERY, id=node_id)

    def has_node(self, node_id: str, label: str | None = None) -> bool:
        record = self._single(_HAS_NODE_QUERY, id=node_id)
        if record is None:
            return False
        return label is None or label in record["labels"]

    def set_property(self, node_id: str, key: str, value: Any) -> None:
        if self._single(_SET_PROPERTY_QUERY, id=node_id, props={key: value}) is None:
            raise NotFoundError(f"No node with id {node_id!r}.")

    def get_property(self, node_id: str, key: str, default: Any = None) -> Any:
        record = self._single(_GET_PROPERTY_QUERY, id=node_id, key=key)
        if record is None:
            raise NotFoundError(f"No node with id {node_id!r}.")
        value = record["value"]
        return default if value is None else value

    def create_edge(self, a: str, b: str, rel_type: str) -> None:
        record = self._single(
            f"""
            MATCH (a:Node {{id: $a}}), (b:Node {{id: $b}})
            CREATE (a)-[r:{_identifier(rel_type)} {{_created: $created}}]->(b)
            RETURN count(r) AS created
            """,
            a=a,
            b=b,
            created=time.time_ns(),
        )
        if record is None or not record["created"]:
            raise NotFoundError(f"Cannot link {a!r} -> {b!r}: node not found.")

    def delete_edge(self, a: str, b: str, rel_type: str) -> bool:
        record = self._single(
            f"""
            MATCH (:Node {{id: $a}})-[r:{_identifier(rel_type)}]->(:Node {{id: $b}})
            WITH r LIMIT 1
            DELETE r
            RETURN count(r) AS deleted
            """,
            a=a,
            b=b,
        )
        return bool(record and record["deleted"])

    def adjacency(
        self, node_id: str, rel_type: str, direction: Direction = Direction.BOTH
    ) -> list[str]:
        pattern = _PATTERNS[Direction(direction)].format(rel=_identifier(rel_type))
        records = self._fetch(
            f"""
            MATCH (n:Node {{id: $id}})
            OPTIONAL MATCH {pattern}
            RETURN m.id AS id, r._created AS created
            ORDER BY created, elementId(r)
            """,
            id=node_id,
        )
        if not records:
            raise NotFoundError(f"No node with id {node_id!r}.")
        return [rec["id"] for rec in records if rec["id"] is not None]

    def index_lookup(self, label: str, key: str, value: Any) -> str | None:
        record = self._single(_index_lookup_query(label, key), value=value)
        return record["id"] if record else None

    def nodes(self, label: str) -> Iterator[str]:
        records = self._fetch(
            f"MATCH (n:Node:{_identifier(label)}) RETURN n.id AS id ORDER BY n._created, n.id"
        )
        for rec in records:
            yield rec["id"]

    def lock_nodes(self, *node_ids: str) -> None:
        ids = sorted(set(node_ids))
        record = self._single(_LOCK_NODES_QUERY, ids=ids)
        if record is None or record["locked"] != len(ids):
            raise NotFoundError(f"Cannot lock {ids!r}: node not found.")

    def next_sequence(self, name: str) -> int:
        return self._single(_NEXT_SEQUENCE_QUERY, name=name)["value"]

    def _run(self, query: str, **params) -> None:
        self._check_open()
        with _translate_errors():
            self._tx.run(query, **params).consume()

    def _single(self, query: str, **params):
        self._check_open()
        with _translate_errors():
            return self._tx.run(query, **params).single()

    def _fetch(self, query: str, **params) -> list:
        self._check_open()
        with _translate_errors():
            return list(self._tx.run(query, **params))

    def _check_open(self) -> None:
        if self._closed:
            raise InvalidOperationError("Unit of work is already closed.")


class Neo4jGraphStore:
    """GraphStore over a neo4j driver. The store owns the driver and closes it."""

    def __init__(self, driver, database: str | None = None) -> None:
        self._driver = driver
        self._database = database

    def begin_unit_of_work(self) -> Neo4jUnitOfWork:
        return Neo4jUnitOfWork(self._driver.session(database=self._database))

    def ensure_constraints(self) -> None:
        ensure_constraints(self._driver, self._database)

    def close(self) -> None:
        self._driver.close()
