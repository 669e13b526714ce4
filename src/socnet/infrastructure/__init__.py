"""Infrastructure layer: concrete implementations of application ports."""

from socnet.infrastructure.config import (
    Settings,
    create_store,
    get_driver,
    load_settings,
)
from socnet.infrastructure.memory_store import InMemoryGraphStore, InMemoryUnitOfWork
from socnet.infrastructure.persistence.neo4j_store import (
    Neo4jGraphStore,
    Neo4jUnitOfWork,
    ensure_constraints,
)

__all__ = [
    "InMemoryGraphStore",
    "InMemoryUnitOfWork",
    "Neo4jGraphStore",
    "Neo4jUnitOfWork",
    "Settings",
    "create_store",
    "ensure_constraints",
    "get_driver",
    "load_settings",
]
