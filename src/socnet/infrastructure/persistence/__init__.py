from socnet.infrastructure.persistence.neo4j_store import (
    Neo4jGraphStore,
    Neo4jUnitOfWork,
    ensure_constraints,
)

__all__ = ["Neo4jGraphStore", "Neo4jUnitOfWork", "ensure_constraints"]
