"""Settings from environment variables, with .env loaded from the repo root or CWD."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv
from neo4j import GraphDatabase

from socnet.domain import InvalidArgumentError
from socnet.infrastructure.memory_store import InMemoryGraphStore
from socnet.infrastructure.persistence.neo4j_store import Neo4jGraphStore

logger = logging.getLogger(__name__)

STORE_MEMORY = "memory"
STORE_NEO4J = "neo4j"

# src/socnet/infrastructure/config.py -> repo root
_REPO_ROOT = Path(__file__).resolve().parent.parent.parent.parent


def load_env() -> Path | None:
    """Load the first .env found (repo root, then CWD). Returns its path or None."""
    for path in (_REPO_ROOT / ".env", Path.cwd() / ".env"):
        if path.exists():
            load_dotenv(path)
            return path
    return None


@dataclass(frozen=True)
class Settings:
    store: str = STORE_MEMORY
    neo4j_uri: str = "bolt://localhost:7687"
    neo4j_user: str = "neo4j"
    neo4j_password: str = "password"
    neo4j_database: str | None = None


def load_settings(*, env_file: bool = True) -> Settings:
    if env_file:
        load_env()
    store = os.environ.get("SOCNET_STORE", STORE_MEMORY).strip().lower()
    if store not in (STORE_MEMORY, STORE_NEO4J):
        raise InvalidArgumentError(
            f"SOCNET_STORE must be {STORE_MEMORY!r} or {STORE_NEO4J!r}, got {store!r}."
        )
    return Settings(
        store=store,
        neo4j_uri=os.environ.get("NEO4J_URI", "bolt://localhost:7687").strip(),
        neo4j_user=os.environ.get("NEO4J_USER", "neo4j").strip(),
        neo4j_password=os.environ.get("NEO4J_PASSWORD", "password").strip(),
        neo4j_database=os.environ.get("NEO4J_DATABASE", "").strip() or None,
    )


def get_driver(settings: Settings):
    return GraphDatabase.driver(
        settings.neo4j_uri, auth=(settings.neo4j_user, settings.neo4j_password)
    )


def create_store(settings: Settings | None = None):
    """Build the GraphStore selected by settings.store."""
    settings = settings or load_settings()
    if settings.store == STORE_NEO4J:
        logger.info("Using Neo4j store at %s", settings.neo4j_uri)
        store = Neo4jGraphStore(get_driver(settings), database=settings.neo4j_database)
        store.ensure_constraints()
        return store
    logger.info("Using in-memory store")
    return InMemoryGraphStore()
