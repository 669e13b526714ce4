"""
Socnet core: clean-architecture layout.

- domain: entities (Person, StatusUpdate), graph vocabulary, errors. No outer dependencies.
- application: use cases (PersonRepository, Friendships, StatusFeed, PathFinder,
  RecommendationEngine, SocialNetwork) and ports (GraphStore, UnitOfWork).
- infrastructure: adapters (InMemoryGraphStore, Neo4jGraphStore) and settings.
"""

from socnet.application import (
    Friendships,
    GraphStore,
    PathFinder,
    PersonRepository,
    Recommendation,
    RecommendationEngine,
    SocialNetwork,
    StatusFeed,
    UnitOfWork,
)
from socnet.domain import (
    ConcurrentModificationError,
    Direction,
    DuplicateNameError,
    InvalidArgumentError,
    InvalidOperationError,
    NotFoundError,
    Person,
    SocnetError,
    StatusUpdate,
)
from socnet.infrastructure import InMemoryGraphStore, Neo4jGraphStore

__all__ = [
    "ConcurrentModificationError",
    "Direction",
    "DuplicateNameError",
    "Friendships",
    "GraphStore",
    "InMemoryGraphStore",
    "InvalidArgumentError",
    "InvalidOperationError",
    "Neo4jGraphStore",
    "NotFoundError",
    "PathFinder",
    "Person",
    "PersonRepository",
    "Recommendation",
    "RecommendationEngine",
    "SocialNetwork",
    "SocnetError",
    "StatusFeed",
    "StatusUpdate",
    "UnitOfWork",
]
