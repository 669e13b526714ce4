"""Application layer: use cases and ports. Depends only on domain."""

from socnet.application.friendships import Friendships
from socnet.application.path_finder import PathFinder
from socnet.application.person_repository import PersonRepository
from socnet.application.ports import GraphStore, UnitOfWork
from socnet.application.recommendation import Recommendation, RecommendationEngine
from socnet.application.social_network import SocialNetwork
from socnet.application.status_feed import StatusFeed

__all__ = [
    "Friendships",
    "GraphStore",
    "PathFinder",
    "PersonRepository",
    "Recommendation",
    "RecommendationEngine",
    "SocialNetwork",
    "StatusFeed",
    "UnitOfWork",
]
