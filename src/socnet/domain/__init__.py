"""Domain layer: entities, graph vocabulary and errors. No dependencies on outer layers."""

from socnet.domain.entities import Person, StatusUpdate
from socnet.domain.errors import (
    ConcurrentModificationError,
    DuplicateNameError,
    InvalidArgumentError,
    InvalidOperationError,
    NotFoundError,
    SocnetError,
)
from socnet.domain.graph import Direction

__all__ = [
    "ConcurrentModificationError",
    "Direction",
    "DuplicateNameError",
    "InvalidArgumentError",
    "InvalidOperationError",
    "NotFoundError",
    "Person",
    "SocnetError",
    "StatusUpdate",
]
