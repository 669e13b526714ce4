"""Domain entities: Person handle and StatusUpdate."""

from dataclasses import dataclass, field
from datetime import datetime

from socnet.domain.errors import InvalidArgumentError

# Max length for a status text.
STATUS_MAX_LENGTH = 2000
NAME_MAX_LENGTH = 500


def clean_name(name: str | None) -> str:
    """Return the stripped name or raise InvalidArgumentError."""
    cleaned = (name or "").strip()
    if not cleaned:
        raise InvalidArgumentError("Person name must be non-empty.")
    if len(cleaned) > NAME_MAX_LENGTH:
        raise InvalidArgumentError(
            f"Person name must be at most {NAME_MAX_LENGTH} chars."
        )
    return cleaned


def clean_status_text(text: str | None) -> str:
    cleaned = (text or "").strip()
    if not cleaned:
        raise InvalidArgumentError("Status text must be non-empty.")
    if len(cleaned) > STATUS_MAX_LENGTH:
        raise InvalidArgumentError(
            f"Status text must be at most {STATUS_MAX_LENGTH} chars."
        )
    return cleaned


@dataclass(frozen=True)
class Person:
    """
    Opaque handle to a person node in the graph store.
    Identity is the node id; the name is carried for display and ordering.
    A handle stays valid across units of work until the person is deleted.
    """

    node_id: str
    name: str = field(default="", compare=False)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class StatusUpdate:
    """
    One status update authored by a Person. Immutable once created.
    Ordering across authors is (created_at, sequence); sequence is assigned
    at creation and breaks timestamp ties by insertion order.
    """

    node_id: str
    text: str
    created_at: datetime
    sequence: int
    author: Person

    def __post_init__(self):
        if not self.text or not self.text.strip():
            raise InvalidArgumentError("Status text must be non-empty.")

    @property
    def sort_key(self) -> tuple[datetime, int]:
        return (self.created_at, self.sequence)
