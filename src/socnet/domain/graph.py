"""Graph vocabulary shared by the core and the store adapters."""

from enum import Enum

PERSON = "Person"
STATUS_UPDATE = "StatusUpdate"

# Undirected; stored once, read with Direction.BOTH.
FRIEND = "FRIEND"
# Person -> newest StatusUpdate.
STATUS = "STATUS"
# StatusUpdate -> next older StatusUpdate.
NEXT = "NEXT"

NAME = "name"
TEXT = "text"
CREATED_AT = "created_at"
SEQUENCE = "sequence"

STATUS_SEQUENCE = "status_update"


class Direction(str, Enum):
    OUTGOING = "outgoing"
    INCOMING = "incoming"
    BOTH = "both"
