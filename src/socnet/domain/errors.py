"""Error taxonomy raised by the socnet core. Callers handle these; the core never retries."""


class SocnetError(Exception):
    """Base class for all socnet errors."""


class DuplicateNameError(SocnetError):
    """A person with the given name already exists."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Person named {name!r} already exists.")
        self.name = name


class NotFoundError(SocnetError, LookupError):
    """Lookup miss: unknown person, status update, or no path within the depth bound."""


class InvalidOperationError(SocnetError):
    """Operation not allowed in the current state (self-friending, closed unit-of-work)."""


class InvalidArgumentError(SocnetError, ValueError):
    """Argument rejected before touching the graph (empty status text, bad limit)."""


class ConcurrentModificationError(SocnetError):
    """The store detected a conflicting write from another unit-of-work."""
