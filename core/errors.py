"""Service-layer error taxonomy.

Feature modules subclass these so views can translate them to HTTP statuses
without knowing every concrete error.
"""


class NotFoundError(Exception):
    """A referenced id does not exist."""


class InvalidStateError(Exception):
    """Illegal status transition or malformed enum value."""


class ConflictError(Exception):
    """A uniqueness rule would be violated."""
