"""Exceptions raised by ObjectVisitor."""

from typing import Any, Optional


class ObjectVisitorError(Exception):
    """Base class for all ObjectVisitor errors."""
    pass


class ConfigurationError(ObjectVisitorError):
    """Raised when a VisitorConfig or option set is invalid."""
    pass


class MemberAccessError(ObjectVisitorError):
    """Raised when reading a field or accessor aborts the traversal.

    The original failure is chained as ``__cause__``.
    """

    def __init__(self, owner: Any, member: str, origin: Optional[Any] = None):
        self.owner = owner
        self.member = member
        self.origin = origin
        super().__init__(
            f"Failed to read {member!r} of {type(owner).__name__} instance"
        )
