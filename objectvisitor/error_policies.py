"""
Error handling policies for ObjectVisitor.

Reading a field or invoking an accessor can fail. Instead of hard-wiring
what happens per member kind, the traversal hands the failure to a
policy, configured separately for fields and for accessors.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List

from .core.key import Slot
from .errors import MemberAccessError

logger = logging.getLogger(__name__)


class _Absent:
    """Sentinel meaning "this member yields no value and is dropped"."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'ABSENT'

    def __bool__(self) -> bool:
        return False


ABSENT = _Absent()


def _error_record(error: Exception, slot: Slot) -> Dict[str, Any]:
    return {
        'owner_type': type(slot.key.owner).__name__,
        'member': slot.key.name,
        'origin': slot.key.origin,
        'error': error,
        'error_type': type(error).__name__,
        'error_message': str(error),
    }


class ErrorPolicy(ABC):
    """
    Base class for member read error policies.

    Subclasses decide whether a failed read aborts the traversal or
    drops the member.
    """

    @abstractmethod
    def handle(self, error: Exception, slot: Slot) -> Any:
        """
        Handle a failure raised while reading a member.

        Args:
            error: The exception that was raised
            slot: The field or accessor slot being read

        Returns:
            ABSENT to drop the member, or a replacement value.

        Raises:
            MemberAccessError: To abort the whole traversal.
        """
        pass

    def reset(self) -> None:
        """Forget state from a previous traversal. Called before each one."""
        pass


class FailFastPolicy(ErrorPolicy):
    """
    Policy that aborts the traversal on the first failure.

    This is the default for structural fields.
    """

    def handle(self, error: Exception, slot: Slot) -> Any:
        raise MemberAccessError(slot.key.owner, str(slot.key.name),
                                slot.key.origin) from error


class ContinueOnErrorsPolicy(ErrorPolicy):
    """
    Policy that logs failures, records them and drops the member.

    This is the default for accessors.
    """

    def __init__(self, verbose: bool = True):
        """
        Initialize the policy.

        Args:
            verbose: If True, log a warning for each failure
        """
        self.errors: List[Dict[str, Any]] = []
        self.verbose = verbose

    def handle(self, error: Exception, slot: Slot) -> Any:
        self.errors.append(_error_record(error, slot))
        if self.verbose:
            logger.warning("Skipping %s %r of %s: %s: %s",
                           slot.key.origin.value, slot.key.name,
                           type(slot.key.owner).__name__,
                           type(error).__name__, error)
        return ABSENT

    def reset(self) -> None:
        self.errors = []

    def get_statistics(self) -> dict:
        """
        Get statistics about errors encountered.

        Returns:
            Dictionary with error counts and details
        """
        by_type: Dict[str, int] = {}
        for record in self.errors:
            by_type[record['error_type']] = by_type.get(record['error_type'], 0) + 1
        return {
            'total_errors': len(self.errors),
            'by_type': by_type,
            'errors': self.errors,
        }


class CollectErrorsPolicy(ContinueOnErrorsPolicy):
    """
    Policy that collects all failures without logging.

    Useful for presenting every problem at the end of a traversal.
    """

    def __init__(self):
        super().__init__(verbose=False)


class ThresholdPolicy(ErrorPolicy):
    """
    Policy that drops failing members up to a threshold, then aborts.

    Some failures may be expected, but too many indicate a systemic
    problem that should halt the traversal.
    """

    def __init__(self, max_errors: int = 10, verbose: bool = True):
        """
        Initialize threshold policy.

        Args:
            max_errors: Maximum failures to tolerate before aborting
            verbose: If True, log a warning for each tolerated failure
        """
        self.max_errors = max_errors
        self.error_count = 0
        self.verbose = verbose
        self.errors: List[Exception] = []

    def reset(self) -> None:
        self.error_count = 0
        self.errors = []

    def handle(self, error: Exception, slot: Slot) -> Any:
        self.error_count += 1
        self.errors.append(error)

        if self.error_count > self.max_errors:
            raise MemberAccessError(slot.key.owner, str(slot.key.name),
                                    slot.key.origin) from error

        if self.verbose:
            logger.warning("[%d/%d] Skipping %r of %s: %s",
                           self.error_count, self.max_errors, slot.key.name,
                           type(slot.key.owner).__name__, error)
        return ABSENT
