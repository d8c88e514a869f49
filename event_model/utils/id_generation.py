import logging
import threading
from typing import Optional

logger = logging.getLogger(__name__)

ID_PREFIX = "EMP"
ID_WIDTH = 6


def format_employee_id(sequence: int) -> str:
    """Format a sequence number as an employee ID, e.g. 7 -> 'EMP000007'."""
    if sequence < 1:
        raise ValueError(f"Employee sequence numbers start at 1, got {sequence}")
    return f"{ID_PREFIX}{sequence:0{ID_WIDTH}d}"


class EmployeeIdIssuer:
    """Monotonic employee ID counter.

    Each simulation run owns its own issuer so independent runs (and tests
    running in parallel) never share a sequence. IDs are never reused; reset()
    starts the sequence over for a fresh run.
    """

    def __init__(self, start: int = 0):
        if start < 0:
            raise ValueError(f"Counter start must be non-negative, got {start}")
        self._current = start
        self._lock = threading.Lock()

    @property
    def issued(self) -> int:
        """Number of the most recently issued ID (0 if none yet)."""
        return self._current

    def next_id(self) -> str:
        with self._lock:
            self._current += 1
            sequence = self._current
        if sequence >= 10 ** ID_WIDTH:
            logger.warning(
                f"Employee sequence {sequence} exceeds {ID_WIDTH} digits; IDs will be wider than usual"
            )
        return format_employee_id(sequence)

    def reset(self) -> None:
        with self._lock:
            self._current = 0


_default_issuer = EmployeeIdIssuer()


def get_unique_id(issuer: Optional[EmployeeIdIssuer] = None) -> str:
    """Issue the next ID from `issuer`, or from the process-wide default issuer."""
    return (issuer or _default_issuer).next_id()


def reset_unique_id(issuer: Optional[EmployeeIdIssuer] = None) -> None:
    (issuer or _default_issuer).reset()
