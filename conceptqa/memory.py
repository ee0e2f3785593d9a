"""
Short-term memory of recent valid answers.
"""

from collections import deque
from typing import Deque, List, Optional

from .results import AnswerResult
from .validation import validate_positive_int

DEFAULT_CAPACITY = 3


class DynamicMemoryBuffer:
    """
    FIFO buffer holding the last ``capacity`` results.

    Example:
        >>> buffer = DynamicMemoryBuffer(capacity=2)
        >>> for text in ("a", "b", "c"):
        ...     buffer.add(AnswerResult(text, text, 0, 1, 0.5))
        >>> [r.answer for r in buffer.results]
        ['b', 'c']
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        validate_positive_int(capacity, 'capacity')
        self.capacity = capacity
        self._buffer: Deque[AnswerResult] = deque(maxlen=capacity)

    def add(self, result: Optional[AnswerResult]) -> None:
        """Append a result, evicting the oldest when full; None is ignored."""
        if result is None:
            return
        self._buffer.append(result)

    @property
    def results(self) -> List[AnswerResult]:
        """Oldest first (a copy)."""
        return list(self._buffer)

    def clear(self) -> None:
        self._buffer.clear()

    def __len__(self) -> int:
        return len(self._buffer)

