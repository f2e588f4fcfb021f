"""Abstract sequence that hands out order numbers.

The counter behind it is never exposed for direct mutation.  Callers
reserve the next value for the duration of a block; the counter only
advances when the block completes, so a failed write neither reuses nor
skips a number.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager


class OrderNumberSequence(ABC):

    @abstractmethod
    def reserve(self) -> AbstractContextManager[int]:
        """Reserve the next value; advance the counter if the block succeeds.

        Reservations are serialized: a second caller waits until the first
        block has finished.
        """

    @abstractmethod
    def peek(self) -> int:
        """Return the value the next reservation will receive."""
