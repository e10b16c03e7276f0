"""Moving-average signal over a bounded price window."""

from __future__ import annotations

import math
from collections import deque
from typing import Iterable, Iterator, Sequence


def calculate_sma(prices: Sequence[float]) -> float:
    """Calculate the Simple Moving Average of a price sequence.

    Args:
        prices: Price observations (any order)

    Returns:
        Arithmetic mean, or NaN for an empty sequence
    """
    if len(prices) == 0:
        return math.nan
    return sum(prices) / len(prices)


class PriceWindow:
    """Fixed-size FIFO window of price observations.

    The oldest observation is evicted once more than ``max_size``
    observations have been appended. Iteration yields prices in
    arrival order (oldest first).
    """

    def __init__(self, max_size: int, prices: Iterable[float] = ()) -> None:
        """Initialize the window.

        Args:
            max_size: Maximum number of observations kept
            prices: Optional initial observations, oldest first
        """
        if max_size <= 0:
            raise ValueError("max_size must be positive")
        self.max_size = max_size
        self.values: deque[float] = deque(prices, maxlen=max_size)

    def append(self, price: float) -> None:
        """Append the newest observation, evicting the oldest on overflow."""
        self.values.append(price)

    def sma(self) -> float:
        """Return the mean of the current window (NaN when empty)."""
        return calculate_sma(self.values)

    def is_full(self) -> bool:
        return len(self.values) == self.max_size

    def snapshot(self) -> list[float]:
        """Return a copy of the window contents, oldest first."""
        return list(self.values)

    def reset(self) -> None:
        """Drop all observations."""
        self.values.clear()

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[float]:
        return iter(self.values)


__all__ = [
    "PriceWindow",
    "calculate_sma",
]
