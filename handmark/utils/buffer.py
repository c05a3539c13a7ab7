from typing import Optional

import numpy as np


class RingBuffer:
    """
    Fixed-capacity window over the last `capacity` float samples.
    Once full, each new sample overwrites the oldest one.
    """

    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")

        self.capacity = capacity
        self._data = np.zeros(capacity, dtype=float)
        self._next = 0
        self._count = 0

    def add(self, value: float) -> None:
        self._data[self._next] = value
        self._next = (self._next + 1) % self.capacity
        self._count = min(self._count + 1, self.capacity)

    def mean(self) -> Optional[float]:
        """
        Mean of the samples held, None when empty.
        """
        if self._count == 0:
            return None
        return float(self._data[: self._count].mean())

    def __len__(self) -> int:
        return self._count
