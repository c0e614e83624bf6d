"""Running statistics used to tune frame pacing sleeps."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass
class WelfordState:
    """Online mean and variance, seeded with one sample of 5 ms (in seconds)."""

    mean: float = 0.005
    m2: float = 0.0
    count: int = 1

    def advance(self, value: float) -> None:
        """Add one sample."""
        self.count += 1
        delta = value - self.mean
        self.mean += delta / self.count
        self.m2 += delta * (value - self.mean)

    def std_dev(self) -> float:
        """Sample standard deviation; NaN with fewer than two samples."""
        if self.count < 2:
            return math.nan
        return math.sqrt(self.m2 / (self.count - 1))