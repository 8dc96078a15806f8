from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import numpy as np

from ..errors import ConfigError


@dataclass(frozen=True)
class Interval:
    """Finite integration range [a, b]."""
    a: float
    b: float

    def bounds(self) -> tuple[np.ndarray, np.ndarray]:
        return np.array([self.a], dtype=np.float64), np.array([self.b], dtype=np.float64)


class SubDivider(Protocol):
    """Refines a partition given as parallel arrays of lower and upper bounds."""

    def subdivide(self, lo: np.ndarray, hi: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        ...


@dataclass(frozen=True)
class EquallySpaced:
    """Splits every interval into ``n`` equal pieces, keeping left-to-right order.

    [0, 1], [1, 2] with n=2 becomes [0, .5], [.5, 1], [1, 1.5], [1.5, 2].
    """

    n: int = 2

    def __post_init__(self) -> None:
        if int(self.n) < 2:
            raise ConfigError(f"EquallySpaced: need at least 2 sub-intervals, got {self.n}")

    def subdivide(self, lo: np.ndarray, hi: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        n = int(self.n)
        h = (hi - lo) / n
        steps = np.arange(n, dtype=np.float64)
        new_lo = (lo[:, None] + steps * h[:, None]).reshape(-1)
        new_hi = (lo[:, None] + (steps + 1) * h[:, None]).reshape(-1)
        return new_lo, new_hi
