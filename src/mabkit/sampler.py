"""Deterministic weighted sampling.

The same unit string and weights always give the same arm, in any process: the
unit is hashed with SHA-1, reduced to one of ``num_buckets`` buckets, and the
buckets are split between arms in proportion to their weights.
"""

from __future__ import annotations

import hashlib
import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from .errors import ConfigError, SamplingError

DEFAULT_NUM_BUCKETS = 1000


class Sampler(Protocol):
    def sample(self, probs: Sequence[float], unit: str) -> int:
        ...


@dataclass(frozen=True)
class SamplerConfig:
    num_buckets: int = DEFAULT_NUM_BUCKETS

    def __post_init__(self) -> None:
        if int(self.num_buckets) < 1:
            raise ConfigError(f"num_buckets must be >= 1, got {self.num_buckets}")


class Sha1Sampler:
    def __init__(self, cfg: SamplerConfig | None = None):
        self.cfg = cfg or SamplerConfig()

    @property
    def num_buckets(self) -> int:
        return int(self.cfg.num_buckets)

    def bucket(self, unit: str) -> int:
        digest = hashlib.sha1(unit.encode("utf-8")).hexdigest()
        # first 8 bytes minus the last hex digit: 60 bits
        return int(digest[:15], 16) % self.num_buckets

    def sample(self, probs: Sequence[float], unit: str) -> int:
        return self.index_for_bucket(probs, self.bucket(unit))

    def index_for_bucket(self, weights: Sequence[float], bucket: int) -> int:
        """Arm owning ``bucket`` when the buckets are split by ``weights``."""
        weights = [float(w) for w in weights]
        for i, w in enumerate(weights):
            if not math.isfinite(w) or w < 0:
                raise SamplingError(f"weight for arm {i} must be finite and >= 0, got {w}")
        total = sum(weights)
        if not total > 0:
            raise SamplingError(f"sum(weights) must be positive. got={total:0.2f}")

        n = float(self.num_buckets)
        edge = -1.0
        for i, w in enumerate(weights):
            edge += w * n / total
            if edge >= bucket:
                return i

        # float round-off can leave the last edge a hair below num_buckets - 1
        return max(i for i, w in enumerate(weights) if w > 0)
