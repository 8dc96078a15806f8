from __future__ import annotations

import math
from collections.abc import Sequence

from ..dists import Distribution, is_null
from ..errors import RewardDataError


class Proportional:
    """Selection probability proportional to each arm's mean reward.

    Means must be finite and non-negative. Null arms count as 0 rather than as an error.
    """

    def compute_probs(self, rewards: Sequence[Distribution]) -> list[float]:
        means: list[float] = []
        for i, d in enumerate(rewards):
            if is_null(d):
                means.append(0.0)
                continue
            m = float(d.mean)
            if not math.isfinite(m):
                raise RewardDataError(f"non-finite mean reward for arm {i}: {m}")
            if m < 0:
                raise RewardDataError(f"negative mean reward for arm {i}: {m}")
            means.append(m)

        norm = sum(means)
        if norm == 0:
            return [0.0] * len(means)
        return [m / norm for m in means]
