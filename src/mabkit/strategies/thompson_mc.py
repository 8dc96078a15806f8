from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from ..dists import Distribution
from ..errors import ConfigError
from .base import non_null_arms


class ThompsonMC:
    """Monte-Carlo Thompson sampling.

    Only a cross-check for ``Thompson``: it converges to the same probabilities but
    is far too slow for online use. Draws are taken ``batch_size`` iterations at a
    time; ties share the win evenly.
    """

    def __init__(self, num_iterations: int, seed: int | None = None, batch_size: int = 10_000):
        if int(num_iterations) < 1:
            raise ConfigError(f"ThompsonMC: num_iterations must be >= 1, got {num_iterations}")
        if int(batch_size) < 1:
            raise ConfigError(f"ThompsonMC: batch_size must be >= 1, got {batch_size}")
        self.num_iterations = int(num_iterations)
        self.batch_size = int(batch_size)
        self.seed = seed
        self.rng = np.random.default_rng(seed)

    def set_seed(self, seed: int) -> None:
        self.seed = int(seed)
        self.rng = np.random.default_rng(self.seed)

    def compute_probs(self, rewards: Sequence[Distribution]) -> list[float]:
        rewards = list(rewards)
        probs = [0.0] * len(rewards)
        live = non_null_arms(rewards)
        if not live:
            return probs

        counts = np.zeros(len(live), dtype=np.float64)
        done = 0
        while done < self.num_iterations:
            size = min(self.batch_size, self.num_iterations - done)
            draws = np.column_stack([np.asarray(rewards[i].sample(self.rng, size=size), dtype=np.float64) for i in live])
            is_max = draws == draws.max(axis=1, keepdims=True)
            counts += (is_max / is_max.sum(axis=1, keepdims=True)).sum(axis=0)
            done += size

        for k, i in enumerate(live):
            probs[i] = float(counts[k] / self.num_iterations)
        return probs
