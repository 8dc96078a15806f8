from __future__ import annotations

from collections.abc import Sequence

from ..dists import Distribution
from ..errors import ConfigError
from .base import args_max, non_null_arms


class EpsilonGreedy:
    """Epsilon-greedy arm selection probabilities.

    Null arms get probability 0 and the rest are computed as if they weren't there.
    Arms tied for the best mean split the greedy share evenly.
    """

    def __init__(self, epsilon: float):
        self.epsilon = float(epsilon)
        self._validate()

    def _validate(self) -> None:
        if not 0.0 <= self.epsilon <= 1.0:
            raise ConfigError(f"invalid epsilon value: {self.epsilon}. Must be between 0 and 1")

    def compute_probs(self, rewards: Sequence[Distribution]) -> list[float]:
        self._validate()
        rewards = list(rewards)
        probs = [0.0] * len(rewards)

        live = non_null_arms(rewards)
        if not live:
            return probs

        means = [rewards[i].mean for i in live]
        best = {live[i] for i in args_max(means)}
        explore = self.epsilon / len(live)
        exploit = (1.0 - self.epsilon) / len(best)
        for i in live:
            probs[i] = exploit + explore if i in best else explore
        return probs
