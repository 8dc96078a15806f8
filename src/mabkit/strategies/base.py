from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from ..dists import Distribution, is_null


class Strategy(Protocol):
    """Turns one reward distribution per arm into arm-selection probabilities.

    The output has the same length and order as the input.
    """

    def compute_probs(self, rewards: Sequence[Distribution]) -> list[float]:
        ...


def args_max(values: Sequence[float]) -> list[int]:
    """Indices of every entry equal to the maximum (ties kept in order)."""
    best: list[int] = []
    best_v = -float("inf")
    for i, v in enumerate(values):
        if v > best_v:
            best = [i]
            best_v = v
        elif v == best_v:
            best.append(i)
    return best


def non_null_arms(rewards: Sequence[Distribution]) -> list[int]:
    return [i for i, d in enumerate(rewards) if not is_null(d)]
