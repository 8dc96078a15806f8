from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from ..dists import Distribution
from ..errors import ConvergenceError
from ..numint import Quadrature
from .base import non_null_arms

logger = logging.getLogger(__name__)


class Thompson:
    """Thompson sampling computed by numerical integration instead of simulation.

    The probability that arm i has the highest reward is

        P_i = integral over support(D_i) of p_i(x) * prod_{j != i} F_j(x) dx

    Each arm is integrated in its own worker task; workers only read the shared
    rewards and write their own slot of the result list. Null arms get 0 and act
    as F_j = 1 inside the other arms' products.

    An arm whose support is a single point m (a ``Point`` or a zero-sigma
    ``Normal``) has no density to integrate. It is treated as a point mass: it
    wins with probability prod_j F_j(m) over the spread-out arms, shared evenly
    with any other point mass at the same m and 0 if another one sits higher.
    """

    def __init__(self, integrator: Quadrature | None = None, max_workers: int | None = None):
        self.integrator = integrator or Quadrature()
        self.max_workers = max_workers

    def compute_probs(self, rewards: Sequence[Distribution]) -> list[float]:
        rewards = list(rewards)
        n = len(rewards)
        if n == 0:
            return []

        probs = [0.0] * n
        live = non_null_arms(rewards)
        if not live:
            return probs

        masses = {i: rewards[i].support()[0] for i in live if _is_point_mass(rewards[i])}
        spread = [i for i in live if i not in masses]
        for arm in masses:
            probs[arm] = self._point_mass_prob(rewards, spread, masses, arm)
        if not spread:
            return probs

        workers = self.max_workers or min(32, len(spread))
        errors: dict[int, BaseException] = {}
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="thompson") as pool:
            futures = {arm: pool.submit(self._compute_prob, rewards, live, arm) for arm in spread}
            for arm, fut in futures.items():
                exc = fut.exception()
                if exc is not None:
                    errors[arm] = exc
                else:
                    probs[arm] = float(fut.result())

        if errors:
            arm = min(errors)
            exc = errors[arm]
            logger.debug("thompson: %d of %d arms failed, reporting arm %d", len(errors), len(spread), arm)
            if isinstance(exc, ConvergenceError):
                raise ConvergenceError(
                    f"arm {arm}: {exc}", estimate=exc.estimate, iterations=exc.iterations, arm=arm
                ) from exc
            raise exc
        return probs

    def _compute_prob(self, rewards: list[Distribution], live: list[int], arm: int) -> float:
        lo, hi = rewards[arm].support()
        return self.integrator.integrate(self._integrand(rewards, live, arm), lo, hi)

    @staticmethod
    def _integrand(rewards: list[Distribution], live: list[int], arm: int) -> Callable[[np.ndarray], np.ndarray]:
        others = [rewards[j] for j in live if j != arm]
        own = rewards[arm]

        def f(x: np.ndarray) -> np.ndarray:
            total = np.asarray(own.density(x), dtype=np.float64)
            for d in others:
                total = total * d.cdf(x)
            return total

        return f

    @staticmethod
    def _point_mass_prob(rewards: list[Distribution], spread: list[int], masses: dict[int, float], arm: int) -> float:
        m = masses[arm]
        if any(v > m for v in masses.values()):
            return 0.0
        ties = sum(1 for v in masses.values() if v == m)
        p = 1.0
        for j in spread:
            p *= float(rewards[j].cdf(m))
        return p / ties


def _is_point_mass(d: Distribution) -> bool:
    lo, hi = d.support()
    return lo == hi
