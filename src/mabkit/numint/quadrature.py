"""Adaptive composite quadrature.

The integral over [a, b] is estimated with a fixed rule, every sub-interval is then
split and the composite sum recomputed, until two successive estimates agree within
the configured tolerances or ``max_iter`` refinements have been spent.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from ..errors import ConfigError, ConvergenceError
from .rules import GaussLegendre, Rule
from .subdividers import EquallySpaced, Interval, SubDivider

logger = logging.getLogger(__name__)

DEFAULT_MAX_ITER = 12
DEFAULT_ABS_TOL = 1e-5
DEFAULT_REL_TOL = 1e-5
DEFAULT_DEGREE = 4
DEFAULT_SUB_INTERVALS = 2

Integrand = Callable[[np.ndarray], Any]


@dataclass(frozen=True)
class QuadratureConfig:
    """Rule, subdivision scheme, iteration cap and tolerances.

    A bound set to ``math.inf`` is ignored. Non-positive tolerances can never be met
    and are rejected here, before anything is integrated.
    """

    rule: Rule = field(default_factory=lambda: GaussLegendre(DEFAULT_DEGREE))
    subdivider: SubDivider = field(default_factory=lambda: EquallySpaced(DEFAULT_SUB_INTERVALS))
    max_iter: int = DEFAULT_MAX_ITER
    abs_tol: float = DEFAULT_ABS_TOL
    rel_tol: float = DEFAULT_REL_TOL

    def __post_init__(self) -> None:
        if int(self.max_iter) < 0:
            raise ConfigError(f"max_iter must be >= 0, got {self.max_iter}")
        # written this way so NaN fails too
        if not (self.abs_tol > 0 and self.rel_tol > 0):
            raise ConfigError(
                f"integral cannot converge: tolerances must be positive, got abs_tol={self.abs_tol}, rel_tol={self.rel_tol}"
            )

    @classmethod
    def with_abs_tol(cls, abs_tol: float, **kwargs: Any) -> QuadratureConfig:
        return cls(abs_tol=abs_tol, rel_tol=math.inf, **kwargs)

    @classmethod
    def with_rel_tol(cls, rel_tol: float, **kwargs: Any) -> QuadratureConfig:
        return cls(abs_tol=math.inf, rel_tol=rel_tol, **kwargs)

    @classmethod
    def with_abs_and_rel_tol(cls, abs_tol: float, rel_tol: float, **kwargs: Any) -> QuadratureConfig:
        return cls(abs_tol=abs_tol, rel_tol=rel_tol, **kwargs)


def _rel_diff(prev: float, new: float) -> float:
    if new == 0.0:
        return 0.0 if prev == 0.0 else 1.0
    return abs(new - prev) / abs(new)


class Quadrature:
    """Integrates vectorised callables over finite intervals.

    ``f`` is called once per refinement with an array of sample points and must
    return an array of the same shape. Holds no per-call state, so one instance can
    be shared between threads.
    """

    def __init__(self, cfg: QuadratureConfig | None = None):
        self.cfg = cfg or QuadratureConfig()

    def integrate(self, f: Integrand, a: float, b: float) -> float:
        if a == b:
            return 0.0
        return self._iterative_composite(f, Interval(float(a), float(b)))

    def _iterative_composite(self, f: Integrand, interval: Interval) -> float:
        lo, hi = interval.bounds()
        result = self._composite_estimate(f, lo, hi)

        for it in range(int(self.cfg.max_iter)):
            lo, hi = self.cfg.subdivider.subdivide(lo, hi)
            prev = result
            result = self._composite_estimate(f, lo, hi)
            logger.debug("quadrature iter=%d intervals=%d estimate=%.10g", it + 1, lo.shape[0], result)
            if self._has_converged(prev, result):
                return result

        raise ConvergenceError(
            f"failed to converge on [{interval.a}, {interval.b}] after {self.cfg.max_iter} iterations "
            f"(last estimate {result!r})",
            estimate=result,
            iterations=int(self.cfg.max_iter),
        )

    def _has_converged(self, prev: float, new: float) -> bool:
        return abs(new - prev) <= self.cfg.abs_tol and _rel_diff(prev, new) <= self.cfg.rel_tol

    def _composite_estimate(self, f: Integrand, lo: np.ndarray, hi: np.ndarray) -> float:
        x = self.cfg.rule.points(lo, hi)
        w = self.cfg.rule.weights(lo, hi)
        if x.shape != w.shape:
            raise ConfigError("quadrature rule: points and weights must be the same shape")
        if x.size == 0:
            raise ConfigError("quadrature rule: points must not be empty")
        fx = np.asarray(f(x), dtype=np.float64)
        return float(np.sum(w * fx))
