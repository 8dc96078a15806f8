"""Reward distributions.

Every strategy consumes rewards through the small ``Distribution`` capability set:
mean, cdf, density, random draws and a finite support used as integration bounds.
``cdf`` and ``density`` accept scalars or numpy arrays.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

import numpy as np
from scipy import stats

from .errors import RewardDataError

# Normal rewards are truncated at mu +/- NORMAL_SUPPORT_WIDTH * sigma for integration.
NORMAL_SUPPORT_WIDTH = 4.0

_default_rng = np.random.default_rng()


def _out(v: Any) -> Any:
    # scalar in, float out; arrays pass through
    if np.ndim(v) == 0:
        return float(v)
    return v


@runtime_checkable
class Distribution(Protocol):
    @property
    def mean(self) -> float:
        ...

    def cdf(self, x: Any) -> Any:
        ...

    def density(self, x: Any) -> Any:
        ...

    def sample(self, rng: np.random.Generator | None = None, size: int | None = None) -> Any:
        ...

    def support(self) -> tuple[float, float]:
        ...

    def to_dict(self) -> dict[str, Any]:
        ...


@dataclass(frozen=True)
class Normal:
    mu: float
    sigma: float
    _rv: Any = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.sigma >= 0.0:
            raise RewardDataError(f"Normal: sigma must be >= 0, got {self.sigma}")
        rv = stats.norm(loc=float(self.mu), scale=float(self.sigma)) if self.sigma > 0 else None
        object.__setattr__(self, "_rv", rv)

    @property
    def mean(self) -> float:
        return float(self.mu)

    def cdf(self, x: Any) -> Any:
        if self._rv is None:
            return _out(np.where(np.asarray(x, dtype=float) >= self.mu, 1.0, 0.0))
        return _out(self._rv.cdf(x))

    def density(self, x: Any) -> Any:
        if self._rv is None:
            return _out(np.where(np.asarray(x, dtype=float) == self.mu, np.nan, 0.0))
        return _out(self._rv.pdf(x))

    def sample(self, rng: np.random.Generator | None = None, size: int | None = None) -> Any:
        g = rng or _default_rng
        return _out(g.normal(self.mu, self.sigma, size=size))

    def support(self) -> tuple[float, float]:
        w = NORMAL_SUPPORT_WIDTH * self.sigma
        return float(self.mu - w), float(self.mu + w)

    def to_dict(self) -> dict[str, Any]:
        return {"type": "normal", "mu": float(self.mu), "sigma": float(self.sigma)}

    def __str__(self) -> str:
        return f"Normal({self.mu:f},{self.sigma:f})"


@dataclass(frozen=True)
class Beta:
    alpha: float
    beta: float
    _rv: Any = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not (self.alpha > 0 and self.beta > 0):
            raise RewardDataError(f"Beta: alpha and beta must be > 0, got alpha={self.alpha}, beta={self.beta}")
        object.__setattr__(self, "_rv", stats.beta(float(self.alpha), float(self.beta)))

    @property
    def mean(self) -> float:
        return float(self.alpha / (self.alpha + self.beta))

    def cdf(self, x: Any) -> Any:
        return _out(self._rv.cdf(x))

    def density(self, x: Any) -> Any:
        return _out(self._rv.pdf(x))

    def sample(self, rng: np.random.Generator | None = None, size: int | None = None) -> Any:
        g = rng or _default_rng
        return _out(g.beta(self.alpha, self.beta, size=size))

    def support(self) -> tuple[float, float]:
        return 0.0, 1.0

    def to_dict(self) -> dict[str, Any]:
        return {"type": "beta", "alpha": float(self.alpha), "beta": float(self.beta)}

    def __str__(self) -> str:
        return f"Beta({self.alpha:f},{self.beta:f})"


@dataclass(frozen=True)
class Point:
    """Point estimate with no uncertainty. Don't integrate it: it has no density."""
    mu: float

    @property
    def mean(self) -> float:
        return float(self.mu)

    def cdf(self, x: Any) -> Any:
        return _out(np.where(np.asarray(x, dtype=float) >= self.mu, 1.0, 0.0))

    def density(self, x: Any) -> Any:
        return _out(np.where(np.asarray(x, dtype=float) == self.mu, np.nan, 0.0))

    def sample(self, rng: np.random.Generator | None = None, size: int | None = None) -> Any:
        if size is None:
            return float(self.mu)
        return np.full(size, float(self.mu))

    def support(self) -> tuple[float, float]:
        return float(self.mu), float(self.mu)

    def to_dict(self) -> dict[str, Any]:
        return {"type": "point", "mu": float(self.mu)}

    def __str__(self) -> str:
        if math.isinf(self.mu) and self.mu < 0:
            return "Null()"
        return f"Point({self.mu:f})"


@dataclass(frozen=True)
class Null:
    """An arm that must never be selected.

    Strategies give it probability 0 and ignore it everywhere else: its cdf is 1
    so it never shrinks another arm's Thompson integral.
    """

    @property
    def mean(self) -> float:
        return -math.inf

    def cdf(self, x: Any) -> Any:
        return _out(np.ones_like(np.asarray(x, dtype=float)))

    def density(self, x: Any) -> Any:
        return _out(np.zeros_like(np.asarray(x, dtype=float)))

    def sample(self, rng: np.random.Generator | None = None, size: int | None = None) -> Any:
        if size is None:
            return -math.inf
        return np.full(size, -math.inf)

    def support(self) -> tuple[float, float]:
        return -math.inf, -math.inf

    def to_dict(self) -> dict[str, Any]:
        return {"type": "null"}

    def __str__(self) -> str:
        return "Null()"


def is_null(dist: Distribution) -> bool:
    """True for ``Null()`` and for legacy ``Point(-inf)`` style sentinels."""
    if isinstance(dist, Null):
        return True
    m = dist.mean
    return math.isinf(m) and m < 0


def from_dict(d: dict[str, Any]) -> Distribution:
    if not isinstance(d, dict):
        raise RewardDataError(f"distribution must be an object, got {type(d).__name__}")
    kind = str(d.get("type", "")).lower()
    try:
        if kind == "normal":
            return Normal(float(d["mu"]), float(d["sigma"]))
        if kind == "beta":
            return Beta(float(d["alpha"]), float(d["beta"]))
        if kind == "point":
            return Point(float(d["mu"]))
    except KeyError as e:
        raise RewardDataError(f"{kind}: missing field {e}") from e
    except RewardDataError:
        raise
    except (TypeError, ValueError) as e:
        raise RewardDataError(f"{kind}: {e}") from e
    if kind == "null":
        return Null()
    raise RewardDataError(f"unknown distribution type: {d.get('type')!r}")
