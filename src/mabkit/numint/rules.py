from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol

import numpy as np

from ..errors import ConfigError


class Rule(Protocol):
    """Quadrature points and weights for one or many intervals.

    ``a`` and ``b`` may be scalars or equal-length arrays of interval bounds; the
    result then has one row per interval.
    """

    def points(self, a: Any, b: Any) -> np.ndarray:
        ...

    def weights(self, a: Any, b: Any) -> np.ndarray:
        ...


# Non-negative abscissae and matching weights on [-1, 1], n = 1..12.
# source: http://www.holoborodko.com/pavel/numerical-methods/numerical-integration/
_GL_X = [
    [0.0],
    [0.5773502691896257645091488],
    [0.0000000000000000000000000, 0.7745966692414833770358531],
    [0.3399810435848562648026658, 0.8611363115940525752239465],
    [0.0000000000000000000000000, 0.5384693101056830910363144, 0.9061798459386639927976269],
    [0.2386191860831969086305017, 0.6612093864662645136613996, 0.9324695142031520278123016],
    [0.0000000000000000000000000, 0.4058451513773971669066064, 0.7415311855993944398638648, 0.9491079123427585245261897],
    [0.1834346424956498049394761, 0.5255324099163289858177390, 0.7966664774136267395915539, 0.9602898564975362316835609],
    [0.0000000000000000000000000, 0.3242534234038089290385380, 0.6133714327005903973087020, 0.8360311073266357942994298, 0.9681602395076260898355762],
    [0.1488743389816312108848260, 0.4333953941292471907992659, 0.6794095682990244062343274, 0.8650633666889845107320967, 0.9739065285171717200779640],
    [0.0000000000000000000000000, 0.2695431559523449723315320, 0.5190961292068118159257257, 0.7301520055740493240934163, 0.8870625997680952990751578, 0.9782286581460569928039380],
    [0.1252334085114689154724414, 0.3678314989981801937526915, 0.5873179542866174472967024, 0.7699026741943046870368938, 0.9041172563704748566784659, 0.9815606342467192506905491],
]

_GL_W = [
    [2.0],
    [1.0],
    [0.8888888888888888888888889, 0.5555555555555555555555556],
    [0.6521451548625461426269361, 0.3478548451374538573730639],
    [0.5688888888888888888888889, 0.4786286704993664680412915, 0.2369268850561890875142640],
    [0.4679139345726910473898703, 0.3607615730481386075698335, 0.1713244923791703450402961],
    [0.4179591836734693877551020, 0.3818300505051189449503698, 0.2797053914892766679014678, 0.1294849661688696932706114],
    [0.3626837833783619829651504, 0.3137066458778872873379622, 0.2223810344533744705443560, 0.1012285362903762591525314],
    [0.3302393550012597631645251, 0.3123470770400028400686304, 0.2606106964029354623187429, 0.1806481606948574040584720, 0.0812743883615744119718922],
    [0.2955242247147528701738930, 0.2692667193099963550912269, 0.2190863625159820439955349, 0.1494513491505805931457763, 0.0666713443086881375935688],
    [0.2729250867779006307144835, 0.2628045445102466621806889, 0.2331937645919904799185237, 0.1862902109277342514260976, 0.1255803694649046246346943, 0.0556685671161736664827537],
    [0.2491470458134027850005624, 0.2334925365383548087608499, 0.2031674267230659217490645, 0.1600783285433462263346525, 0.1069393259953184309602547, 0.0471753363865118271946160],
]

_NC_OPEN = {
    2: [2.0],
    3: [3 / 2, 3 / 2],
    4: [8 / 3, -4 / 3, 8 / 3],
    5: [55 / 24, 5 / 24, 5 / 24, 55 / 24],
    6: [72 / 35, 27 / 35, 12 / 35, 27 / 35, 72 / 35],
    7: [91 / 48, 49 / 48, 28 / 48, 42 / 48, 49 / 48, 91 / 48],
}

_NC_CLOSED = {
    1: [0.5, 0.5],
    2: [1 / 3, 4 / 3, 1 / 3],
    3: [3 / 8, 9 / 8, 9 / 8, 3 / 8],
    4: [14 / 45, 64 / 45, 24 / 45, 64 / 45, 14 / 45],
    5: [95 / 288, 375 / 288, 250 / 288, 250 / 288, 375 / 288, 95 / 288],
}


def _mirror(half: list[float], *, odd: bool, negate: bool) -> np.ndarray:
    # tables hold the non-negative half; rebuild the full symmetric rule in ascending order
    h = np.asarray(half, dtype=np.float64)
    left = -h[::-1] if negate else h[::-1]
    if odd:
        left = left[:-1]
    return np.concatenate([left, h])


def _col(v: Any) -> np.ndarray:
    return np.asarray(v, dtype=np.float64)[..., None]


@dataclass(frozen=True)
class GaussLegendreRule:
    """Gauss-Legendre rule with ``degree`` points, exact for polynomials up to 2*degree-1."""

    degree: int
    abscissae: np.ndarray = field(init=False, repr=False, compare=False)
    coeffs: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        n = int(self.degree)
        if n < 1 or n > len(_GL_X):
            raise ConfigError(f"GaussLegendre: degree must be in [1, {len(_GL_X)}], got {self.degree}")
        odd = n % 2 == 1
        object.__setattr__(self, "abscissae", _mirror(_GL_X[n - 1], odd=odd, negate=True))
        object.__setattr__(self, "coeffs", _mirror(_GL_W[n - 1], odd=odd, negate=False))

    def points(self, a: Any, b: Any) -> np.ndarray:
        a, b = _col(a), _col(b)
        return self.abscissae * (b - a) / 2 + (b + a) / 2

    def weights(self, a: Any, b: Any) -> np.ndarray:
        a, b = _col(a), _col(b)
        return self.coeffs * (b - a) / 2


@dataclass(frozen=True)
class NewtonCotesRule:
    """Equally spaced Newton-Cotes rule, open (endpoints excluded) or closed."""

    coeffs: tuple[float, ...]
    open: bool

    @property
    def degree(self) -> int:
        return len(self.coeffs) + 1 if self.open else len(self.coeffs) - 1

    def _step(self, a: np.ndarray, b: np.ndarray) -> np.ndarray:
        return (b - a) / self.degree

    def points(self, a: Any, b: Any) -> np.ndarray:
        a, b = _col(a), _col(b)
        offset = 1 if self.open else 0
        idx = np.arange(len(self.coeffs), dtype=np.float64) + offset
        return a + idx * self._step(a, b)

    def weights(self, a: Any, b: Any) -> np.ndarray:
        a, b = _col(a), _col(b)
        return self._step(a, b) * np.asarray(self.coeffs, dtype=np.float64)


def GaussLegendre(degree: int) -> GaussLegendreRule:
    return GaussLegendreRule(int(degree))


def NewtonCotesOpen(degree: int) -> NewtonCotesRule:
    if degree not in _NC_OPEN:
        raise ConfigError(f"NewtonCotesOpen: degree must be in {sorted(_NC_OPEN)}, got {degree}")
    return NewtonCotesRule(tuple(_NC_OPEN[degree]), open=True)


def NewtonCotesClosed(degree: int) -> NewtonCotesRule:
    if degree not in _NC_CLOSED:
        raise ConfigError(f"NewtonCotesClosed: degree must be in {sorted(_NC_CLOSED)}, got {degree}")
    return NewtonCotesRule(tuple(_NC_CLOSED[degree]), open=False)
