"""One-dimensional numerical quadrature.

- fixed rules: Gauss-Legendre (the default, 4 points) and Newton-Cotes
- adaptive composite integration with interval subdivision and tolerance checks
"""

from .quadrature import Quadrature, QuadratureConfig
from .rules import GaussLegendre, NewtonCotesClosed, NewtonCotesOpen, Rule
from .subdividers import EquallySpaced, Interval, SubDivider

__all__ = [
    "Quadrature",
    "QuadratureConfig",
    "GaussLegendre",
    "NewtonCotesClosed",
    "NewtonCotesOpen",
    "Rule",
    "EquallySpaced",
    "Interval",
    "SubDivider",
]
