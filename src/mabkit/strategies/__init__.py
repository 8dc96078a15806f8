"""Arm-selection strategies.

- Thompson: exact Thompson sampling by numerical integration (recommended)
- EpsilonGreedy / Proportional: use only the mean of each arm
- ThompsonMC: simulation-based reference for Thompson, not for production
"""

from .base import Strategy, args_max
from .epsilon_greedy import EpsilonGreedy
from .proportional import Proportional
from .thompson import Thompson
from .thompson_mc import ThompsonMC

__all__ = ["Strategy", "args_max", "EpsilonGreedy", "Proportional", "Thompson", "ThompsonMC"]
