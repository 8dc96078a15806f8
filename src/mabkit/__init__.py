"""mabkit: pseudo-random multi-armed bandit arm selection.

Reward estimates come in as one distribution per arm; a strategy turns them into
selection probabilities and a hash-based sampler picks an arm reproducibly.
"""

from .dists import Beta, Distribution, Normal, Null, Point, is_null
from .errors import (
    ConfigError,
    ConvergenceError,
    MabError,
    RewardDataError,
    RewardParseError,
    RewardSourceError,
    SamplingError,
    SelectArmError,
)
from .orchestrator import Bandit, BanditConfig, build_bandit
from .sampler import SamplerConfig, Sha1Sampler
from .strategies import EpsilonGreedy, Proportional, Thompson, ThompsonMC
from .types import RequestContext, SelectionResult

__all__ = [
    "Beta",
    "Distribution",
    "Normal",
    "Null",
    "Point",
    "is_null",
    "ConfigError",
    "ConvergenceError",
    "MabError",
    "RewardDataError",
    "RewardParseError",
    "RewardSourceError",
    "SamplingError",
    "SelectArmError",
    "Bandit",
    "BanditConfig",
    "build_bandit",
    "SamplerConfig",
    "Sha1Sampler",
    "EpsilonGreedy",
    "Proportional",
    "Thompson",
    "ThompsonMC",
    "RequestContext",
    "SelectionResult",
]
