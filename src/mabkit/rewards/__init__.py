"""Reward sources.

mabkit does not build reward models; it reads their current estimates.
Production setups usually call a reward service over HTTP (``HTTPSource``);
the stubs serve fixed estimates for tests and development.
"""

from .base import RewardSource
from .http import HTTPSource
from .parsers import beta_from_json, get_parser, normal_from_json, point_from_json
from .stub import ContextualRewardStub, RewardStub

__all__ = [
    "RewardSource",
    "HTTPSource",
    "beta_from_json",
    "normal_from_json",
    "point_from_json",
    "get_parser",
    "ContextualRewardStub",
    "RewardStub",
]
