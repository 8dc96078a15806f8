from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from ..dists import Distribution
from ..errors import RewardDataError
from ..types import RequestContext


@dataclass
class RewardStub:
    """Static rewards for tests and local development."""

    rewards: Sequence[Distribution] = field(default_factory=list)

    def get_rewards(self, bandit_context: Any = None, *, request_ctx: RequestContext | None = None) -> list[Distribution]:
        return list(self.rewards)


@dataclass
class ContextualRewardStub:
    """Static rewards keyed by a string bandit context."""

    rewards: Mapping[str, Sequence[Distribution]] = field(default_factory=dict)

    def get_rewards(self, bandit_context: Any = None, *, request_ctx: RequestContext | None = None) -> list[Distribution]:
        if not isinstance(bandit_context, str):
            raise RewardDataError(f"bandit context must be a string, got {type(bandit_context).__name__}")
        if bandit_context not in self.rewards:
            raise RewardDataError(f"no distributions for context {bandit_context!r}")
        return list(self.rewards[bandit_context])
