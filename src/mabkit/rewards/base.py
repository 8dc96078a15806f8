from __future__ import annotations

from typing import Any, Protocol

from ..dists import Distribution
from ..types import RequestContext


class RewardSource(Protocol):
    """Current reward estimates, one distribution per arm.

    ``bandit_context`` carries features for contextual bandits; non-contextual
    sources ignore it. ``request_ctx`` is only for sources that make network calls
    (timeouts, headers).
    """

    def get_rewards(
        self,
        bandit_context: Any = None,
        *,
        request_ctx: RequestContext | None = None,
    ) -> list[Distribution]:
        ...
