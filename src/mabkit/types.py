from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .dists import Distribution


@dataclass(frozen=True)
class RequestContext:
    """Request-scoped settings for reward sources that call out over the network."""
    timeout_s: float | None = None
    headers: Mapping[str, str] = field(default_factory=dict)


@dataclass
class SelectionResult:
    """Output of ``Bandit.select_arm``.

    Filled stage by stage; ``arm`` stays -1 until the sampler has run.
    """
    rewards: list[Distribution] = field(default_factory=list)
    probs: list[float] = field(default_factory=list)
    arm: int = -1

    def to_dict(self) -> dict[str, Any]:
        return {
            "rewards": [d.to_dict() for d in self.rewards],
            "probs": [float(p) for p in self.probs],
            "arm": int(self.arm),
        }
