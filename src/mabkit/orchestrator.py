from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass, fields
from typing import Any

from .errors import ConfigError, SelectArmError
from .numint import Quadrature, QuadratureConfig
from .rewards.base import RewardSource
from .sampler import DEFAULT_NUM_BUCKETS, Sampler, SamplerConfig, Sha1Sampler
from .strategies import EpsilonGreedy, Proportional, Strategy, Thompson, ThompsonMC
from .types import RequestContext, SelectionResult

logger = logging.getLogger(__name__)

STRATEGIES = ("thompson", "epsilon_greedy", "proportional", "thompson_mc")


@dataclass(frozen=True)
class BanditConfig:
    strategy: str = "thompson"  # thompson|epsilon_greedy|proportional|thompson_mc
    # Epsilon-greedy
    epsilon: float = 0.1
    # Thompson quadrature; an unset tolerance is ignored
    max_iter: int = 12
    abs_tol: float | None = 1e-5
    rel_tol: float | None = 1e-5
    max_workers: int | None = None
    # Monte-Carlo reference
    mc_iterations: int = 100_000
    mc_seed: int | None = None
    # Sampler
    num_buckets: int = DEFAULT_NUM_BUCKETS

    def __post_init__(self) -> None:
        if self.strategy not in STRATEGIES:
            raise ConfigError(f"unknown strategy {self.strategy!r}; expected one of {list(STRATEGIES)}")

    def quadrature_config(self) -> QuadratureConfig:
        return QuadratureConfig(
            max_iter=int(self.max_iter),
            abs_tol=math.inf if self.abs_tol is None else float(self.abs_tol),
            rel_tol=math.inf if self.rel_tol is None else float(self.rel_tol),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_dict(d: dict[str, Any]) -> BanditConfig:
        if not isinstance(d, dict):
            raise ConfigError(f"bandit config must be an object, got {type(d).__name__}")
        known = {f.name for f in fields(BanditConfig)}
        unknown = sorted(set(d) - known)
        if unknown:
            raise ConfigError(f"unknown bandit config keys: {unknown}")
        return BanditConfig(**d)


class Bandit:
    """Reward source + strategy + sampler.

    ``select_arm`` is deterministic for a fixed unit and fixed reward estimates.
    """

    def __init__(self, reward_source: RewardSource, strategy: Strategy, sampler: Sampler) -> None:
        self.reward_source = reward_source
        self.strategy = strategy
        self.sampler = sampler

    def select_arm(
        self,
        unit: str,
        bandit_context: Any = None,
        *,
        request_ctx: RequestContext | None = None,
    ) -> SelectionResult:
        """Fetch rewards, compute probabilities, pick an arm.

        On failure raises ``SelectArmError`` whose ``result`` holds whatever the
        earlier stages produced: rewards without probabilities if the strategy
        failed, rewards and probabilities if sampling failed.
        """
        res = SelectionResult()

        try:
            res.rewards = list(self.reward_source.get_rewards(bandit_context, request_ctx=request_ctx))
        except Exception as e:
            raise self._stage_error("rewards", e, res) from e
        logger.debug("unit=%s rewards=%s", unit, [str(d) for d in res.rewards])

        try:
            res.probs = [float(p) for p in self.strategy.compute_probs(res.rewards)]
        except Exception as e:
            raise self._stage_error("probs", e, res) from e
        logger.debug("unit=%s probs=%s", unit, res.probs)

        try:
            res.arm = int(self.sampler.sample(res.probs, unit))
        except Exception as e:
            raise self._stage_error("sample", e, res) from e
        logger.debug("unit=%s arm=%d", unit, res.arm)

        return res

    @staticmethod
    def _stage_error(stage: str, exc: Exception, res: SelectionResult) -> SelectArmError:
        logger.warning("select_arm failed at stage %s: %s: %s", stage, type(exc).__name__, exc)
        return SelectArmError(f"{stage}: {exc}", stage=stage, result=res)


def build_strategy(cfg: BanditConfig) -> Strategy:
    if cfg.strategy == "thompson":
        return Thompson(Quadrature(cfg.quadrature_config()), max_workers=cfg.max_workers)
    if cfg.strategy == "epsilon_greedy":
        return EpsilonGreedy(cfg.epsilon)
    if cfg.strategy == "proportional":
        return Proportional()
    return ThompsonMC(cfg.mc_iterations, seed=cfg.mc_seed)


def build_bandit(reward_source: RewardSource, cfg: BanditConfig | None = None) -> Bandit:
    cfg = cfg or BanditConfig()
    return Bandit(
        reward_source=reward_source,
        strategy=build_strategy(cfg),
        sampler=Sha1Sampler(SamplerConfig(num_buckets=int(cfg.num_buckets))),
    )
