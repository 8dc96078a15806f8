from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .types import SelectionResult


class MabError(Exception):
    """Base class for every error raised by mabkit."""


class ConfigError(MabError, ValueError):
    """Invalid configuration, rejected before any computation."""


class RewardDataError(MabError, ValueError):
    """Reward estimates (or the bandit context used to fetch them) are unusable."""


class RewardParseError(RewardDataError):
    """A reward service response could not be converted to distributions."""


class RewardSourceError(MabError):
    """Fetching reward estimates failed."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ConvergenceError(MabError, ArithmeticError):
    """Adaptive quadrature did not reach the configured tolerance."""

    def __init__(
        self,
        message: str,
        *,
        estimate: float = float("nan"),
        iterations: int = 0,
        arm: int | None = None,
    ):
        super().__init__(message)
        self.estimate = estimate
        self.iterations = iterations
        self.arm = arm


class SamplingError(MabError, ValueError):
    """Weights can't be turned into an arm index."""


class SelectArmError(MabError):
    """A stage of ``Bandit.select_arm`` failed.

    ``result`` holds whatever the earlier stages produced; the original error is
    chained as ``__cause__``.
    """

    def __init__(self, message: str, *, stage: str, result: SelectionResult):
        super().__init__(message)
        self.stage = stage
        self.result = result
