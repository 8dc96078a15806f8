"""Parsers for reward service responses.

Each expects a JSON array with one object per arm, e.g.

    [{"alpha": 123, "beta": 456}, {"alpha": 3.1415, "beta": 9.999}]
    [{"mu": 1.5, "sigma": 0.2}]
    [{"mu": 0.3}]

Field names are matched case-insensitively and unknown fields are ignored.
"""

from __future__ import annotations

import json
import math
from collections.abc import Callable
from typing import Any

from ..dists import Beta, Distribution, Normal, Point
from ..errors import RewardParseError

RewardParser = Callable[[bytes | str], list[Distribution]]


def _load_arms(data: bytes | str) -> list[dict[str, Any]]:
    try:
        payload = json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise RewardParseError(f"failed to unmarshal response: {e}") from e
    if not isinstance(payload, list):
        raise RewardParseError(f"expected a JSON array of arms, got {type(payload).__name__}")
    arms: list[dict[str, Any]] = []
    for i, item in enumerate(payload):
        if not isinstance(item, dict):
            raise RewardParseError(f"arm {i}: expected an object, got {type(item).__name__}")
        arms.append({str(k).lower(): v for k, v in item.items()})
    return arms


def _field(arm: dict[str, Any], name: str, idx: int) -> float:
    v = arm.get(name)
    if v is None:
        raise RewardParseError(f"missing {name} value for arm {idx}")
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        raise RewardParseError(f"arm {idx} {name} must be a number. got={v!r}")
    v = float(v)
    if not math.isfinite(v):
        raise RewardParseError(f"arm {idx} {name} must be finite. got={v}")
    return v


def beta_from_json(data: bytes | str) -> list[Distribution]:
    out: list[Distribution] = []
    for i, arm in enumerate(_load_arms(data)):
        alpha = _field(arm, "alpha", i)
        beta = _field(arm, "beta", i)
        if alpha < 1:
            raise RewardParseError(f"arm {i} alpha must be >= 1. got={alpha:f}")
        if beta < 1:
            raise RewardParseError(f"arm {i} beta must be >= 1. got={beta:f}")
        out.append(Beta(alpha, beta))
    return out


def normal_from_json(data: bytes | str) -> list[Distribution]:
    out: list[Distribution] = []
    for i, arm in enumerate(_load_arms(data)):
        mu = _field(arm, "mu", i)
        sigma = _field(arm, "sigma", i)
        if sigma < 0:
            raise RewardParseError(f"arm {i} sigma must be >= 0. got={sigma:f}")
        out.append(Normal(mu, sigma))
    return out


def point_from_json(data: bytes | str) -> list[Distribution]:
    return [Point(_field(arm, "mu", i)) for i, arm in enumerate(_load_arms(data))]


PARSERS: dict[str, RewardParser] = {
    "beta": beta_from_json,
    "normal": normal_from_json,
    "point": point_from_json,
}


def get_parser(family: str) -> RewardParser:
    try:
        return PARSERS[family.lower()]
    except KeyError:
        raise RewardParseError(f"unknown reward family {family!r}; expected one of {sorted(PARSERS)}") from None
