"""mabkit CLI.

Commands:
  - probs       selection probabilities for a reward file
  - select-arm  full selection for one unit, from a reward file or a reward service

Rewards files hold the same JSON a reward service returns (see ``--family``), or
with ``--family typed`` a list of ``{"type": "beta"|"normal"|"point"|"null", ...}``.

Run:
  python -m mabkit.cli --help
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from mabkit.dists import Distribution, from_dict
from mabkit.errors import MabError, SelectArmError
from mabkit.orchestrator import STRATEGIES, BanditConfig, build_bandit, build_strategy
from mabkit.rewards import HTTPSource, RewardStub, get_parser
from mabkit.rewards.base import RewardSource
from mabkit.types import RequestContext
from mabkit.utils.seeding import set_global_seed

FAMILIES = ("beta", "normal", "point", "typed")


def _p(path: str | Path) -> Path:
    return path if isinstance(path, Path) else Path(path)


def _emit(payload: dict[str, Any]) -> None:
    sys.stdout.write(json.dumps(payload) + "\n")


def _load_rewards(path: Path, family: str) -> list[Distribution]:
    raw = path.read_bytes()
    if family == "typed":
        items = json.loads(raw)
        if not isinstance(items, list):
            raise MabError(f"{path}: expected a JSON array")
        return [from_dict(d) for d in items]
    return get_parser(family)(raw)


def _load_config(ns: argparse.Namespace) -> BanditConfig:
    data: dict[str, Any] = {}
    if ns.config:
        data.update(json.loads(_p(ns.config).read_text(encoding="utf-8")))
    # explicit flags win over the config file
    if ns.strategy is not None:
        data["strategy"] = ns.strategy
    if ns.epsilon is not None:
        data["epsilon"] = float(ns.epsilon)
    if ns.seed is not None:
        data.setdefault("mc_seed", int(ns.seed))
    return BanditConfig.from_dict(data)


def _reward_source(ns: argparse.Namespace) -> RewardSource:
    if ns.url:
        if ns.family == "typed":
            raise MabError("--family typed is only supported for reward files")
        return HTTPSource(url=str(ns.url), parser=get_parser(ns.family), timeout_s=float(ns.timeout))
    if not ns.rewards:
        raise MabError("one of --rewards or --url is required")
    return RewardStub(_load_rewards(_p(ns.rewards), ns.family))


def _cmd_probs(ns: argparse.Namespace) -> int:
    cfg = _load_config(ns)
    rewards = _load_rewards(_p(ns.rewards), ns.family)
    probs = build_strategy(cfg).compute_probs(rewards)
    _emit({"strategy": cfg.strategy, "probs": [float(p) for p in probs]})
    return 0


def _cmd_select_arm(ns: argparse.Namespace) -> int:
    cfg = _load_config(ns)
    bandit = build_bandit(_reward_source(ns), cfg)
    context = json.loads(ns.context) if ns.context else None
    try:
        result = bandit.select_arm(str(ns.unit), context, request_ctx=RequestContext(timeout_s=float(ns.timeout)))
    except SelectArmError as e:
        _emit({"error": str(e), "stage": e.stage, **e.result.to_dict()})
        return 1
    _emit(result.to_dict())
    return 0


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument("--family", choices=FAMILIES, default="beta", help="reward distribution family")
    p.add_argument("--config", default=None, help="JSON file with BanditConfig fields")
    p.add_argument("--strategy", choices=STRATEGIES, default=None)
    p.add_argument("--epsilon", type=float, default=None)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="mabkit", description="mabkit: multi-armed bandit arm selection")
    ap.add_argument("--log-level", default="WARNING")
    ap.add_argument("--seed", type=int, default=None, help="seed random draws (thompson_mc)")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p = sub.add_parser("probs", help="compute arm-selection probabilities")
    p.add_argument("--rewards", required=True)
    _add_common(p)
    p.set_defaults(func=_cmd_probs)

    p = sub.add_parser("select-arm", help="select an arm for a unit")
    p.add_argument("--unit", required=True)
    p.add_argument("--rewards", default=None)
    p.add_argument("--url", default=None)
    p.add_argument("--context", default=None, help="bandit context as JSON")
    p.add_argument("--timeout", type=float, default=1.0)
    _add_common(p)
    p.set_defaults(func=_cmd_select_arm)

    return ap


def main(argv: list[str] | None = None) -> int:
    ap = build_parser()
    ns = ap.parse_args(argv)
    logging.basicConfig(level=str(ns.log_level).upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    if ns.seed is not None:
        set_global_seed(int(ns.seed))
    try:
        return int(ns.func(ns))
    except (MabError, OSError, json.JSONDecodeError) as e:
        _emit({"error": str(e), "type": type(e).__name__})
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
