from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import requests

from ..dists import Distribution
from ..errors import RewardSourceError
from ..types import RequestContext
from .parsers import RewardParser

logger = logging.getLogger(__name__)


@dataclass
class HTTPSource:
    """Reward source backed by a remote reward service.

    POSTs the JSON-encoded bandit context (no body when it is None) and hands the
    response body to ``parser``. Any ``requests.Session``-like object with a
    ``post`` method can be passed as ``session``.
    """

    url: str
    parser: RewardParser
    timeout_s: float = 1.0
    session: Any = None
    marshaler: Callable[[Any], str] = json.dumps
    headers: dict[str, str] = field(default_factory=dict)

    def get_rewards(self, bandit_context: Any = None, *, request_ctx: RequestContext | None = None) -> list[Distribution]:
        timeout = self.timeout_s
        headers = {"Accept": "application/json", **self.headers}
        if request_ctx is not None:
            if request_ctx.timeout_s is not None:
                timeout = float(request_ctx.timeout_s)
            headers.update(request_ctx.headers)

        body = None
        if bandit_context is not None:
            body = self.marshaler(bandit_context)
            headers.setdefault("Content-Type", "application/json")

        http = self.session or requests
        try:
            r = http.post(self.url, data=body, headers=headers, timeout=timeout)
        except requests.RequestException as e:
            raise RewardSourceError(f"reward request to {self.url} failed: {e}") from e

        if not 200 <= r.status_code < 300:
            text = (r.text or "")[:400]
            raise RewardSourceError(f"reward service returned {r.status_code}: {text}", status_code=r.status_code)

        logger.debug("rewards fetched from %s (%d bytes)", self.url, len(r.content))
        return self.parser(r.content)
