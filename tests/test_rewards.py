import json

import pytest
import requests

from mabkit.dists import Beta, Normal, Point
from mabkit.errors import RewardDataError, RewardParseError, RewardSourceError
from mabkit.rewards import (
    ContextualRewardStub,
    HTTPSource,
    RewardStub,
    beta_from_json,
    get_parser,
    normal_from_json,
    point_from_json,
)
from mabkit.types import RequestContext


@pytest.mark.parametrize(
    "data, expected",
    [
        (b"[]", []),
        (b'[{"alpha": 10, "beta": 20}]', [Beta(10, 20)]),
        (b'[{"alpha": 10, "Beta": 20}, {"ALPHA": 20, "beta": 10}]', [Beta(10, 20), Beta(20, 10)]),
        (b'[{"alpha": 10.0, "beta": 20.12345, "arm": "x"}, {"alpha": 1.945, "beta": 10}]', [Beta(10.0, 20.12345), Beta(1.945, 10)]),
        ('[{"alpha": 1, "beta": 1}]', [Beta(1, 1)]),
    ],
)
def test_beta_from_json(data, expected):
    assert beta_from_json(data) == expected


@pytest.mark.parametrize(
    "data, arm",
    [
        (b"", None),
        (b'{"alpha": 1, "beta": 2}', None),
        (b'[{"alpha": 11.5, "beta": 25.0}, {"beta": 49.13}]', 1),
        (b'[{"alpha": 11.5}, {"alpha": 11.5, "beta": 49.13}]', 0),
        (b'[{"mu": 10, "sigma": 0.25}]', 0),
        (b'[{"alpha": -4, "beta": 20}, {"alpha": 200, "beta": 100}]', 0),
        (b'[{"alpha": 40, "beta": 200}, {"alpha": 200, "beta": 0.5}]', 1),
        (b'[{"alpha": "ten", "beta": 2}]', 0),
        (b'[{"alpha": null, "beta": 2}]', 0),
        (b"[3]", 0),
    ],
)
def test_beta_from_json_errors(data, arm):
    with pytest.raises(RewardParseError) as ei:
        beta_from_json(data)
    if arm is not None:
        assert f"arm {arm}" in str(ei.value)


def test_normal_from_json():
    data = b'[{"mu": -10.0, "Sigma": 20.5}, {"Mu": 1.945, "sigma": 0}]'
    assert normal_from_json(data) == [Normal(-10.0, 20.5), Normal(1.945, 0)]
    with pytest.raises(RewardParseError, match="arm 1"):
        normal_from_json(b'[{"mu": 1, "sigma": 1}, {"mu": 1, "sigma": -0.1}]')
    with pytest.raises(RewardParseError, match="missing sigma"):
        normal_from_json(b'[{"mu": 1}]')


def test_point_from_json():
    assert point_from_json(b'[{"MU": 0.25, "other": true}, {"mu": 3}]') == [Point(0.25), Point(3)]
    with pytest.raises(RewardParseError, match="missing mu value for arm 0"):
        point_from_json(b'[{"alpha": 1}]')


def test_get_parser():
    assert get_parser("Beta") is beta_from_json
    with pytest.raises(RewardParseError):
        get_parser("gamma")


def test_reward_stub_ignores_context():
    stub = RewardStub([Beta(1, 2), Point(3)])
    assert stub.get_rewards() == [Beta(1, 2), Point(3)]
    assert stub.get_rewards({"anything": 1}, request_ctx=RequestContext(timeout_s=0.1)) == [Beta(1, 2), Point(3)]


def test_contextual_reward_stub():
    stub = ContextualRewardStub({"us": [Point(1)], "ca": [Point(2), Point(3)]})
    assert stub.get_rewards("ca") == [Point(2), Point(3)]
    with pytest.raises(RewardDataError, match="must be a string"):
        stub.get_rewards({"country": "us"})
    with pytest.raises(RewardDataError, match="no distributions"):
        stub.get_rewards("mx")


class _FakeResponse:
    def __init__(self, status_code: int, body: bytes):
        self.status_code = status_code
        self.content = body
        self.text = body.decode("utf-8")


class _FakeSession:
    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.calls = []

    def post(self, url, data=None, headers=None, timeout=None):
        self.calls.append({"url": url, "data": data, "headers": dict(headers or {}), "timeout": timeout})
        if self.exc is not None:
            raise self.exc
        return self.response


def test_http_source_posts_context_and_parses():
    session = _FakeSession(_FakeResponse(200, b'[{"alpha": 2, "beta": 3}, {"alpha": 4, "beta": 5}]'))
    src = HTTPSource("http://rewards.local/rewards", beta_from_json, timeout_s=0.5, session=session)
    rewards = src.get_rewards({"country": "us"})
    assert rewards == [Beta(2, 3), Beta(4, 5)]
    call = session.calls[0]
    assert call["url"] == "http://rewards.local/rewards"
    assert json.loads(call["data"]) == {"country": "us"}
    assert call["headers"]["Content-Type"] == "application/json"
    assert call["timeout"] == 0.5


def test_http_source_without_context_sends_no_body_and_honours_request_ctx():
    session = _FakeSession(_FakeResponse(200, b'[{"mu": 1}]'))
    src = HTTPSource("http://rewards.local/rewards", point_from_json, session=session)
    ctx = RequestContext(timeout_s=0.05, headers={"X-Request-Id": "abc"})
    assert src.get_rewards(request_ctx=ctx) == [Point(1)]
    call = session.calls[0]
    assert call["data"] is None
    assert call["timeout"] == 0.05
    assert call["headers"]["X-Request-Id"] == "abc"


def test_http_source_non_2xx():
    session = _FakeSession(_FakeResponse(503, b"unavailable"))
    src = HTTPSource("http://rewards.local/rewards", beta_from_json, session=session)
    with pytest.raises(RewardSourceError) as ei:
        src.get_rewards()
    assert ei.value.status_code == 503


def test_http_source_transport_error():
    session = _FakeSession(exc=requests.ConnectionError("refused"))
    src = HTTPSource("http://rewards.local/rewards", beta_from_json, session=session)
    with pytest.raises(RewardSourceError, match="refused"):
        src.get_rewards()


def test_http_source_parse_error_propagates():
    session = _FakeSession(_FakeResponse(200, b'[{"alpha": 2}]'))
    src = HTTPSource("http://rewards.local/rewards", beta_from_json, session=session)
    with pytest.raises(RewardParseError, match="missing beta value for arm 0"):
        src.get_rewards()


def test_beta_parameters_of_one_are_accepted():
    assert beta_from_json(b'[{"alpha": 1, "beta": 1.0}]') == [Beta(1, 1)]
    with pytest.raises(RewardParseError, match="alpha must be >= 1"):
        beta_from_json(b'[{"alpha": 0.999, "beta": 1}]')
    with pytest.raises(RewardParseError, match="beta must be >= 1"):
        beta_from_json(b'[{"alpha": 1, "beta": 0.999}]')
