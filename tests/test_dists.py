import math

import numpy as np
import pytest

from mabkit.dists import NORMAL_SUPPORT_WIDTH, Beta, Distribution, Normal, Null, Point, from_dict, is_null
from mabkit.errors import RewardDataError


def test_normal_support_is_truncated():
    d = Normal(1.0, 0.5)
    assert d.support() == (1.0 - NORMAL_SUPPORT_WIDTH * 0.5, 1.0 + NORMAL_SUPPORT_WIDTH * 0.5)
    assert d.mean == 1.0
    assert d.cdf(1.0) == pytest.approx(0.5)
    assert isinstance(d.cdf(1.0), float)


def test_beta_basics():
    d = Beta(10, 20)
    assert d.mean == pytest.approx(1 / 3)
    assert d.support() == (0.0, 1.0)
    x = np.linspace(0, 1, 5)
    assert d.density(x).shape == (5,)
    assert d.cdf(1.0) == pytest.approx(1.0)
    with pytest.raises(RewardDataError):
        Beta(0, 1)


def test_point_has_no_density():
    d = Point(2.0)
    assert math.isnan(d.density(2.0))
    assert d.density(1.0) == 0.0
    assert d.cdf(1.999) == 0.0
    assert d.cdf(2.0) == 1.0
    assert d.sample() == 2.0
    assert d.support() == (2.0, 2.0)


def test_null_is_neutral():
    d = Null()
    assert d.mean == -math.inf
    assert d.cdf(-1e300) == 1.0
    assert np.all(d.cdf(np.array([0.0, 1.0])) == 1.0)
    assert d.density(0.0) == 0.0
    assert str(d) == "Null()"
    assert is_null(d)
    # legacy sentinel
    assert is_null(Point(-math.inf))
    assert str(Point(-math.inf)) == "Null()"
    assert not is_null(Point(-1e300))


def test_samples_use_given_generator():
    rng1 = np.random.default_rng(7)
    rng2 = np.random.default_rng(7)
    assert Beta(3, 4).sample(rng1) == Beta(3, 4).sample(rng2)
    draws = Normal(0, 1).sample(np.random.default_rng(0), size=1000)
    assert draws.shape == (1000,)
    assert abs(float(np.mean(draws))) < 0.2


def test_distributions_satisfy_protocol_and_compare_by_params():
    for d in (Normal(0, 1), Beta(1, 2), Point(0.3), Null()):
        assert isinstance(d, Distribution)
        assert from_dict(d.to_dict()) == d
    assert Beta(10, 20) == Beta(10.0, 20.0)
    assert str(Normal(1, 0.5)) == "Normal(1.000000,0.500000)"


def test_from_dict_unknown_type():
    with pytest.raises(RewardDataError):
        from_dict({"type": "gamma"})


@pytest.mark.parametrize("d", [{"type": "beta", "alpha": 2}, {"type": "normal", "mu": "x", "sigma": 1}, {"type": "beta", "alpha": 0, "beta": 1}, ["beta"]])
def test_from_dict_malformed(d):
    with pytest.raises(RewardDataError):
        from_dict(d)
