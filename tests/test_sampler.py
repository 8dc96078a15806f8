import pytest
from scipy import stats

from mabkit.errors import ConfigError, SamplingError
from mabkit.sampler import SamplerConfig, Sha1Sampler


@pytest.mark.parametrize(
    "weights, bucket, expected",
    [
        ([1.0], 503, 0),
        ([0.5, 0.5], 0, 0),
        ([0.5, 0.5], 499, 0),
        ([0.5, 0.5], 500, 1),
        ([0.5, 0.5], 999, 1),
        ([1.0, 1.0, 1.0], 332, 0),
        ([1.0, 1.0, 1.0], 333, 1),
        ([1.0, 1.0, 1.0], 665, 1),
        ([1.0, 1.0, 1.0], 666, 2),
        ([2.0, 2.0, 2.0], 999, 2),
        ([0, 1, 0], 0, 1),
        ([0, 1, 0], 500, 1),
        ([0, 1, 0], 999, 1),
        ([0, 1, 1], 499, 1),
        ([0, 1, 1], 500, 2),
    ],
)
def test_index_for_bucket(weights, bucket, expected):
    assert Sha1Sampler().index_for_bucket(weights, bucket) == expected


def test_same_unit_same_arm():
    s = Sha1Sampler()
    weights = [0.2, 0.3, 0.5]
    first = s.sample(weights, "12345")
    for _ in range(20):
        assert s.sample(weights, "12345") == first
    # a fresh sampler (or process) agrees
    assert Sha1Sampler().sample(weights, "12345") == first


def test_bucket_is_stable():
    # hash-derived bucket must never change between releases
    s = Sha1Sampler()
    b = s.bucket("12345")
    assert 0 <= b < 1000
    assert b == int("8cb2237d0679ca88db6464eac60da96345513964"[:15], 16) % 1000


@pytest.mark.parametrize(
    "weights",
    [
        [1.0, 1.0],
        [2.0, 1.0],
        [1.0, 1.0, 1.0],
        [0.001, 0.999],
    ],
)
def test_frequencies_match_weights(weights):
    s = Sha1Sampler()
    n = 10_000
    counts = [0] * len(weights)
    for i in range(n):
        counts[s.sample(weights, str(i))] += 1
    total = sum(weights)
    expected = [w * n / total for w in weights]
    chi2 = sum((o - e) ** 2 / e for o, e in zip(counts, expected))
    p_val = stats.chi2.sf(chi2, df=len(weights) - 1)
    assert p_val > 1e-4, (counts, expected)


def test_single_weight_always_arm_zero():
    s = Sha1Sampler()
    assert {s.sample([1.0], str(i)) for i in range(500)} == {0}


@pytest.mark.parametrize("weights", [[], [0.0, 0.0], [1.0, -0.5], [-1.0, 2.0]])
def test_bad_weights(weights):
    with pytest.raises(SamplingError):
        Sha1Sampler().sample(weights, "unit")


def test_custom_bucket_count():
    s = Sha1Sampler(SamplerConfig(num_buckets=10))
    assert s.index_for_bucket([0.5, 0.5], 4) == 0
    assert s.index_for_bucket([0.5, 0.5], 5) == 1
    assert 0 <= s.bucket("abc") < 10
    with pytest.raises(ConfigError):
        SamplerConfig(num_buckets=0)
