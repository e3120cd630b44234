import math
import statistics

import pytest

from fieldvision.amcl import RandomSampler, exp_weight, prob_density


def test_exp_weight_is_one_at_mean():
    assert exp_weight(0.0, 4.0) == 1.0


def test_exp_weight_symmetric_and_decreasing():
    assert exp_weight(2.0, 3.0) == pytest.approx(exp_weight(-2.0, 3.0))
    assert exp_weight(1.0, 3.0) > exp_weight(2.0, 3.0) > exp_weight(5.0, 3.0)


def test_exp_weight_wider_variance_weighs_more():
    assert exp_weight(3.0, 10.0) > exp_weight(3.0, 1.0)


def test_prob_density_integrates_to_one():
    variance = 2.5
    step = 0.01
    total = sum(prob_density(-20.0 + i * step, variance) * step for i in range(4001))
    assert total == pytest.approx(1.0, abs=1e-3)


def test_prob_density_peak_at_mean():
    assert prob_density(0.0, 1.0) > prob_density(0.5, 1.0)
    assert prob_density(0.5, 1.0) == pytest.approx(prob_density(-0.5, 1.0))


@pytest.mark.parametrize("func", [prob_density, exp_weight])
@pytest.mark.parametrize("variance", [0.0, -1.0])
def test_non_positive_variance_rejected(func, variance):
    with pytest.raises(ValueError):
        func(1.0, variance)


def test_same_seed_same_sequence():
    first = RandomSampler(7)
    second = RandomSampler(7)
    a = [first.uniform_real(0, 1) for _ in range(5)] + [first.normal(0, 1)]
    b = [second.uniform_real(0, 1) for _ in range(5)] + [second.normal(0, 1)]
    assert a == b


def test_uniform_int_inclusive_bounds():
    sampler = RandomSampler(1)
    values = {sampler.uniform_int(3, 6) for _ in range(500)}
    assert values == {3, 4, 5, 6}


def test_uniform_int_rejects_reversed_bounds():
    with pytest.raises(ValueError):
        RandomSampler(1).uniform_int(5, 2)


def test_uniform_real_within_bounds():
    sampler = RandomSampler(2)
    values = [sampler.uniform_real(-2.0, 3.0) for _ in range(1000)]
    assert all(-2.0 <= v <= 3.0 for v in values)
    assert min(values) < -1.5 and max(values) > 2.5


def test_uniform_real_degenerate_range():
    assert RandomSampler(3).uniform_real(1.5, 1.5) == 1.5


def test_normal_statistics():
    sampler = RandomSampler(4)
    values = [sampler.normal(10.0, 2.0) for _ in range(20000)]
    assert statistics.fmean(values) == pytest.approx(10.0, abs=0.1)
    assert statistics.pstdev(values) == pytest.approx(2.0, abs=0.1)


def test_normal_rejects_non_positive_stddev():
    with pytest.raises(ValueError):
        RandomSampler(4).normal(0.0, 0.0)


def test_sample_normal_bounded_and_matches_variance():
    variance = 9.0
    sampler = RandomSampler(5)
    values = [sampler.sample_normal(variance) for _ in range(20000)]
    bound = 6 * math.sqrt(variance)
    assert all(abs(v) <= bound for v in values)
    assert statistics.fmean(values) == pytest.approx(0.0, abs=0.1)
    assert statistics.pvariance(values) == pytest.approx(variance, rel=0.05)


def test_sample_normal_zero_variance_is_zero():
    assert RandomSampler(6).sample_normal(0.0) == 0.0


def test_sample_normal_rejects_negative_variance():
    with pytest.raises(ValueError):
        RandomSampler(6).sample_normal(-1.0)