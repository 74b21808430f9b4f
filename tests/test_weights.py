"""Tests for weight policies."""

import numpy as np
import pytest

import streamstats as ss
from streamstats import IncompatibleConfigError, InvalidParameterError


class TestEqualWeight:
    """Test equal weighting."""

    def test_kth_coefficient_is_one_over_k(self):
        """The k-th single-observation coefficient is exactly 1/k."""
        w = ss.EqualWeight()
        for k in range(1, 51):
            assert w.advance() == 1 / k

    def test_first_coefficient_overwrites(self):
        """A fresh policy returns 1 on the first observation."""
        assert ss.EqualWeight().advance() == 1.0

    def test_batched_advance(self):
        """Advancing by several observations returns n_new / nobs."""
        w = ss.EqualWeight()
        w.advance()
        assert w.advance(3) == pytest.approx(0.75)
        assert w.nobs == 4

    def test_bias_correction(self):
        """Bias correction is n / (n - 1) once n > 1."""
        w = ss.EqualWeight()
        assert w.bias_correction(0) == 1.0
        assert w.bias_correction(1) == 1.0
        assert w.bias_correction(4) == pytest.approx(4 / 3)

    def test_advance_silent_counts_only(self):
        """advance_silent moves the count without returning a coefficient."""
        w = ss.EqualWeight()
        assert w.advance_silent(5) is None
        assert w.nobs == 5
        assert w.advance() == pytest.approx(1 / 6)

    def test_reset(self):
        """reset returns to the fresh state."""
        w = ss.EqualWeight()
        w.advance(10)
        w.reset()
        assert w.nobs == 0
        assert w.advance() == 1.0

    def test_rejects_zero_new_observations(self):
        """advance(0) is an error."""
        with pytest.raises(ValueError):
            ss.EqualWeight().advance(0)

    def test_satisfies_protocol(self):
        """All policies satisfy the Weight protocol."""
        for w in [
            ss.EqualWeight(),
            ss.ExponentialWeight(0.1),
            ss.BoundedExponentialWeight(0.1),
            ss.LearningRate(),
            ss.LearningRate2(),
            ss.UserWeight(),
        ]:
            assert isinstance(w, ss.Weight)


class TestExponentialWeight:
    """Test exponential weighting."""

    def test_coefficient_is_constant(self):
        """Every call returns the configured lambda."""
        w = ss.ExponentialWeight(0.3)
        coefs = [w.advance() for _ in range(20)]
        assert all(c == 0.3 for c in coefs)
        assert w.nobs == 20

    def test_lookback(self):
        """lookback sets lambda = 2 / (lookback + 1)."""
        w = ss.ExponentialWeight(lookback=19)
        assert w.lam == pytest.approx(0.1)

    @pytest.mark.parametrize("lam", [-0.1, 1.5])
    def test_decay_outside_unit_interval_rejected(self, lam):
        """Decay outside [0, 1] is an InvalidParameterError."""
        with pytest.raises(InvalidParameterError):
            ss.ExponentialWeight(lam)
        with pytest.raises(InvalidParameterError):
            ss.BoundedExponentialWeight(lam)

    def test_invalid_lookback_rejected(self):
        """lookback must be at least 1."""
        with pytest.raises(InvalidParameterError):
            ss.ExponentialWeight(lookback=0)

    def test_error_is_value_error(self):
        """Construction errors are also ValueErrors."""
        with pytest.raises(ValueError):
            ss.ExponentialWeight(2.0)

    def test_no_bias_correction(self):
        """Non-equal policies never correct."""
        assert ss.ExponentialWeight(0.1).bias_correction(10) == 1.0


class TestBoundedExponentialWeight:
    """Test warm-up-then-hold weighting."""

    def test_equal_then_hold(self):
        """Coefficients follow 1/k until they would drop below lambda."""
        w = ss.BoundedExponentialWeight(0.2)
        coefs = [w.advance() for _ in range(8)]
        expected = [1.0, 0.5, 1 / 3, 0.25, 0.2, 0.2, 0.2, 0.2]
        assert np.allclose(coefs, expected)


class TestLearningRate:
    """Test learning-rate weighting."""

    def test_power_decay_then_minstep(self):
        """Coefficient is t^-r until it reaches minstep, then minstep."""
        w = ss.LearningRate(r=0.6, minstep=0.1)
        coefs = np.array([w.advance() for _ in range(100)])
        t = np.arange(1, 101)
        assert np.allclose(coefs, np.maximum(0.1, t ** -0.6))
        assert coefs[-1] == 0.1
        assert np.all(np.diff(coefs) <= 0)

    def test_counts_updates_not_observations(self):
        """The rate moves once per advance call, whatever n_new is."""
        w = ss.LearningRate(r=0.5)
        w.advance(5)
        coef = w.advance(5)
        assert w.nobs == 10
        assert w.nups == 2
        assert coef == pytest.approx(2 ** -0.5)

    def test_invalid_parameters(self):
        """r must be positive and minstep in [0, 1]."""
        with pytest.raises(InvalidParameterError):
            ss.LearningRate(r=0.0)
        with pytest.raises(InvalidParameterError):
            ss.LearningRate(minstep=1.5)

    def test_learning_rate2(self):
        """LearningRate2 follows gamma / (1 + gamma * c * t)."""
        w = ss.LearningRate2(gamma=0.5, c=1.0)
        coefs = [w.advance() for _ in range(3)]
        assert np.allclose(coefs, [0.5 / 1.5, 0.5 / 2.0, 0.5 / 2.5])

    def test_learning_rate2_minstep(self):
        """LearningRate2 holds at minstep."""
        w = ss.LearningRate2(gamma=1.0, c=1.0, minstep=0.2)
        coefs = [w.advance() for _ in range(10)]
        assert coefs[-1] == 0.2

    def test_learning_rate2_first_coefficient_bounded(self):
        """Parameters giving a coefficient above 1 are rejected."""
        with pytest.raises(InvalidParameterError):
            ss.LearningRate2(gamma=10.0, c=0.01)


class TestUserWeight:
    """Test caller-supplied weights."""

    def test_normalised_share(self):
        """Coefficient is w / sum(w)."""
        w = ss.UserWeight()
        w.set_weight(3.0)
        assert w.advance() == 1.0
        w.set_weight(1.0)
        assert w.advance() == pytest.approx(0.25)
        assert w.nobs == 2

    def test_weighted_mean(self):
        """A mean under user weights is the weighted average."""
        w = ss.UserWeight()
        o = ss.Mean(weight=w)
        for y, wt in [(1.0, 1.0), (2.0, 2.0), (4.0, 1.0)]:
            w.set_weight(wt)
            o.absorb(y)
        assert o.value() == pytest.approx(np.average([1.0, 2.0, 4.0], weights=[1, 2, 1]))

    def test_non_positive_weight_rejected(self):
        """User weights must be positive."""
        with pytest.raises(InvalidParameterError):
            ss.UserWeight(0.0)
        with pytest.raises(InvalidParameterError):
            ss.UserWeight().set_weight(-1.0)

    def test_merge_uses_weight_totals(self):
        """Merging blends by each side's share of the summed weights."""
        a = ss.Mean(weight=ss.UserWeight()).fit(np.zeros(100))
        b = ss.Mean(weight=ss.UserWeight()).fit(np.full(100, 10.0))
        a.merge(b)
        assert a.value() == pytest.approx(5.0)
        assert a.weight.denom == pytest.approx(200.0)
        assert a.count() == a.weight.nobs == 200

        a.absorb(10.0)
        assert a.value() == pytest.approx((5.0 * 200 + 10.0) / 201)

    def test_merge_unequal_weights(self):
        """A side absorbed with larger weights counts for more."""
        a = ss.Mean(weight=ss.UserWeight(3.0)).fit(np.zeros(10))
        b = ss.Mean(weight=ss.UserWeight(1.0)).fit(np.full(10, 10.0))
        a.merge(b)
        assert a.value() == pytest.approx(100.0 / 40.0)

    def test_merge_other_policy_rejected(self):
        """Counters of a different policy cannot be folded in."""
        a = ss.Mean(weight=ss.UserWeight()).fit([1.0])
        b = ss.Mean().fit([2.0])
        with pytest.raises(IncompatibleConfigError):
            a.merge(b, gamma=0.5)
        assert a.value() == 1.0
        assert a.weight.denom == 1.0


class TestMergeGamma:
    """Test the merge coefficient of count-based policies."""

    def test_equal_weight_share(self):
        """Equal weights give the peer its share of the total count."""
        w = ss.EqualWeight()
        w.advance(3)
        peer = ss.EqualWeight()
        peer.advance(1)
        assert w.merge_gamma(peer, 1) == pytest.approx(0.25)
        assert w.nobs == 4

    def test_exponential_constant(self):
        """Exponential weights return the constant coefficient."""
        w = ss.ExponentialWeight(0.3)
        assert w.merge_gamma(ss.ExponentialWeight(0.3), 5) == pytest.approx(0.3)
        assert w.nobs == 5
