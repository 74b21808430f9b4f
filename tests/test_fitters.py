"""Tests for the distribution fitters."""

import logging

import numpy as np
import pytest

import streamstats as ss


@pytest.fixture
def rng():
    return np.random.default_rng(123)


class TestNormalFits:
    """FitNormal and FitLogNormal."""

    def test_normal_matches_numpy(self, rng):
        """mu is the sample mean and sigma the n - 1 standard deviation."""
        y = rng.normal(2.0, 3.0, 500)
        mu, sigma = ss.FitNormal().fit(y).value()
        assert mu == pytest.approx(np.mean(y))
        assert sigma == pytest.approx(np.std(y, ddof=1))

    def test_lognormal_matches_numpy(self, rng):
        """LogNormal parameters are the normal fit of log(y)."""
        y = rng.lognormal(0.5, 0.8, 500)
        params = ss.FitLogNormal().fit(y).value()
        assert params.mu == pytest.approx(np.mean(np.log(y)))
        assert params.sigma == pytest.approx(np.std(np.log(y), ddof=1))

    def test_lognormal_rejects_non_positive(self):
        """A non-positive observation raises before any state changes."""
        o = ss.FitLogNormal().fit([1.0, 2.0])
        with pytest.raises(ValueError):
            o.absorb(0.0)
        assert o.nobs == 2
        assert o.weight.nobs == 2

    def test_to_scipy(self, rng):
        """Frozen scipy distributions carry the fitted parameters."""
        y = rng.normal(2.0, 3.0, 500)
        dist = ss.FitNormal().fit(y).value().to_scipy()
        assert dist.mean() == pytest.approx(np.mean(y))
        assert dist.std() == pytest.approx(np.std(y, ddof=1))

        lognormal = ss.LogNormalParameters(mu=0.0, sigma=1.0).to_scipy()
        assert lognormal.median() == pytest.approx(1.0)

    def test_defaults(self):
        """Fewer than two observations give the documented defaults."""
        assert ss.FitNormal().value() == ss.NormalParameters(mu=0.0, sigma=1.0)
        assert ss.FitNormal().fit([5.0]).value() == ss.NormalParameters(mu=0.0, sigma=1.0)
        assert ss.FitLogNormal().value() == ss.LogNormalParameters(mu=0.0, sigma=1.0)

    def test_merge(self, rng):
        """Merging two partitions reproduces the single pass."""
        y = rng.normal(size=1000)
        a = ss.FitNormal().fit(y[:400])
        b = ss.FitNormal().fit(y[400:])
        a.merge(b)
        assert a.nobs == 1000
        assert a.value().mu == pytest.approx(np.mean(y))
        assert a.value().sigma == pytest.approx(np.std(y, ddof=1))


class TestMomentFits:
    """FitBeta and FitGamma."""

    def test_beta(self, rng):
        """Method of moments recovers Beta(3, 5)."""
        alpha, beta = ss.FitBeta().fit(rng.beta(3.0, 5.0, 10_000)).value()
        assert alpha == pytest.approx(3.0, rel=0.1)
        assert beta == pytest.approx(5.0, rel=0.1)

    def test_gamma(self, rng):
        """Method of moments recovers Gamma(5, 1)."""
        shape, scale = ss.FitGamma().fit(rng.gamma(5.0, 1.0, 10_000)).value()
        assert shape == pytest.approx(5.0, rel=0.1)
        assert scale == pytest.approx(1.0, rel=0.1)

    def test_defaults(self):
        """Defaults before two observations and for constant data."""
        assert ss.FitBeta().value() == ss.BetaParameters(alpha=1.0, beta=1.0)
        assert ss.FitBeta().fit([0.0, 0.0, 0.0]).value() == ss.BetaParameters(1.0, 1.0)
        assert ss.FitGamma().fit([2.0]).value() == ss.GammaParameters(shape=1.0, scale=1.0)

    def test_inner_counts(self, rng):
        """The inner accumulator sees every observation once."""
        y = rng.beta(2.0, 2.0, 50)
        o = ss.FitBeta().fit(y)
        assert o.nobs == o.var.nobs == o.weight.nobs == 50
        assert o.var.weight is o.weight


class TestFitCauchy:
    """Tests for FitCauchy."""

    def test_recovers_parameters(self, rng):
        """Location and scale of Cauchy(0, 10) from online quartiles."""
        y = 10.0 * rng.standard_cauchy(20_000)
        loc, scale = ss.FitCauchy().fit(y).value()
        assert loc == pytest.approx(0.0, abs=1.5)
        assert scale == pytest.approx(10.0, rel=0.2)

    def test_defaults(self):
        """Fewer than two observations give (0, 1)."""
        assert ss.FitCauchy().fit([3.0]).value() == ss.CauchyParameters(loc=0.0, scale=1.0)

    def test_merge(self, rng):
        """Merged fitters count every observation."""
        y = rng.standard_cauchy(2000)
        a = ss.FitCauchy().fit(y[:1000])
        b = ss.FitCauchy().fit(y[1000:])
        a.merge(b)
        assert a.nobs == 2000
        assert a.q.nobs == 2000
        assert np.isfinite(a.value().scale)


class TestFitCategorical:
    """Tests for FitCategorical."""

    def test_probabilities(self):
        """Relative frequencies in first-seen order."""
        o = ss.FitCategorical().fit(["small", "large", "small", "medium"])
        assert o.value().as_dict() == {"small": 0.5, "large": 0.25, "medium": 0.25}
        assert o.keys() == ("small", "large", "medium")

    def test_merge_takes_union(self):
        """Merging adds counts over the union of labels."""
        a = ss.FitCategorical().fit(["x", "y"])
        b = ss.FitCategorical().fit(["y", "z"])
        a.merge(b)
        assert a.counts == {"x": 1, "y": 2, "z": 1}
        assert a.nobs == 4
        assert a.value().as_dict() == {"x": 0.25, "y": 0.5, "z": 0.25}

    def test_hashable_labels(self):
        """Any hashable value is a label."""
        o = ss.FitCategorical().fit([1, (2, 3), 1, True])
        assert o.counts[(2, 3)] == 1

    def test_empty(self):
        """No observations give no categories."""
        params = ss.FitCategorical().value()
        assert params.categories == ()
        assert params.probabilities.size == 0
        with pytest.raises(ValueError):
            params.to_scipy()

    def test_to_scipy(self):
        """scipy distribution over category indices."""
        dist = ss.FitCategorical().fit(["a", "b", "b", "b"]).value().to_scipy()
        assert dist.pmf(1) == pytest.approx(0.75)


class TestFitMultinomial:
    """Tests for FitMultinomial."""

    def test_recovers_parameters(self, rng):
        """p is the normalised mean count vector and n the mean total."""
        x = rng.multinomial(10, [0.2, 0.3, 0.5], size=5000)
        n, p = ss.FitMultinomial(3).fit(x).value()
        assert n == 10
        assert np.allclose(p, [0.2, 0.3, 0.5], atol=0.02)
        assert p.sum() == pytest.approx(1.0)

    def test_defaults(self):
        """No observations give one trial over uniform probabilities."""
        params = ss.FitMultinomial(4).value()
        assert params.n == 1
        assert np.allclose(params.p, 0.25)

    def test_merge(self, rng):
        """Merging two partitions reproduces the single pass."""
        x = rng.multinomial(6, [0.5, 0.5], size=200)
        a = ss.FitMultinomial(2).fit(x[:50])
        b = ss.FitMultinomial(2).fit(x[50:])
        a.merge(b)
        full = ss.FitMultinomial(2).fit(x).value()
        assert a.value().n == full.n
        assert np.allclose(a.value().p, full.p)


class TestFitMvNormal:
    """Tests for FitMvNormal."""

    def test_matches_numpy(self, rng):
        """Mean vector and covariance equal the sample estimates."""
        x = rng.multivariate_normal([0.0, 1.0], [[1.0, 0.3], [0.3, 2.0]], size=1000)
        mean, cov = ss.FitMvNormal(2).fit(x).value()
        assert np.allclose(mean, x.mean(axis=0))
        assert np.allclose(cov, np.cov(x, rowvar=False))

    def test_defaults(self):
        """Without a positive definite estimate: zero mean, identity covariance."""
        params = ss.FitMvNormal(2).fit([[1.0, 2.0]]).value()
        assert np.array_equal(params.mean, np.zeros(2))
        assert np.array_equal(params.cov, np.eye(2))

    def test_degenerate_warning(self, caplog):
        """Enough observations but a singular covariance logs a warning."""
        x = np.column_stack([np.arange(20.0), np.zeros(20)])
        with caplog.at_level(logging.WARNING, logger="streamstats"):
            params = ss.FitMvNormal(2).fit(x).value()
        assert np.array_equal(params.cov, np.eye(2))
        assert "not positive definite" in caplog.text

    def test_to_scipy(self, rng):
        """Export to scipy.stats.multivariate_normal."""
        x = rng.multivariate_normal([0.0, 0.0], np.eye(2), size=500)
        dist = ss.FitMvNormal(2).fit(x).value().to_scipy()
        assert np.isfinite(dist.logpdf([0.0, 0.0]))
