"""
Basic usage example for streamstats.

This example demonstrates the core functionality:
1. Running statistics under different weight policies
2. Streaming quantiles and distribution fits
3. Merging partial results computed on separate chunks
"""

import numpy as np

import streamstats as ss


def main() -> None:
    """Run basic usage examples."""
    rng = np.random.default_rng(0)
    returns = rng.standard_t(df=4, size=5_000) * 0.01

    # Example 1: Running statistics vs. exponentially weighted ones
    print("Example 1: Equal vs. exponential weighting")
    print("-" * 50)

    running = ss.Series(ss.Mean(), ss.Variance(), ss.Extrema())
    running.fit(returns)
    mean, var, (lo, hi) = running.value()
    print(f"Running mean:     {mean:.6f}")
    print(f"Running std:      {np.sqrt(var):.6f}")
    print(f"Range:            [{lo:.4f}, {hi:.4f}]")

    ewma = ss.Series(ss.Mean(), ss.Variance(), weight=ss.ExponentialWeight(lookback=60))
    ewma.fit(returns)
    print(f"EW mean (60 obs): {ewma[0].value():.6f}")
    print(f"EW std (60 obs):  {np.sqrt(ewma[1].value()):.6f}")
    print()

    # Example 2: Shape of the distribution
    print("Example 2: Moments and quantiles")
    print("-" * 50)

    moments = ss.Moments().fit(returns)
    print(f"Skewness:         {moments.skewness():.4f}")
    print(f"Excess kurtosis:  {moments.kurtosis():.4f}")

    tau = (0.05, 0.5, 0.95)
    for name, estimator in [
        ("SGD", ss.QuantileSGD(tau)),
        ("Implicit SGD", ss.QuantileISGD(tau)),
        ("MM", ss.QuantileMM(tau)),
    ]:
        q = estimator.fit(returns).value()
        print(f"  {name:<13} quantiles: {np.round(q, 4)}")
    print(f"  {'Exact':<13} quantiles: {np.round(np.quantile(returns, tau), 4)}")
    print()

    # Example 3: Distribution fits
    print("Example 3: Parameter estimates")
    print("-" * 50)

    normal = ss.FitNormal().fit(returns).value()
    cauchy = ss.FitCauchy().fit(returns).value()
    print(f"Normal: mu={normal.mu:.6f}, sigma={normal.sigma:.6f}")
    print(f"Cauchy: loc={cauchy.loc:.6f}, scale={cauchy.scale:.6f}")
    print(f"P(r < -3%) under the normal fit: {normal.to_scipy().cdf(-0.03):.4%}")
    print()

    # Example 4: Merge partial results
    print("Example 4: Merging chunks")
    print("-" * 50)

    chunks = np.array_split(returns, 4)
    partials = [ss.Variance().fit(chunk) for chunk in chunks]
    merged = partials[0]
    for p in partials[1:]:
        merged.merge(p)
    print(f"Merged variance:  {merged.value():.8f} over {merged.nobs} observations")
    print(f"numpy variance:   {np.var(returns, ddof=1):.8f}")

    x = rng.multivariate_normal([0.0, 0.0], [[1.0, 0.6], [0.6, 1.0]], size=2_000)
    left = ss.CovMatrix(2).fit(x[:1_000])
    right = ss.CovMatrix(2).fit(x[1_000:])
    print(f"Merged correlation: {left.merge(right).cor()[0, 1]:.4f}")

    print()
    print("Done!")


if __name__ == "__main__":
    main()
