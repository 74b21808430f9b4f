"""Registries for string-based creation of statistics and weight policies."""

from typing import Any, Type


class _Registry:
    _registry: dict[str, Type[Any]]
    _kind: str = "entry"

    @classmethod
    def register(cls, name: str, klass: Type[Any]) -> None:
        """
        Register a class.

        Args:
            name: Name to register under (case-insensitive)
            klass: The class to register
        """
        cls._registry[name.lower()] = klass

    @classmethod
    def get(cls, name: str) -> Type[Any] | None:
        """Class registered under ``name`` (case-insensitive), or None."""
        return cls._registry.get(name.lower())

    @classmethod
    def list_available(cls) -> list[str]:
        return list(cls._registry.keys())

    @classmethod
    def create(cls, name: str, *args: Any, **kwargs: Any) -> Any:
        """
        Create an instance by name.

        Args:
            name: Registered name (case-insensitive)
            *args, **kwargs: Constructor arguments

        Raises:
            ValueError: If the name is not registered
        """
        klass = cls.get(name)
        if klass is None:
            raise ValueError(
                f"Unknown {cls._kind}: '{name}'. Available: {cls.list_available()}"
            )
        return klass(*args, **kwargs)


class StatRegistry(_Registry):
    """
    Registry of online statistics.

    Example:
        >>> o = StatRegistry.create("quantile_mm", (0.1, 0.9))
        >>> StatRegistry.register("my_stat", MyStat)
    """

    _registry: dict[str, Type[Any]] = {}
    _kind = "statistic"


class WeightRegistry(_Registry):
    """
    Registry of weight policies.

    Example:
        >>> w = WeightRegistry.create("exponential", lookback=20)
    """

    _registry: dict[str, Type[Any]] = {}
    _kind = "weight"


def _register_builtins() -> None:
    """Register all built-in statistics and policies."""
    from .stats import (
        Mean, Variance, Extrema, Moments, OrderStats, Sum, Diff,
        StochasticLoss, QuantileSGD, QuantileISGD, QuantileMM, CovMatrix, MV,
    )
    from .fitters import (
        FitBeta, FitGamma, FitNormal, FitLogNormal, FitCauchy,
        FitCategorical, FitMultinomial, FitMvNormal,
    )
    from .weights import (
        EqualWeight, ExponentialWeight, BoundedExponentialWeight,
        LearningRate, LearningRate2, UserWeight,
    )

    for name, klass in [
        ("mean", Mean),
        ("variance", Variance),
        ("var", Variance),  # alias
        ("extrema", Extrema),
        ("moments", Moments),
        ("order_stats", OrderStats),
        ("sum", Sum),
        ("diff", Diff),
        ("stochastic_loss", StochasticLoss),
        ("quantile_sgd", QuantileSGD),
        ("quantile_isgd", QuantileISGD),
        ("quantile_mm", QuantileMM),
        ("quantile", QuantileMM),  # alias
        ("cov_matrix", CovMatrix),
        ("covmatrix", CovMatrix),  # alias
        ("mv", MV),
        ("fit_beta", FitBeta),
        ("fit_gamma", FitGamma),
        ("fit_normal", FitNormal),
        ("fit_lognormal", FitLogNormal),
        ("fit_cauchy", FitCauchy),
        ("fit_categorical", FitCategorical),
        ("fit_multinomial", FitMultinomial),
        ("fit_mvnormal", FitMvNormal),
    ]:
        StatRegistry.register(name, klass)

    for name, klass in [
        ("equal", EqualWeight),
        ("exponential", ExponentialWeight),
        ("bounded_exponential", BoundedExponentialWeight),
        ("learning_rate", LearningRate),
        ("learning_rate2", LearningRate2),
        ("user", UserWeight),
    ]:
        WeightRegistry.register(name, klass)


# Auto-register built-ins on module import
_register_builtins()
