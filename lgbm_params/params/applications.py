# lgbm_params/params/applications.py
"""Learning tasks (LightGBM ``objective``) and their scoped sub-options.

An application is chosen once per configuration. Some applications carry
their own closed list of sub-options; those are only meaningful under that
application, so they can only be placed inside it.

Example:
    >>> Regression(Tweedie([TweedieVariancePower(1.5)]))
    >>> BinaryClassification([IsUnbalance(True)])
    >>> MultiClass(MultiClassStyle.ONE_VS_ALL, 3)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from .base import ListOf, Option, coerce_members, coerce_payload
from .refined import NonNegativeInt, OneToTwoLeftSemiClosed, PositiveDouble, PositiveInt


# Sub-option families

class BinaryClassParam(Option):
    """Option scoped to binary classification."""


class IsUnbalance(BinaryClassParam):
    """Set when the training labels are unbalanced."""
    value_type = bool


class ScalePosWeight(BinaryClassParam):
    """Weight of the positive class."""
    value_type = PositiveDouble


class LambdaRankParam(Option):
    """Option scoped to lambdarank."""


class MaxPosition(LambdaRankParam):
    """NDCG position optimized during training."""
    value_type = PositiveInt


class LabelGain(LambdaRankParam):
    """Gain of each relevance label, in label order."""
    value_type = ListOf(float)


class FairRegressionParam(Option):
    """Option scoped to fair-loss regression."""


class FairC(FairRegressionParam):
    value_type = PositiveDouble


class PoissonRegressionParam(Option):
    """Option scoped to Poisson regression."""


class PoissonMaxDeltaStep(PoissonRegressionParam):
    value_type = PositiveDouble


class TweedieRegressionParam(Option):
    """Option scoped to Tweedie regression."""


class TweedieVariancePower(TweedieRegressionParam):
    """1 behaves like Poisson, values approaching 2 like Gamma."""
    value_type = OneToTwoLeftSemiClosed


# Regression variants

class RegressionApp:
    """Marker base for regression losses."""

    params: Tuple[Option, ...] = ()


@dataclass(frozen=True)
class L1(RegressionApp):
    """Absolute error loss."""


@dataclass(frozen=True)
class L2(RegressionApp):
    """Squared error loss."""


@dataclass(frozen=True)
class Huber(RegressionApp):
    pass


@dataclass(frozen=True)
class Fair(RegressionApp):
    params: Tuple[FairRegressionParam, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, 'params', coerce_members(self.params, FairRegressionParam, 'Fair'))


@dataclass(frozen=True)
class Poisson(RegressionApp):
    params: Tuple[PoissonRegressionParam, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, 'params', coerce_members(self.params, PoissonRegressionParam, 'Poisson'))


@dataclass(frozen=True)
class Quantile(RegressionApp):
    pass


@dataclass(frozen=True)
class MAPE(RegressionApp):
    pass


@dataclass(frozen=True)
class Gamma(RegressionApp):
    pass


@dataclass(frozen=True)
class Tweedie(RegressionApp):
    params: Tuple[TweedieRegressionParam, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, 'params', coerce_members(self.params, TweedieRegressionParam, 'Tweedie'))


# Applications

class Application:
    """Marker base for learning tasks."""

    params: Tuple[Option, ...] = ()


class MultiClassStyle(Enum):
    """Softmax over all classes, or one binary model per class."""

    SIMPLE = "simple"
    ONE_VS_ALL = "one_vs_all"


class XEApp(Enum):
    """Cross-entropy flavour."""

    XENTROPY = "xentropy"
    XENTROPY_LAMBDA = "xentropy_lambda"


@dataclass(frozen=True)
class Regression(Application):
    app: RegressionApp

    def __post_init__(self) -> None:
        object.__setattr__(self, 'app', coerce_payload(RegressionApp, self.app, 'Regression'))

    @property
    def params(self) -> Tuple[Option, ...]:
        return self.app.params


@dataclass(frozen=True)
class BinaryClassification(Application):
    params: Tuple[BinaryClassParam, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(
            self, 'params', coerce_members(self.params, BinaryClassParam, 'BinaryClassification')
        )


@dataclass(frozen=True)
class MultiClass(Application):
    """Multi-class classification.

    ``num_class`` is accepted as any natural number here; a count of zero
    is reported when the configuration is composed.
    """

    style: MultiClassStyle
    num_class: NonNegativeInt

    def __post_init__(self) -> None:
        object.__setattr__(self, 'style', coerce_payload(MultiClassStyle, self.style, 'MultiClass'))
        object.__setattr__(self, 'num_class', NonNegativeInt.coerce(self.num_class))


@dataclass(frozen=True)
class CrossEntropy(Application):
    app: XEApp = XEApp.XENTROPY

    def __post_init__(self) -> None:
        object.__setattr__(self, 'app', coerce_payload(XEApp, self.app, 'CrossEntropy'))


@dataclass(frozen=True)
class LambdaRank(Application):
    params: Tuple[LambdaRankParam, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, 'params', coerce_members(self.params, LambdaRankParam, 'LambdaRank'))
