# lgbm_params/params/boosters.py
"""Boosting strategies (LightGBM ``boosting``) and their scoped sub-options."""

from dataclasses import dataclass
from typing import Tuple

from .base import Option, coerce_members
from .refined import PositiveInt, ProperFraction


class DARTParam(Option):
    """Option scoped to the DART booster."""


class DropRate(DARTParam):
    """Fraction of previous trees dropped during a dropout."""
    value_type = ProperFraction


class SkipDrop(DARTParam):
    """Probability of skipping the dropout procedure in an iteration."""
    value_type = ProperFraction


class MaxDrop(DARTParam):
    """Maximum number of trees dropped in one iteration."""
    value_type = PositiveInt


class UniformDrop(DARTParam):
    value_type = bool


class XGBoostDARTMode(DARTParam):
    value_type = bool


class DropSeed(DARTParam):
    value_type = int


class GOSSParam(Option):
    """Option scoped to gradient-based one-side sampling."""


class TopRate(GOSSParam):
    """Retain ratio of large-gradient rows."""
    value_type = ProperFraction


class OtherRate(GOSSParam):
    """Retain ratio of small-gradient rows."""
    value_type = ProperFraction


class Booster:
    """Marker base for boosting strategies."""

    params: Tuple[Option, ...] = ()


@dataclass(frozen=True)
class GBDT(Booster):
    """Plain gradient boosted decision trees. LightGBM's default."""


@dataclass(frozen=True)
class RandomForest(Booster):
    pass


@dataclass(frozen=True)
class DART(Booster):
    """Dropouts meet Multiple Additive Regression Trees."""

    params: Tuple[DARTParam, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, 'params', coerce_members(self.params, DARTParam, 'DART'))


@dataclass(frozen=True)
class GOSS(Booster):
    """Gradient-based One-Side Sampling."""

    params: Tuple[GOSSParam, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, 'params', coerce_members(self.params, GOSSParam, 'GOSS'))
