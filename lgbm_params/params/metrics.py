# lgbm_params/params/metrics.py
"""Evaluation metrics understood by LightGBM."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .base import ListOf, coerce_payload
from .refined import PositiveInt


class MetricType(Enum):
    """Metric names. External literals live in ``keys.METRIC_NAMES``."""

    MEAN_ABSOLUTE_ERROR = "mean_absolute_error"
    MEAN_SQUARE_ERROR = "mean_square_error"
    L2_ROOT = "l2_root"
    QUANTILE_REGRESSION = "quantile_regression"
    MAPE_LOSS = "mape_loss"
    HUBER_LOSS = "huber_loss"
    FAIR_LOSS = "fair_loss"
    POISSON_NEG_LOG_LIKELIHOOD = "poisson_neg_log_likelihood"
    GAMMA_NEG_LOG_LIKELIHOOD = "gamma_neg_log_likelihood"
    GAMMA_DEVIANCE = "gamma_deviance"
    TWEEDIE_NEG_LOG_LIKELIHOOD = "tweedie_neg_log_likelihood"
    NDCG = "ndcg"
    MAP = "map"
    AUC = "auc"
    BINARY_LOGLOSS = "binary_logloss"
    BINARY_ERROR = "binary_error"
    MULTI_LOGLOSS = "multi_logloss"
    MULTI_ERROR = "multi_error"
    XENTROPY = "xentropy"
    XENT_LAMBDA = "xent_lambda"
    KULLBACK_LEIBLER = "kullback_leibler"


@dataclass(frozen=True)
class NDCG:
    """NDCG metric with optional evaluation positions.

    The positions are emitted under their own key (``ndcg_eval_at``) when
    the metric list is flattened.
    """

    eval_at: Optional[Tuple[PositiveInt, ...]] = None

    def __post_init__(self) -> None:
        if self.eval_at is not None:
            object.__setattr__(
                self, 'eval_at', coerce_payload(ListOf(PositiveInt), self.eval_at, 'NDCG')
            )
