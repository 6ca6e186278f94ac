# lgbm_params/params/general.py
"""General LightGBM parameters and prediction-only parameters.

Parameter semantics follow the LightGBM parameter documentation. Some
documented parameters have no counterpart here because the caller sets
them through other means (for example ``header`` belongs with the dataset
reader).

Composite parameters (``Objective``, ``BoostingType``, ``Device``,
``Parallelism``, ``Metric``) carry a nested choice whose own sub-options
are flattened into separate keys at composition time.
"""

from enum import Enum
from pathlib import Path

from .applications import Application
from .base import ListOf, OneOf, Param, PredictionParam
from .boosters import Booster
from .columns import ColumnSelector
from .devices import DeviceKind
from .metrics import NDCG, MetricType
from .parallelism import ParallelismStyle
from .refined import (
    IntGreaterThanOne,
    LeftOpenProperFraction,
    NonNegativeDouble,
    NonNegativeInt,
    OpenProperFraction,
    PositiveDouble,
    PositiveInt,
)
from ..utils.exceptions import ConfigurationError


class Direction(Enum):
    """Monotone constraint for a single feature."""

    INCREASING = "increasing"
    DECREASING = "decreasing"
    NO_CONSTRAINT = "no_constraint"


class VerbosityLevel(Enum):
    FATAL = "fatal"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"


class TaskType(Enum):
    """What the LightGBM process is asked to do."""

    TRAIN = "train"
    PREDICT = "predict"
    CONVERT_MODEL = "convert_model"
    REFIT = "refit"


# Top-level choices

class Objective(Param):
    """Learning task: regression, binary classification, ranking, ..."""
    value_type = Application


class BoostingType(Param):
    """Booster to apply. LightGBM defaults to GBDT."""
    value_type = Booster


class Task(Param):
    value_type = TaskType


class Parallelism(Param):
    """Tree learner; called ``tree_learner`` in the LightGBM docs."""
    value_type = ParallelismStyle


class Device(Param):
    value_type = DeviceKind


class Metric(Param):
    """Metrics evaluated on the validation data, in order.

    LightGBM has a single ``ndcg_eval_at`` key, so at most one NDCG entry
    may carry positions.
    """
    value_type = ListOf(OneOf(MetricType, NDCG))

    def __post_init__(self) -> None:
        super().__post_init__()
        positioned = [m for m in self.value if isinstance(m, NDCG) and m.eval_at is not None]
        if len(positioned) > 1:
            raise ConfigurationError(
                "Only one NDCG metric may carry evaluation positions",
                error_code="NDCG_POSITIONS_REPEATED",
                context={"eval_at": [m.eval_at for m in positioned]}
            )


# Data and I/O

class TrainingData(Param):
    value_type = Path


class ValidationData(Param):
    """One or more validation files (multi-validation)."""
    value_type = ListOf(Path)


class PredictionData(Param):
    value_type = Path


class OutputModel(Param):
    """Where to persist the model after training."""
    value_type = Path


class InputModel(Param):
    """Persisted model used for prediction or continued training."""
    value_type = Path


class OutputResult(Param):
    """Where to write prediction results."""
    value_type = Path


class InitScoreFile(Param):
    value_type = Path


class ValidInitScoreFile(Param):
    value_type = ListOf(Path)


class ForcedSplits(Param):
    value_type = Path


class PrePartition(Param):
    value_type = bool


class IsSparse(Param):
    value_type = bool


class TwoRoundLoading(Param):
    value_type = bool


class SaveBinary(Param):
    value_type = bool


class LabelColumn(Param):
    value_type = ColumnSelector


class WeightColumn(Param):
    value_type = ColumnSelector


class QueryColumn(Param):
    value_type = ColumnSelector


class IgnoreColumns(Param):
    """Columns excluded from training."""
    value_type = ListOf(ColumnSelector)


class CategoricalFeatures(Param):
    value_type = ListOf(ColumnSelector)


class BinConstructSampleCount(Param):
    value_type = PositiveInt


class UseMissing(Param):
    value_type = bool


class ZeroAsMissing(Param):
    value_type = bool


class DataRandomSeed(Param):
    value_type = int


# Learning control

class Iterations(Param):
    """Number of boosting iterations. LightGBM defaults to 100."""
    value_type = NonNegativeInt


class LearningRate(Param):
    """Shrinkage rate."""
    value_type = PositiveDouble


class NumLeaves(Param):
    """Maximum number of leaves in one tree."""
    value_type = PositiveInt


class NumThreads(Param):
    """Number of threads; 0 lets OpenMP decide."""
    value_type = NonNegativeInt


class RandomSeed(Param):
    """Seed from which the other seeds are derived."""
    value_type = int


class MaxDepth(Param):
    value_type = NonNegativeInt


class MinDataInLeaf(Param):
    value_type = NonNegativeInt


class MinSumHessianInLeaf(Param):
    value_type = NonNegativeDouble


class BaggingFraction(Param):
    """Fraction of rows sampled per bagging round, in (0, 1]."""
    value_type = LeftOpenProperFraction


class BaggingFreq(Param):
    value_type = PositiveInt


class BaggingFractionSeed(Param):
    value_type = int


class FeatureFraction(Param):
    """Fraction of features sampled per tree, in (0, 1]."""
    value_type = LeftOpenProperFraction


class FeatureFractionSeed(Param):
    value_type = int


class EarlyStoppingRounds(Param):
    """Stop when no validation metric improves for this many rounds."""
    value_type = PositiveInt


class RegularizationL1(Param):
    value_type = NonNegativeDouble


class RegularizationL2(Param):
    value_type = NonNegativeDouble


class MaxDeltaStep(Param):
    value_type = PositiveDouble


class MinSplitGain(Param):
    value_type = NonNegativeDouble


class MinDataPerGroup(Param):
    """Minimum number of rows per categorical group."""
    value_type = PositiveInt


class MaxCatThreshold(Param):
    value_type = PositiveInt


class CatSmooth(Param):
    value_type = NonNegativeDouble


class CatL2(Param):
    """L2 regularization in categorical splits."""
    value_type = NonNegativeDouble


class MaxCatToOneHot(Param):
    value_type = PositiveInt


class TopK(Param):
    """Features considered per machine. Voting parallel learner only."""
    value_type = PositiveInt


class MonotoneConstraint(Param):
    """One direction per feature, in feature order."""
    value_type = ListOf(Direction)


class MaxBin(Param):
    value_type = IntGreaterThanOne


class MinDataInBin(Param):
    value_type = PositiveInt


class Verbosity(Param):
    value_type = VerbosityLevel


# Objective-dependent knobs

class Sigmoid(Param):
    """Sigmoid parameter for binary, one-vs-all and lambdarank objectives."""
    value_type = PositiveDouble


class Alpha(Param):
    """Huber delta / quantile level."""
    value_type = OpenProperFraction


class BoostFromAverage(Param):
    value_type = bool


class RegSqrt(Param):
    """Fit sqrt(label) instead of label. Regression only."""
    value_type = bool


# Metric output

class MetricFreq(Param):
    value_type = PositiveInt


class TrainingMetric(Param):
    """Also report metrics on the training data."""
    value_type = bool


# Prediction

class PredictRawScore(PredictionParam):
    """True for raw scores, False for transformed scores."""
    value_type = bool


class PredictLeafIndex(PredictionParam):
    value_type = bool


class PredictContrib(PredictionParam):
    """Estimate per-feature contributions (SHAP values)."""
    value_type = bool


class NumIterationsPredict(PredictionParam):
    """Number of trained iterations used for prediction; 0 means all."""
    value_type = NonNegativeInt


class PredEarlyStop(PredictionParam):
    """Early-stop prediction; faster, may cost accuracy."""
    value_type = bool


class PredEarlyStopFreq(PredictionParam):
    value_type = NonNegativeInt


class PredEarlyStopMargin(PredictionParam):
    value_type = NonNegativeDouble
