"""lgbm_params - LightGBM option vocabulary, composition and rendering.

Key Components:
- Refined numbers: range-checked numeric payloads
- Options: one class per LightGBM parameter, grouped by scope
- compose: cross-option checks and flattening into an ``OptionSet``
- serializer: ``key=value`` and ``--key=value`` rendering

Example:
    >>> from lgbm_params.params import compose, to_config_lines, LearningRate, DART, DropRate
    >>> to_config_lines(compose([LearningRate(0.1)], booster=DART([DropRate(0.2)])))
    ['boosting=dart', 'drop_rate=0.2', 'learning_rate=0.1']
"""

from .refined import (
    RefinedNumber,
    PositiveInt,
    NonNegativeInt,
    IntGreaterThanOne,
    PositiveDouble,
    NonNegativeDouble,
    ProperFraction,
    LeftOpenProperFraction,
    OpenProperFraction,
    OneToTwoLeftSemiClosed,
    REFINED_TYPES,
    render_double
)
from .columns import ColumnSelector, Index, ColName, col_sel_argument
from .base import Option, Param, PredictionParam, ListOf, OneOf
from .metrics import MetricType, NDCG
from .applications import (
    Application,
    Regression,
    RegressionApp,
    L1,
    L2,
    Huber,
    Fair,
    Poisson,
    Quantile,
    MAPE,
    Gamma,
    Tweedie,
    BinaryClassification,
    MultiClass,
    MultiClassStyle,
    CrossEntropy,
    XEApp,
    LambdaRank,
    BinaryClassParam,
    IsUnbalance,
    ScalePosWeight,
    LambdaRankParam,
    MaxPosition,
    LabelGain,
    FairRegressionParam,
    FairC,
    PoissonRegressionParam,
    PoissonMaxDeltaStep,
    TweedieRegressionParam,
    TweedieVariancePower
)
from .boosters import (
    Booster,
    GBDT,
    RandomForest,
    DART,
    GOSS,
    DARTParam,
    DropRate,
    SkipDrop,
    MaxDrop,
    UniformDrop,
    XGBoostDARTMode,
    DropSeed,
    GOSSParam,
    TopRate,
    OtherRate
)
from .devices import DeviceKind, CPU, GPU, GPUParam, GpuPlatformId, GpuDeviceId, GpuUseDP
from .parallelism import (
    ParallelismStyle,
    ParallelismParams,
    Serial,
    DistributedParallelism,
    FeatureParallel,
    DataParallel,
    VotingParallel,
    SocketParallelism,
    MPIParallelism
)
from .general import (
    Direction,
    VerbosityLevel,
    TaskType,
    Objective,
    BoostingType,
    Task,
    Parallelism,
    Device,
    Metric,
    TrainingData,
    ValidationData,
    PredictionData,
    OutputModel,
    InputModel,
    OutputResult,
    InitScoreFile,
    ValidInitScoreFile,
    ForcedSplits,
    PrePartition,
    IsSparse,
    TwoRoundLoading,
    SaveBinary,
    LabelColumn,
    WeightColumn,
    QueryColumn,
    IgnoreColumns,
    CategoricalFeatures,
    BinConstructSampleCount,
    UseMissing,
    ZeroAsMissing,
    DataRandomSeed,
    Iterations,
    LearningRate,
    NumLeaves,
    NumThreads,
    RandomSeed,
    MaxDepth,
    MinDataInLeaf,
    MinSumHessianInLeaf,
    BaggingFraction,
    BaggingFreq,
    BaggingFractionSeed,
    FeatureFraction,
    FeatureFractionSeed,
    EarlyStoppingRounds,
    RegularizationL1,
    RegularizationL2,
    MaxDeltaStep,
    MinSplitGain,
    MinDataPerGroup,
    MaxCatThreshold,
    CatSmooth,
    CatL2,
    MaxCatToOneHot,
    TopK,
    MonotoneConstraint,
    MaxBin,
    MinDataInBin,
    Verbosity,
    Sigmoid,
    Alpha,
    BoostFromAverage,
    RegSqrt,
    MetricFreq,
    TrainingMetric,
    PredictRawScore,
    PredictLeafIndex,
    PredictContrib,
    NumIterationsPredict,
    PredEarlyStop,
    PredEarlyStopFreq,
    PredEarlyStopMargin
)
from .keys import OPTION_KEYS, key_for, literal_for, objective_literal
from .compose import Entry, OptionSet, compose, flatten, find_violations
from .serializer import (
    render_value,
    to_pairs,
    to_config_lines,
    to_config_text,
    to_command_line,
    serialize
)
