# lgbm_params/params/keys.py
"""External names: the single lookup table between options and LightGBM.

Every option class maps to exactly one LightGBM key, and every enumerated
choice maps to exactly one literal. Flattening, serialization and config
loading all read from these tables and nowhere else.
"""

from enum import Enum
from typing import Any, Dict, Type

from . import applications as app
from . import boosters as bst
from . import devices as dev
from . import general as gen
from . import parallelism as par
from .base import Option
from .metrics import MetricType
from ..utils.exceptions import ConfigurationError

OPTION_KEYS: Dict[Type[Option], str] = {
    # Top-level choices
    gen.Objective: "objective",
    gen.BoostingType: "boosting",
    gen.Task: "task",
    gen.Parallelism: "tree_learner",
    gen.Device: "device_type",
    gen.Metric: "metric",
    # Data and I/O
    gen.TrainingData: "data",
    gen.ValidationData: "valid",
    gen.PredictionData: "data",
    gen.OutputModel: "output_model",
    gen.InputModel: "input_model",
    gen.OutputResult: "output_result",
    gen.InitScoreFile: "initscore_filename",
    gen.ValidInitScoreFile: "valid_data_initscores",
    gen.ForcedSplits: "forcedsplits_filename",
    gen.PrePartition: "pre_partition",
    gen.IsSparse: "is_enable_sparse",
    gen.TwoRoundLoading: "two_round",
    gen.SaveBinary: "save_binary",
    gen.LabelColumn: "label_column",
    gen.WeightColumn: "weight_column",
    gen.QueryColumn: "group_column",
    gen.IgnoreColumns: "ignore_column",
    gen.CategoricalFeatures: "categorical_feature",
    gen.BinConstructSampleCount: "bin_construct_sample_cnt",
    gen.UseMissing: "use_missing",
    gen.ZeroAsMissing: "zero_as_missing",
    gen.DataRandomSeed: "data_random_seed",
    # Learning control
    gen.Iterations: "num_iterations",
    gen.LearningRate: "learning_rate",
    gen.NumLeaves: "num_leaves",
    gen.NumThreads: "num_threads",
    gen.RandomSeed: "seed",
    gen.MaxDepth: "max_depth",
    gen.MinDataInLeaf: "min_data_in_leaf",
    gen.MinSumHessianInLeaf: "min_sum_hessian_in_leaf",
    gen.BaggingFraction: "bagging_fraction",
    gen.BaggingFreq: "bagging_freq",
    gen.BaggingFractionSeed: "bagging_seed",
    gen.FeatureFraction: "feature_fraction",
    gen.FeatureFractionSeed: "feature_fraction_seed",
    gen.EarlyStoppingRounds: "early_stopping_round",
    gen.RegularizationL1: "lambda_l1",
    gen.RegularizationL2: "lambda_l2",
    gen.MaxDeltaStep: "max_delta_step",
    gen.MinSplitGain: "min_gain_to_split",
    gen.MinDataPerGroup: "min_data_per_group",
    gen.MaxCatThreshold: "max_cat_threshold",
    gen.CatSmooth: "cat_smooth",
    gen.CatL2: "cat_l2",
    gen.MaxCatToOneHot: "max_cat_to_onehot",
    gen.TopK: "top_k",
    gen.MonotoneConstraint: "monotone_constraints",
    gen.MaxBin: "max_bin",
    gen.MinDataInBin: "min_data_in_bin",
    gen.Verbosity: "verbosity",
    gen.Sigmoid: "sigmoid",
    gen.Alpha: "alpha",
    gen.BoostFromAverage: "boost_from_average",
    gen.RegSqrt: "reg_sqrt",
    gen.MetricFreq: "metric_freq",
    gen.TrainingMetric: "is_provide_training_metric",
    # Prediction
    gen.PredictRawScore: "predict_raw_score",
    gen.PredictLeafIndex: "predict_leaf_index",
    gen.PredictContrib: "predict_contrib",
    gen.NumIterationsPredict: "num_iteration_predict",
    gen.PredEarlyStop: "pred_early_stop",
    gen.PredEarlyStopFreq: "pred_early_stop_freq",
    gen.PredEarlyStopMargin: "pred_early_stop_margin",
    # Application sub-options
    app.IsUnbalance: "is_unbalance",
    app.ScalePosWeight: "scale_pos_weight",
    app.MaxPosition: "max_position",
    app.LabelGain: "label_gain",
    app.FairC: "fair_c",
    app.PoissonMaxDeltaStep: "poisson_max_delta_step",
    app.TweedieVariancePower: "tweedie_variance_power",
    # Booster sub-options
    bst.DropRate: "drop_rate",
    bst.SkipDrop: "skip_drop",
    bst.MaxDrop: "max_drop",
    bst.UniformDrop: "uniform_drop",
    bst.XGBoostDARTMode: "xgboost_dart_mode",
    bst.DropSeed: "drop_seed",
    bst.TopRate: "top_rate",
    bst.OtherRate: "other_rate",
    # Device sub-options
    dev.GpuPlatformId: "gpu_platform_id",
    dev.GpuDeviceId: "gpu_device_id",
    dev.GpuUseDP: "gpu_use_dp",
}

NUM_CLASS_KEY = "num_class"
NDCG_EVAL_AT_KEY = "ndcg_eval_at"
NUM_MACHINES_KEY = "num_machines"
MACHINE_LIST_KEY = "machine_list_filename"
LISTEN_PORT_KEY = "local_listen_port"
TIME_OUT_KEY = "time_out"

REGRESSION_OBJECTIVES: Dict[type, str] = {
    app.L1: "regression_l1",
    app.L2: "regression",
    app.Huber: "huber",
    app.Fair: "fair",
    app.Poisson: "poisson",
    app.Quantile: "quantile",
    app.MAPE: "mape",
    app.Gamma: "gamma",
    app.Tweedie: "tweedie",
}

MULTICLASS_OBJECTIVES: Dict[app.MultiClassStyle, str] = {
    app.MultiClassStyle.SIMPLE: "multiclass",
    app.MultiClassStyle.ONE_VS_ALL: "multiclassova",
}

CROSS_ENTROPY_OBJECTIVES: Dict[app.XEApp, str] = {
    app.XEApp.XENTROPY: "xentropy",
    app.XEApp.XENTROPY_LAMBDA: "xentlambda",
}

BINARY_OBJECTIVE = "binary"
LAMBDARANK_OBJECTIVE = "lambdarank"

BOOSTER_NAMES: Dict[type, str] = {
    bst.GBDT: "gbdt",
    bst.RandomForest: "rf",
    bst.DART: "dart",
    bst.GOSS: "goss",
}

DEVICE_NAMES: Dict[type, str] = {
    dev.CPU: "cpu",
    dev.GPU: "gpu",
}

TREE_LEARNER_NAMES: Dict[type, str] = {
    par.Serial: "serial",
    par.FeatureParallel: "feature",
    par.DataParallel: "data",
    par.VotingParallel: "voting",
}

METRIC_NAMES: Dict[MetricType, str] = {
    MetricType.MEAN_ABSOLUTE_ERROR: "l1",
    MetricType.MEAN_SQUARE_ERROR: "l2",
    MetricType.L2_ROOT: "l2_root",
    MetricType.QUANTILE_REGRESSION: "quantile",
    MetricType.MAPE_LOSS: "mape",
    MetricType.HUBER_LOSS: "huber",
    MetricType.FAIR_LOSS: "fair",
    MetricType.POISSON_NEG_LOG_LIKELIHOOD: "poisson",
    MetricType.GAMMA_NEG_LOG_LIKELIHOOD: "gamma",
    MetricType.GAMMA_DEVIANCE: "gamma_deviance",
    MetricType.TWEEDIE_NEG_LOG_LIKELIHOOD: "tweedie",
    MetricType.NDCG: "ndcg",
    MetricType.MAP: "map",
    MetricType.AUC: "auc",
    MetricType.BINARY_LOGLOSS: "binary_logloss",
    MetricType.BINARY_ERROR: "binary_error",
    MetricType.MULTI_LOGLOSS: "multi_logloss",
    MetricType.MULTI_ERROR: "multi_error",
    MetricType.XENTROPY: "xentropy",
    MetricType.XENT_LAMBDA: "xentlambda",
    MetricType.KULLBACK_LEIBLER: "kldiv",
}

DIRECTION_LITERALS: Dict[gen.Direction, str] = {
    gen.Direction.INCREASING: "1",
    gen.Direction.DECREASING: "-1",
    gen.Direction.NO_CONSTRAINT: "0",
}

VERBOSITY_LITERALS: Dict[gen.VerbosityLevel, str] = {
    gen.VerbosityLevel.FATAL: "-1",
    gen.VerbosityLevel.WARN: "0",
    gen.VerbosityLevel.INFO: "1",
    gen.VerbosityLevel.DEBUG: "2",
}

TASK_LITERALS: Dict[gen.TaskType, str] = {
    gen.TaskType.TRAIN: "train",
    gen.TaskType.PREDICT: "predict",
    gen.TaskType.CONVERT_MODEL: "convert_model",
    gen.TaskType.REFIT: "refit",
}

ENUM_LITERALS: Dict[Type[Enum], Dict[Any, str]] = {
    MetricType: METRIC_NAMES,
    gen.Direction: DIRECTION_LITERALS,
    gen.VerbosityLevel: VERBOSITY_LITERALS,
    gen.TaskType: TASK_LITERALS,
}


def key_for(option: Option) -> str:
    """External key of an option.

    Raises:
        ConfigurationError: If the option type has no external key
    """
    try:
        return OPTION_KEYS[type(option)]
    except KeyError:
        raise ConfigurationError(
            f"No external key for {type(option).__name__}",
            error_code="UNKNOWN_OPTION",
            context={"option": type(option).__name__}
        ) from None


def literal_for(member: Enum) -> str:
    """External literal of an enumerated choice."""
    return ENUM_LITERALS[type(member)][member]


def objective_literal(application: app.Application) -> str:
    """External ``objective`` literal of an application."""
    if isinstance(application, app.Regression):
        return REGRESSION_OBJECTIVES[type(application.app)]
    if isinstance(application, app.BinaryClassification):
        return BINARY_OBJECTIVE
    if isinstance(application, app.MultiClass):
        return MULTICLASS_OBJECTIVES[application.style]
    if isinstance(application, app.CrossEntropy):
        return CROSS_ENTROPY_OBJECTIVES[application.app]
    if isinstance(application, app.LambdaRank):
        return LAMBDARANK_OBJECTIVE
    raise ConfigurationError(
        f"Unknown application {application!r}",
        error_code="UNKNOWN_OPTION",
        context={"option": type(application).__name__}
    )
