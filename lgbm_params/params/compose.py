# lgbm_params/params/compose.py
"""Composition of options into a flat, validated option set.

``compose`` takes the options chosen for one LightGBM run, checks the
constraints that span more than one option, and flattens nested booster,
application, device and parallelism sub-options into LightGBM's single
key namespace.

Policies:
- Duplicate keys are rejected, never overridden. The check runs on the
  flattened keys, so a sub-option given twice is a duplicate too.
- Every violation found is reported in a single ``CompositionError``.
- Entry order is the order the options were given; nested sub-options
  follow their parent key.

Example:
    >>> option_set = compose(
    ...     [LearningRate(0.1), NumLeaves(63)],
    ...     application=BinaryClassification([IsUnbalance(True)]),
    ...     booster=DART([DropRate(0.2)]),
    ... )
    >>> option_set.keys()
    ['objective', 'is_unbalance', 'boosting', 'drop_rate', 'learning_rate', 'num_leaves']
"""

import functools
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Type, TypeVar

from . import applications as app
from . import boosters as bst
from . import general as gen
from . import keys
from . import parallelism as par
from .base import Option, Param, PredictionParam
from .metrics import NDCG
from ..utils.exceptions import (
    CompositionError,
    ConfigurationError,
    ConflictingOptions,
    ConstraintViolation,
    DuplicateOption,
    IncompatibleOption,
    MissingDependentOption,
)
from ..utils.logger import get_logger

logger = get_logger(__name__)

O = TypeVar('O', bound=Option)


@dataclass(frozen=True)
class Entry:
    """One flattened ``key = value`` pair, value still typed."""

    key: str
    value: Any


@dataclass(frozen=True)
class OptionSet:
    """Ordered, immutable collection of flattened entries for one run."""

    entries: Tuple[Entry, ...] = ()

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, key: object) -> bool:
        return any(entry.key == key for entry in self.entries)

    def keys(self) -> List[str]:
        return [entry.key for entry in self.entries]

    def get(self, key: str, default: Any = None) -> Any:
        """Typed value stored under ``key``, or ``default``."""
        for entry in self.entries:
            if entry.key == key:
                return entry.value
        return default


# Flattening

def _sub_entries(params: Iterable[Option]) -> List[Entry]:
    return [Entry(keys.key_for(p), p.value) for p in params]


@functools.singledispatch
def flatten(option: Option) -> List[Entry]:
    """Flatten one option into its external entries.

    Plain options produce a single entry. Composite options produce their
    own entry followed by the entries of their nested sub-options.
    """
    return [Entry(keys.key_for(option), option.value)]


@flatten.register
def _(option: gen.Objective) -> List[Entry]:
    application = option.value
    entries = [Entry(keys.key_for(option), keys.objective_literal(application))]
    if isinstance(application, app.MultiClass):
        entries.append(Entry(keys.NUM_CLASS_KEY, application.num_class))
    entries.extend(_sub_entries(application.params))
    return entries


@flatten.register
def _(option: gen.BoostingType) -> List[Entry]:
    booster = option.value
    entries = [Entry(keys.key_for(option), keys.BOOSTER_NAMES[type(booster)])]
    entries.extend(_sub_entries(booster.params))
    return entries


@flatten.register
def _(option: gen.Device) -> List[Entry]:
    device = option.value
    entries = [Entry(keys.key_for(option), keys.DEVICE_NAMES[type(device)])]
    entries.extend(_sub_entries(device.params))
    return entries


@flatten.register
def _(option: gen.Parallelism) -> List[Entry]:
    style = option.value
    entries = [Entry(keys.key_for(option), keys.TREE_LEARNER_NAMES[type(style)])]
    if isinstance(style, par.DistributedParallelism):
        network = style.params
        entries.append(Entry(keys.NUM_MACHINES_KEY, network.num_machines))
        if isinstance(network, par.SocketParallelism):
            if network.machine_list_file is not None:
                entries.append(Entry(keys.MACHINE_LIST_KEY, network.machine_list_file))
            entries.append(Entry(keys.LISTEN_PORT_KEY, network.local_listen_port))
            entries.append(Entry(keys.TIME_OUT_KEY, network.time_out))
    return entries


@flatten.register
def _(option: gen.Metric) -> List[Entry]:
    entries = [Entry(keys.key_for(option), option.value)]
    for metric in option.value:
        if isinstance(metric, NDCG) and metric.eval_at is not None:
            entries.append(Entry(keys.NDCG_EVAL_AT_KEY, metric.eval_at))
    return entries


# Constraint checks

def _first(options: Sequence[Option], cls: Type[O]) -> Optional[O]:
    for option in options:
        if isinstance(option, cls):
            return option
    return None


def _application(options: Sequence[Option]) -> app.Application:
    objective = _first(options, gen.Objective)
    # LightGBM's default objective
    return objective.value if objective else app.Regression(app.L2())


def _check_multiclass(options: Sequence[Option]) -> List[ConstraintViolation]:
    violations: List[ConstraintViolation] = []
    for objective in options:
        if (isinstance(objective, gen.Objective)
                and isinstance(objective.value, app.MultiClass)
                and objective.value.num_class == 0):
            violations.append(MissingDependentOption(
                "MULTICLASS_NUM_CLASS",
                "multi-class application requires a positive class count",
                ("objective", keys.NUM_CLASS_KEY),
            ))
    return violations


def _check_socket_machine_list(options: Sequence[Option]) -> List[ConstraintViolation]:
    violations: List[ConstraintViolation] = []
    for option in options:
        if not isinstance(option, gen.Parallelism):
            continue
        style = option.value
        if not isinstance(style, par.DistributedParallelism):
            continue
        network = style.params
        if (isinstance(network, par.SocketParallelism)
                and network.num_machines > 1
                and network.machine_list_file is None):
            violations.append(MissingDependentOption(
                "SOCKET_MACHINE_LIST",
                f"socket learner with {network.num_machines.value} machines requires a machine list file",
                ("tree_learner", keys.MACHINE_LIST_KEY),
            ))
    return violations


def _check_random_forest(options: Sequence[Option]) -> List[ConstraintViolation]:
    boosting = _first(options, gen.BoostingType)
    if boosting is None or not isinstance(boosting.value, bst.RandomForest):
        return []

    bagging_freq = _first(options, gen.BaggingFreq)
    bagging_fraction = _first(options, gen.BaggingFraction)
    feature_fraction = _first(options, gen.FeatureFraction)

    row_bagging = bagging_freq is not None and bagging_fraction is not None and bagging_fraction.value < 1
    column_bagging = feature_fraction is not None and feature_fraction.value < 1
    if row_bagging or column_bagging:
        return []
    return [MissingDependentOption(
        "RANDOM_FOREST_BAGGING",
        "random forest requires bagging_freq with bagging_fraction < 1, or feature_fraction < 1",
        ("boosting", "bagging_freq", "bagging_fraction", "feature_fraction"),
    )]


def _check_top_k(options: Sequence[Option]) -> List[ConstraintViolation]:
    if _first(options, gen.TopK) is None:
        return []
    parallelism = _first(options, gen.Parallelism)
    if parallelism is not None and isinstance(parallelism.value, par.VotingParallel):
        return []
    return [IncompatibleOption(
        "TOP_K_REQUIRES_VOTING",
        "top_k is only used by the voting parallel tree learner",
        ("top_k", "tree_learner"),
    )]


def _is_regression(application: app.Application, *kinds: type) -> bool:
    if not isinstance(application, app.Regression):
        return False
    return not kinds or isinstance(application.app, kinds)


def _is_one_vs_all(application: app.Application) -> bool:
    return (isinstance(application, app.MultiClass)
            and application.style is app.MultiClassStyle.ONE_VS_ALL)


# (option class, constraint code, objectives under which it is meaningful, message)
_OBJECTIVE_SCOPED: List[Tuple[Type[Param], str, Callable[[app.Application], bool], str]] = [
    (
        gen.Alpha,
        "ALPHA_REQUIRES_HUBER_OR_QUANTILE",
        lambda a: _is_regression(a, app.Huber, app.Quantile),
        "alpha is only used by huber and quantile regression",
    ),
    (
        gen.Sigmoid,
        "SIGMOID_REQUIRES_BINARY_RANKING_OR_OVA",
        lambda a: isinstance(a, (app.BinaryClassification, app.LambdaRank)) or _is_one_vs_all(a),
        "sigmoid is only used by binary, multiclassova and lambdarank objectives",
    ),
    (
        gen.RegSqrt,
        "REG_SQRT_REQUIRES_REGRESSION",
        lambda a: _is_regression(a),
        "reg_sqrt is only used by regression objectives",
    ),
    (
        gen.BoostFromAverage,
        "BOOST_FROM_AVERAGE_OBJECTIVE",
        lambda a: (_is_regression(a)
                   or isinstance(a, (app.BinaryClassification, app.CrossEntropy))
                   or _is_one_vs_all(a)),
        "boost_from_average is only used by regression, binary, multiclassova and cross-entropy objectives",
    ),
]


def _check_objective_scoped(options: Sequence[Option]) -> List[ConstraintViolation]:
    application = _application(options)
    violations: List[ConstraintViolation] = []
    for option_cls, code, allowed, message in _OBJECTIVE_SCOPED:
        option = _first(options, option_cls)
        if option is not None and not allowed(application):
            violations.append(IncompatibleOption(
                code,
                f"{message} (objective is {keys.objective_literal(application)})",
                (keys.OPTION_KEYS[option_cls], "objective"),
            ))
    return violations


def _check_unbalance(options: Sequence[Option]) -> List[ConstraintViolation]:
    application = _application(options)
    if not isinstance(application, app.BinaryClassification):
        return []
    unbalanced = _first(application.params, app.IsUnbalance)
    weighted = _first(application.params, app.ScalePosWeight)
    if unbalanced is not None and unbalanced.value and weighted is not None:
        return [ConflictingOptions(
            "UNBALANCE_AND_SCALE_POS_WEIGHT",
            "is_unbalance and scale_pos_weight cannot be used together",
            ("is_unbalance", "scale_pos_weight"),
        )]
    return []


def _check_goss_rates(options: Sequence[Option]) -> List[ConstraintViolation]:
    boosting = _first(options, gen.BoostingType)
    if boosting is None or not isinstance(boosting.value, bst.GOSS):
        return []
    top_rate = _first(boosting.value.params, bst.TopRate)
    other_rate = _first(boosting.value.params, bst.OtherRate)
    if top_rate is None or other_rate is None:
        return []
    if top_rate.value.value + other_rate.value.value > 1.0:
        return [ConflictingOptions(
            "GOSS_RATES_EXCEED_ONE",
            "top_rate + other_rate must not exceed 1",
            ("top_rate", "other_rate"),
        )]
    return []


_EXCLUSIVE_PREDICTION_OUTPUTS = (gen.PredictRawScore, gen.PredictLeafIndex, gen.PredictContrib)


def _check_prediction_outputs(options: Sequence[Option]) -> List[ConstraintViolation]:
    enabled = [
        keys.OPTION_KEYS[type(option)]
        for option in options
        if isinstance(option, _EXCLUSIVE_PREDICTION_OUTPUTS) and option.value
    ]
    if len(enabled) > 1:
        return [ConflictingOptions(
            "EXCLUSIVE_PREDICTION_OUTPUT",
            f"only one of {', '.join(enabled)} may be enabled",
            tuple(enabled),
        )]
    return []


_CHECKS = (
    _check_multiclass,
    _check_socket_machine_list,
    _check_random_forest,
    _check_top_k,
    _check_objective_scoped,
    _check_unbalance,
    _check_goss_rates,
    _check_prediction_outputs,
)


def _check_duplicates(entries: Sequence[Entry]) -> List[ConstraintViolation]:
    counts: Dict[str, int] = {}
    for entry in entries:
        counts[entry.key] = counts.get(entry.key, 0) + 1
    return [
        DuplicateOption("DUPLICATE_KEY", f"option '{key}' given {count} times", (key,))
        for key, count in counts.items()
        if count > 1
    ]


def find_violations(options: Sequence[Option]) -> List[ConstraintViolation]:
    """All constraint violations of ``options``, without raising.

    Duplicates come first, then the cross-option checks in a fixed order.
    """
    entries = [entry for option in options for entry in flatten(option)]
    violations = _check_duplicates(entries)
    for check in _CHECKS:
        violations.extend(check(options))
    return violations


def compose(
    options: Iterable[Option] = (),
    application: Optional[app.Application] = None,
    booster: Optional[bst.Booster] = None,
) -> OptionSet:
    """Validate a selection of options and flatten it into an option set.

    Args:
        options: General and prediction options, in the desired order
        application: Optional learning task, placed first as ``objective``
        booster: Optional booster, placed after the application as ``boosting``

    Returns:
        Flattened option set ready for serialization

    Raises:
        ConfigurationError: If something other than a general or prediction
            option is passed in ``options``
        CompositionError: If any cross-option constraint is violated
    """
    selection: List[Option] = []
    if application is not None:
        selection.append(gen.Objective(application))
    if booster is not None:
        selection.append(gen.BoostingType(booster))

    for option in options:
        if not isinstance(option, (Param, PredictionParam)):
            raise ConfigurationError(
                f"{option!r} is not a top-level option",
                error_code="OPTION_TYPE_MISMATCH",
                context={"option": type(option).__name__}
            )
        selection.append(option)

    violations = find_violations(selection)
    if violations:
        logger.warning(
            f"Rejected configuration with {len(violations)} violation(s)",
            extra={'context': {'codes': [v.code for v in violations]}}
        )
        raise CompositionError(violations)

    entries = tuple(entry for option in selection for entry in flatten(option))
    logger.debug(f"Composed {len(selection)} options into {len(entries)} entries")
    return OptionSet(entries)
