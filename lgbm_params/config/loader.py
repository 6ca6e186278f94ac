# lgbm_params/config/loader.py
"""Loading and saving LightGBM configurations.

This module turns flat LightGBM-style mappings (as found in YAML files or
environment variables) back into validated options, and writes composed
option sets out again:
- YAML loading with path resolution and an mtime-checked cache
- Environment variable overrides (``LGBM_PARAMS_<KEY>=value``)
- Reverse key lookup that regroups sub-option keys under their parent
- Writing LightGBM ``key=value`` config files
"""

import json
import os
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Type, Union

import yaml

from ..params import applications as app
from ..params import boosters as bst
from ..params import devices as dev
from ..params import keys
from ..params import parallelism as par
from ..params.base import ListOf, Option, Param, PredictionParam
from ..params.columns import ColName, ColumnSelector, Index
from ..params.compose import OptionSet, compose
from ..params.general import (
    BoostingType,
    Device,
    Metric,
    Objective,
    Parallelism,
    PredictionData,
    Task,
    TaskType,
    TrainingData,
)
from ..params.metrics import NDCG, MetricType
from ..params.refined import RefinedNumber
from ..params.serializer import LIST_DELIMITER, to_config_text, to_pairs
from ..utils.logger import get_logger
from ..utils.timer import timer, timed_operation
from ..utils.exceptions import (
    CompositionError,
    ConfigurationError,
    FileOperationError,
    LgbmParamsError,
    handle_and_reraise,
    validate_parameter,
    create_error_context
)

logger = get_logger(__name__)

ENV_PREFIX = "LGBM_PARAMS_"
DATA_KEY = "data"

_TOP_LEVEL: Dict[str, Type[Option]] = {
    key: cls for cls, key in keys.OPTION_KEYS.items()
    if issubclass(cls, (Param, PredictionParam)) and key != DATA_KEY
}
_SUB_OPTIONS: Dict[str, Type[Option]] = {
    key: cls for cls, key in keys.OPTION_KEYS.items()
    if not issubclass(cls, (Param, PredictionParam))
}
_STRUCTURAL_KEYS = (
    keys.NUM_CLASS_KEY,
    keys.NDCG_EVAL_AT_KEY,
    keys.NUM_MACHINES_KEY,
    keys.MACHINE_LIST_KEY,
    keys.LISTEN_PORT_KEY,
    keys.TIME_OUT_KEY,
)
_SOCKET_KEYS = (keys.MACHINE_LIST_KEY, keys.LISTEN_PORT_KEY, keys.TIME_OUT_KEY)

_REGRESSION_BY_LITERAL = {literal: cls for cls, literal in keys.REGRESSION_OBJECTIVES.items()}
_REGRESSION_FAMILIES: Dict[type, type] = {
    app.Fair: app.FairRegressionParam,
    app.Poisson: app.PoissonRegressionParam,
    app.Tweedie: app.TweedieRegressionParam,
}
_MULTICLASS_BY_LITERAL = {literal: style for style, literal in keys.MULTICLASS_OBJECTIVES.items()}
_CROSS_ENTROPY_BY_LITERAL = {literal: xe for xe, literal in keys.CROSS_ENTROPY_OBJECTIVES.items()}
_BOOSTER_BY_NAME = {name: cls for cls, name in keys.BOOSTER_NAMES.items()}
_BOOSTER_FAMILIES: Dict[type, type] = {bst.DART: bst.DARTParam, bst.GOSS: bst.GOSSParam}
_DEVICE_BY_NAME = {name: cls for cls, name in keys.DEVICE_NAMES.items()}
_LEARNER_BY_NAME = {name: cls for cls, name in keys.TREE_LEARNER_NAMES.items()}
_ENUM_BY_LITERAL: Dict[Type[Enum], Dict[str, Enum]] = {
    enum_cls: {literal: member for member, literal in table.items()}
    for enum_cls, table in keys.ENUM_LITERALS.items()
}


def _unknown_value(key: str, raw: Any, valid: List[str]) -> ConfigurationError:
    return ConfigurationError(
        f"'{raw}' is not a valid value for '{key}'",
        error_code="UNKNOWN_OPTION_VALUE",
        context={"key": key, "value": raw, "valid_values": valid}
    )


def _parse_number(raw: Any, key: str) -> Any:
    """Numbers pass through; numeric strings are converted."""
    if not isinstance(raw, str):
        return raw
    text = raw.strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        raise ConfigurationError(
            f"'{raw}' is not a number (key '{key}')",
            error_code="OPTION_TYPE_MISMATCH",
            context={"key": key, "value": raw}
        ) from None


def _parse_list(raw: Any) -> List[Any]:
    if isinstance(raw, str):
        return [item.strip() for item in raw.split(LIST_DELIMITER) if item.strip()]
    if isinstance(raw, (list, tuple)):
        return list(raw)
    return [raw]


def _parse_column(raw: Any) -> ColumnSelector:
    # LightGBM reads a bare number as a column index
    if isinstance(raw, str) and raw.strip().isdigit():
        return Index(int(raw))
    if isinstance(raw, str):
        return ColName(raw)
    return ColumnSelector.coerce(raw)


def _parse_literal(enum_cls: Type[Enum], raw: Any, key: str) -> Enum:
    if isinstance(raw, enum_cls):
        return raw
    table = _ENUM_BY_LITERAL[enum_cls]
    literal = str(raw).strip()
    if literal not in table:
        raise _unknown_value(key, raw, list(table))
    return table[literal]


def parse_value(spec: Any, raw: Any, key: str) -> Any:
    """Convert a file or environment value into the raw payload for ``spec``.

    YAML already yields native types for most values; strings (from
    environment overrides or previously rendered files) are parsed with
    the same literal tables the serializer uses.

    Args:
        spec: Payload domain of the option (``value_type``)
        raw: Value read from the mapping
        key: External key, for error messages

    Returns:
        A value the option constructor accepts
    """
    if isinstance(spec, ListOf):
        return [parse_value(spec.item, item, key) for item in _parse_list(raw)]

    if spec is bool:
        if isinstance(raw, str) and raw.strip().lower() in ('true', 'false'):
            return raw.strip().lower() == 'true'
        return raw

    if spec in (int, float) or (isinstance(spec, type) and issubclass(spec, RefinedNumber)):
        return _parse_number(raw, key)

    if isinstance(spec, type) and issubclass(spec, ColumnSelector):
        return _parse_column(raw)

    if isinstance(spec, type) and issubclass(spec, Enum):
        return _parse_literal(spec, raw, key)

    return raw


class _SubOptionPool:
    """Sub-option and structural keys waiting to be claimed by their parent."""

    def __init__(self) -> None:
        self.options: List[Option] = []
        self.structural: Dict[str, Any] = {}

    def claim(self, family: type) -> List[Option]:
        claimed = [option for option in self.options if isinstance(option, family)]
        self.options = [option for option in self.options if not isinstance(option, family)]
        return claimed

    def take(self, key: str, default: Any = None) -> Any:
        return self.structural.pop(key, default)

    def leftovers(self) -> List[str]:
        return [keys.key_for(option) for option in self.options] + list(self.structural)


def _build_objective(raw: Any, pool: _SubOptionPool) -> app.Application:
    literal = str(raw).strip()

    if literal in _REGRESSION_BY_LITERAL:
        regression_cls = _REGRESSION_BY_LITERAL[literal]
        family = _REGRESSION_FAMILIES.get(regression_cls)
        return app.Regression(regression_cls(pool.claim(family)) if family else regression_cls())

    if literal == keys.BINARY_OBJECTIVE:
        return app.BinaryClassification(pool.claim(app.BinaryClassParam))

    if literal in _MULTICLASS_BY_LITERAL:
        num_class = _parse_number(pool.take(keys.NUM_CLASS_KEY, 0), keys.NUM_CLASS_KEY)
        return app.MultiClass(_MULTICLASS_BY_LITERAL[literal], num_class)

    if literal in _CROSS_ENTROPY_BY_LITERAL:
        return app.CrossEntropy(_CROSS_ENTROPY_BY_LITERAL[literal])

    if literal == keys.LAMBDARANK_OBJECTIVE:
        return app.LambdaRank(pool.claim(app.LambdaRankParam))

    valid = (list(_REGRESSION_BY_LITERAL) + [keys.BINARY_OBJECTIVE] + list(_MULTICLASS_BY_LITERAL)
             + list(_CROSS_ENTROPY_BY_LITERAL) + [keys.LAMBDARANK_OBJECTIVE])
    raise _unknown_value("objective", raw, valid)


def _build_booster(raw: Any, pool: _SubOptionPool) -> bst.Booster:
    name = str(raw).strip()
    validate_parameter("boosting", name, valid_values=list(_BOOSTER_BY_NAME))
    booster_cls = _BOOSTER_BY_NAME[name]
    family = _BOOSTER_FAMILIES.get(booster_cls)
    return booster_cls(pool.claim(family)) if family else booster_cls()


def _build_device(raw: Any, pool: _SubOptionPool) -> dev.DeviceKind:
    name = str(raw).strip()
    validate_parameter("device_type", name, valid_values=list(_DEVICE_BY_NAME))
    if _DEVICE_BY_NAME[name] is dev.GPU:
        return dev.GPU(pool.claim(dev.GPUParam))
    return dev.CPU()


def _build_tree_learner(raw: Any, pool: _SubOptionPool) -> par.ParallelismStyle:
    name = str(raw).strip()
    validate_parameter("tree_learner", name, valid_values=list(_LEARNER_BY_NAME))
    learner_cls = _LEARNER_BY_NAME[name]
    if learner_cls is par.Serial:
        return par.Serial()

    num_machines = _parse_number(pool.take(keys.NUM_MACHINES_KEY, 1), keys.NUM_MACHINES_KEY)
    # Socket learners always write their port and time-out; without any socket key it is MPI
    if not any(key in pool.structural for key in _SOCKET_KEYS):
        return learner_cls(par.MPIParallelism(num_machines))

    network = par.SocketParallelism(
        num_machines=num_machines,
        machine_list_file=pool.take(keys.MACHINE_LIST_KEY),
        local_listen_port=_parse_number(
            pool.take(keys.LISTEN_PORT_KEY, par.DEFAULT_LISTEN_PORT), keys.LISTEN_PORT_KEY
        ),
        time_out=_parse_number(pool.take(keys.TIME_OUT_KEY, par.DEFAULT_TIME_OUT_MINUTES), keys.TIME_OUT_KEY),
    )
    return learner_cls(network)


def _build_metrics(raw: Any, pool: _SubOptionPool) -> List[Any]:
    eval_at = pool.take(keys.NDCG_EVAL_AT_KEY)
    literals = _parse_list(raw)
    ndcg_literal = keys.METRIC_NAMES[MetricType.NDCG]

    if eval_at is not None and ndcg_literal not in literals:
        # Put it back so it is reported as an orphan
        pool.structural[keys.NDCG_EVAL_AT_KEY] = eval_at

    metrics: List[Any] = []
    for literal in literals:
        if literal == ndcg_literal and eval_at is not None:
            positions = [_parse_number(p, keys.NDCG_EVAL_AT_KEY) for p in _parse_list(eval_at)]
            metrics.append(NDCG(positions))
        else:
            metrics.append(_parse_literal(MetricType, literal, "metric"))
    return metrics


_COMPOSITE_BUILDERS: Dict[str, Callable[[Any, _SubOptionPool], Any]] = {
    keys.OPTION_KEYS[Objective]: _build_objective,
    keys.OPTION_KEYS[BoostingType]: _build_booster,
    keys.OPTION_KEYS[Device]: _build_device,
    keys.OPTION_KEYS[Parallelism]: _build_tree_learner,
    keys.OPTION_KEYS[Metric]: _build_metrics,
}


class ConfigLoader:
    """Configuration loader for LightGBM option sets.

    Reads flat YAML mappings keyed by LightGBM option names, applies
    environment overrides, rebuilds the nested option structure and
    composes it into a validated ``OptionSet``.

    Example:
        >>> loader = ConfigLoader('configs/')
        >>> option_set = loader.load_options('binary.yaml')
        >>> loader.write_config_file(option_set, 'train.conf')
        >>>
        >>> errors = loader.validate_config_file('staging.yaml')
        >>> if not errors:
        ...     option_set = loader.load_options('staging.yaml')
    """

    def __init__(
        self,
        config_dir: Optional[Union[str, Path]] = None,
        allow_environment_override: bool = True,
        cache_enabled: bool = True,
        encoding: str = 'utf-8'
    ) -> None:
        """Initialize configuration loader.

        Args:
            config_dir: Directory relative paths are resolved against
                (defaults to the working directory)
            allow_environment_override: Whether to allow environment variable overrides
            cache_enabled: Whether to cache loaded files
            encoding: File encoding for configuration files
        """
        self.config_dir = Path(config_dir) if config_dir else Path.cwd()
        self.allow_environment_override = allow_environment_override
        self.cache_enabled = cache_enabled
        self.encoding = encoding

        # Configuration cache
        self._cache: Dict[str, Dict[str, Any]] = {}
        self._file_timestamps: Dict[str, float] = {}

        logger.debug(
            f"Initialized ConfigLoader (dir={self.config_dir}, "
            f"environment override={allow_environment_override})"
        )

    @timer(name="config_loading")
    def load_yaml(self, file_path: Union[str, Path]) -> Dict[str, Any]:
        """Load a YAML mapping.

        Args:
            file_path: Path to YAML file

        Returns:
            Dictionary with loaded configuration

        Raises:
            ConfigurationError: If file cannot be loaded or parsed
        """
        file_path = self._resolve_config_path(file_path)

        try:
            if self.cache_enabled:
                cache_key = str(file_path)
                file_mtime = file_path.stat().st_mtime

                if (cache_key in self._cache and
                        self._file_timestamps.get(cache_key) == file_mtime):
                    logger.debug(f"Loading config from cache: {file_path.name}")
                    return self._cache[cache_key].copy()

            with open(file_path, 'r', encoding=self.encoding) as f:
                config = yaml.safe_load(f)

            if config is None:
                config = {}

            if not isinstance(config, dict):
                raise ConfigurationError(
                    f"Configuration file must contain a mapping, got {type(config).__name__}",
                    error_code="CONFIG_NOT_A_MAPPING",
                    context={"file_path": str(file_path)}
                )

            if self.cache_enabled:
                cache_key = str(file_path)
                self._cache[cache_key] = config.copy()
                self._file_timestamps[cache_key] = file_path.stat().st_mtime

            logger.debug(f"Loaded configuration from {file_path}")
            return config

        except ConfigurationError:
            raise
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Error parsing YAML file {file_path}: {e}",
                error_code="CONFIG_PARSE_FAILED",
                context={"file_path": str(file_path)}
            ) from e
        except Exception as e:
            handle_and_reraise(
                e, ConfigurationError,
                f"Error loading configuration file {file_path}",
                error_code="CONFIG_LOAD_FAILED",
                context=create_error_context(file_path=str(file_path))
            )

    def _resolve_config_path(self, file_path: Union[str, Path]) -> Path:
        """Resolve configuration file path."""
        file_path = Path(file_path)

        if not file_path.is_absolute():
            file_path = self.config_dir / file_path

        if not file_path.exists():
            if file_path.suffix not in ['.yaml', '.yml']:
                yaml_path = file_path.with_suffix('.yaml')
                if yaml_path.exists():
                    return yaml_path

                yml_path = file_path.with_suffix('.yml')
                if yml_path.exists():
                    return yml_path

            raise ConfigurationError(
                f"Configuration file not found: {file_path}",
                error_code="CONFIG_NOT_FOUND",
                context={"file_path": str(file_path)}
            )

        return file_path

    def save_yaml(self, config: Mapping[str, Any], file_path: Union[str, Path]) -> None:
        """Save a mapping to a YAML file, keeping key order."""
        try:
            file_path = Path(file_path)
            file_path.parent.mkdir(parents=True, exist_ok=True)

            with open(file_path, 'w', encoding=self.encoding) as f:
                yaml.safe_dump(
                    dict(config), f,
                    default_flow_style=False,
                    sort_keys=False,
                    indent=2,
                    allow_unicode=True
                )

            logger.info(f"Configuration saved to {file_path}")

        except Exception as e:
            handle_and_reraise(
                e, FileOperationError,
                f"Error saving configuration to {file_path}",
                error_code="CONFIG_SAVE_FAILED",
                context=create_error_context(file_path=str(file_path))
            )

    def apply_environment_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides to a flat configuration.

        Environment variables are expected in the format
        ``LGBM_PARAMS_<KEY>=value`` where ``<KEY>`` is the LightGBM key in
        any case, e.g. ``LGBM_PARAMS_NUM_LEAVES=63``. Existing keys keep
        their position; new keys are appended.
        """
        if not self.allow_environment_override:
            return config

        env_overrides = {
            env_key[len(ENV_PREFIX):].lower(): self._parse_env_value(env_value)
            for env_key, env_value in os.environ.items()
            if env_key.startswith(ENV_PREFIX)
        }

        if env_overrides:
            logger.info(f"Applying environment overrides: {sorted(env_overrides)}")
            config = dict(config)
            config.update(env_overrides)

        return config

    def _parse_env_value(self, value: str) -> Any:
        """Parse environment variable value to appropriate type."""
        # JSON covers lists, numbers and true/false
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            pass

        try:
            if '.' in value:
                return float(value)
            else:
                return int(value)
        except ValueError:
            pass

        if value.lower() in ('true', 'false'):
            return value.lower() == 'true'

        return value

    def options_from_mapping(self, config: Mapping[str, Any]) -> List[Option]:
        """Rebuild options from a flat LightGBM-style mapping.

        Sub-option keys (``drop_rate``, ``num_class``, ``gpu_device_id``,
        ...) are gathered into the option they belong to. ``data`` is read
        as prediction data when ``task`` is ``predict``, otherwise as
        training data.

        Args:
            config: Mapping of LightGBM keys to values

        Returns:
            Options in mapping order, ready for ``compose``

        Raises:
            ConfigurationError: For unknown keys (``UNKNOWN_OPTION_KEY``),
                sub-options whose parent is missing or does not accept them
                (``ORPHAN_SUB_OPTION``) and invalid values
        """
        pool = _SubOptionPool()
        top_level: List[tuple] = []

        for key, raw in config.items():
            key = str(key)
            if key in _STRUCTURAL_KEYS:
                pool.structural[key] = raw
            elif key in _SUB_OPTIONS:
                option_cls = _SUB_OPTIONS[key]
                pool.options.append(option_cls(parse_value(option_cls.value_type, raw, key)))
            elif key in _TOP_LEVEL or key == DATA_KEY:
                top_level.append((key, raw))
            else:
                raise ConfigurationError(
                    f"Unknown option key '{key}'",
                    error_code="UNKNOWN_OPTION_KEY",
                    context={"key": key}
                )

        task = config.get(keys.OPTION_KEYS[Task])
        predicting = task is not None and _parse_literal(TaskType, task, "task") is TaskType.PREDICT

        options: List[Option] = []
        for key, raw in top_level:
            if key in _COMPOSITE_BUILDERS:
                option_cls = _TOP_LEVEL[key]
                options.append(option_cls(_COMPOSITE_BUILDERS[key](raw, pool)))
                continue
            if key == DATA_KEY:
                option_cls = PredictionData if predicting else TrainingData
            else:
                option_cls = _TOP_LEVEL[key]
            options.append(option_cls(parse_value(option_cls.value_type, raw, key)))

        leftovers = pool.leftovers()
        if leftovers:
            raise ConfigurationError(
                f"Options without a matching parent: {', '.join(leftovers)}",
                error_code="ORPHAN_SUB_OPTION",
                context={"keys": leftovers}
            )

        return options

    def load_options(self, config_file: Union[str, Path]) -> OptionSet:
        """Load, override, rebuild and compose a configuration file.

        Args:
            config_file: Path to a YAML file of LightGBM keys

        Returns:
            Validated option set

        Raises:
            ConfigurationError: If the file is unreadable or holds invalid options
            CompositionError: If the options violate a cross-option constraint
        """
        with timed_operation("option_loading"):
            config = self.apply_environment_overrides(self.load_yaml(config_file))
            option_set = compose(self.options_from_mapping(config))

        logger.info(f"Loaded {len(option_set)} entries from {config_file}")
        return option_set

    def save_options(self, option_set: OptionSet, file_path: Union[str, Path]) -> None:
        """Save an option set as a YAML mapping of rendered values."""
        self.save_yaml(dict(to_pairs(option_set)), file_path)

    def write_config_file(self, option_set: OptionSet, file_path: Union[str, Path]) -> Path:
        """Write an option set as a LightGBM ``key=value`` config file.

        Returns:
            Path of the written file

        Raises:
            FileOperationError: If the file cannot be written
        """
        file_path = Path(file_path)
        try:
            with timed_operation("config_file_write"):
                file_path.parent.mkdir(parents=True, exist_ok=True)
                file_path.write_text(to_config_text(option_set), encoding=self.encoding)
        except OSError as e:
            handle_and_reraise(
                e, FileOperationError,
                f"Error writing config file {file_path}",
                error_code="CONFIG_WRITE_FAILED",
                context=create_error_context(file_path=str(file_path))
            )

        logger.info(f"Wrote {len(option_set)} entries to {file_path}")
        return file_path

    def validate_config_file(self, config_file: Union[str, Path]) -> List[str]:
        """Validate a configuration file and return any errors.

        Every composition violation is reported as its own error.

        Args:
            config_file: Path to configuration file

        Returns:
            List of validation errors (empty if valid)
        """
        errors: List[str] = []

        try:
            self.load_options(config_file)
        except CompositionError as e:
            errors.extend(f"[{v.code}] {v.message}" for v in e.violations)
        except LgbmParamsError as e:
            errors.append(str(e))
        except Exception as e:
            errors.append(f"Validation error: {e}")

        return errors

    def clear_cache(self) -> None:
        """Clear the file cache."""
        self._cache.clear()
        self._file_timestamps.clear()
        logger.debug("Configuration cache cleared")


def load_config(config_file: Union[str, Path], **kwargs: Any) -> OptionSet:
    """Load an option set from a YAML file.

    Args:
        config_file: Path to configuration file
        **kwargs: Additional loader parameters

    Returns:
        Validated option set

    Example:
        >>> option_set = load_config('configs/binary.yaml')
        >>> option_set.get('objective')
        'binary'
    """
    loader = ConfigLoader(**kwargs)
    return loader.load_options(config_file)


def save_config(option_set: OptionSet, file_path: Union[str, Path]) -> None:
    """Save an option set as YAML; ``load_config`` reads it back."""
    ConfigLoader().save_options(option_set, file_path)


def validate_config_file(config_file: Union[str, Path]) -> List[str]:
    """Validate a configuration file.

    Args:
        config_file: Path to configuration file

    Returns:
        List of validation errors (empty if valid)

    Example:
        >>> errors = validate_config_file('configs/production.yaml')
        >>> for error in errors:
        ...     print(f"  - {error}")
    """
    loader = ConfigLoader()
    return loader.validate_config_file(config_file)


__all__ = [
    'ConfigLoader',
    'parse_value',
    'load_config',
    'save_config',
    'validate_config_file'
]
