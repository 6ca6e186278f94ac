# lgbm_params/__init__.py
"""lgbm-params - Validated configuration model for the LightGBM CLI.

Build LightGBM configurations from typed options instead of raw strings:
- Refined numeric types reject out-of-range values at construction
- A closed option vocabulary mirrors LightGBM's documented parameters
- Composition checks cross-option constraints and reports all violations
- Rendering to config-file lines or command-line tokens is deterministic

Quick Start:
    >>> import lgbm_params as lp
    >>> from lgbm_params.params import (
    ...     LearningRate, NumLeaves, Metric, MetricType,
    ...     BinaryClassification, IsUnbalance, GOSS, TopRate, OtherRate
    ... )
    >>> option_set = lp.compose(
    ...     [LearningRate(0.05), NumLeaves(63), Metric([MetricType.AUC])],
    ...     application=BinaryClassification([IsUnbalance(True)]),
    ...     booster=GOSS([TopRate(0.2), OtherRate(0.1)]),
    ... )
    >>> lp.to_command_line(option_set)[:2]
    ['--objective=binary', '--is_unbalance=true']

Configuration Files:
    >>> option_set = lp.load_config('configs/binary.yaml')
    >>> lp.ConfigLoader().write_config_file(option_set, 'train.conf')
"""

# Package metadata
__version__ = "0.1.0"
__license__ = "MIT"
__description__ = "Validated configuration model for the LightGBM command-line tool"

# Configure package-level logging
from .utils.logger import configure_logging, get_logger

configure_logging(level="INFO")

logger = get_logger(__name__)
logger.debug(f"lgbm_params v{__version__} initialized")

# Composition and rendering
from .params.compose import Entry, OptionSet, compose, flatten, find_violations
from .params.serializer import (
    render_value,
    to_pairs,
    to_config_lines,
    to_config_text,
    to_command_line,
    serialize
)
from .params.keys import key_for, literal_for

# Configuration files
from .config.loader import (
    ConfigLoader,
    load_config,
    save_config,
    validate_config_file
)

# Exceptions
from .utils.exceptions import (
    LgbmParamsError,
    ConfigurationError,
    InvalidRefinementValue,
    RefinementFailure,
    CompositionError,
    ConstraintViolation,
    FileOperationError
)

__all__ = [
    # Metadata
    '__version__',

    # Composition and rendering
    'Entry',
    'OptionSet',
    'compose',
    'flatten',
    'find_violations',
    'render_value',
    'to_pairs',
    'to_config_lines',
    'to_config_text',
    'to_command_line',
    'serialize',
    'key_for',
    'literal_for',

    # Configuration files
    'ConfigLoader',
    'load_config',
    'save_config',
    'validate_config_file',

    # Exceptions
    'LgbmParamsError',
    'ConfigurationError',
    'InvalidRefinementValue',
    'RefinementFailure',
    'CompositionError',
    'ConstraintViolation',
    'FileOperationError',

    # Logging
    'configure_logging',
    'get_logger'
]
