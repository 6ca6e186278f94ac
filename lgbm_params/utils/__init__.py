"""lgbm_params - shared utilities.

Logging, timing and the exception hierarchy used across the package.

Example:
    >>> from lgbm_params.utils import get_logger, ConfigurationError
    >>> logger = get_logger(__name__)
"""

from .logger import (
    get_logger,
    configure_logging,
    set_log_level,
    temporary_log_level
)
from .timer import (
    timer,
    timed_operation,
    get_performance_stats,
    reset_performance_stats
)
from .exceptions import (
    LgbmParamsError,
    ConfigurationError,
    InvalidRefinementValue,
    RefinementFailure,
    CompositionError,
    ConstraintViolation,
    DuplicateOption,
    MissingDependentOption,
    IncompatibleOption,
    ConflictingOptions,
    FileOperationError,
    handle_and_reraise,
    validate_parameter,
    validate_single_line
)

__all__ = [
    # Logging utilities
    'get_logger',
    'configure_logging',
    'set_log_level',
    'temporary_log_level',

    # Timing utilities
    'timer',
    'timed_operation',
    'get_performance_stats',
    'reset_performance_stats',

    # Exceptions and violations
    'LgbmParamsError',
    'ConfigurationError',
    'InvalidRefinementValue',
    'RefinementFailure',
    'CompositionError',
    'ConstraintViolation',
    'DuplicateOption',
    'MissingDependentOption',
    'IncompatibleOption',
    'ConflictingOptions',
    'FileOperationError',
    'handle_and_reraise',
    'validate_parameter',
    'validate_single_line'
]
