"""lgbm_params - configuration file handling.

Key Components:
- ConfigLoader: YAML loading, environment overrides and option rebuilding
- load_config / save_config: one-call YAML round trip for option sets
- validate_config_file: list every problem in a file without raising

Example:
    >>> from lgbm_params.config import load_config, validate_config_file
    >>> option_set = load_config('configs/binary.yaml')
"""

from .loader import (
    ConfigLoader,
    parse_value,
    load_config,
    save_config,
    validate_config_file
)

__all__ = [
    'ConfigLoader',
    'parse_value',
    'load_config',
    'save_config',
    'validate_config_file'
]
