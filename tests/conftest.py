"""Test configuration for pytest."""
import logging
import os
from pathlib import Path
from typing import Any, Dict

import pytest
import yaml

from lgbm_params.utils.logger import LgbmParamsLogger, ROOT_LOGGER_NAME
from lgbm_params.utils.timer import reset_performance_stats


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Remove any LGBM_PARAMS_* override leaking in from the shell."""
    for key in list(os.environ):
        if key.startswith("LGBM_PARAMS_"):
            monkeypatch.delenv(key, raising=False)
    yield


@pytest.fixture
def reset_logging():
    """Reset package logging before and after a test."""
    def _reset() -> None:
        root = logging.getLogger(ROOT_LOGGER_NAME)
        root.handlers.clear()
        root.filters.clear()
        root.setLevel(logging.NOTSET)
        LgbmParamsLogger._configured = False
        LgbmParamsLogger._loggers = {}

    _reset()
    yield
    _reset()


@pytest.fixture
def reset_timing():
    """Start and finish a test with an empty performance tracker."""
    reset_performance_stats()
    yield
    reset_performance_stats()


@pytest.fixture
def sample_config_dict() -> Dict[str, Any]:
    """Flat LightGBM configuration for a binary DART model."""
    return {
        'task': 'train',
        'objective': 'binary',
        'is_unbalance': True,
        'boosting': 'dart',
        'drop_rate': 0.2,
        'data': 'train.csv',
        'valid': ['valid_1.csv', 'valid_2.csv'],
        'learning_rate': 0.05,
        'num_leaves': 63,
        'label_column': 0,
        'metric': ['auc', 'binary_logloss'],
        'monotone_constraints': [1, -1, 0],
        'verbosity': -1,
    }


@pytest.fixture
def temp_config_file(tmp_path: Path, sample_config_dict: Dict[str, Any]) -> Path:
    """Write the sample configuration to a YAML file."""
    config_file = tmp_path / "binary.yaml"
    with open(config_file, 'w') as f:
        yaml.safe_dump(sample_config_dict, f, sort_keys=False)
    return config_file
