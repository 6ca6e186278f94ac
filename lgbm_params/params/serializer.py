# lgbm_params/params/serializer.py
"""Rendering of a composed option set into LightGBM key/value strings.

Two output forms are provided: config-file lines (``key=value``) and
command-line tokens (``--key=value``). Both come from ``to_pairs`` so they
always agree on keys, values and order.

Example:
    >>> option_set = compose([LearningRate(0.1)], booster=DART([DropRate(0.2)]))
    >>> to_pairs(option_set)
    [('boosting', 'dart'), ('drop_rate', '0.2'), ('learning_rate', '0.1')]
    >>> to_command_line(option_set)
    ['--boosting=dart', '--drop_rate=0.2', '--learning_rate=0.1']
"""

import functools
from enum import Enum
from pathlib import PurePath
from typing import Any, Iterable, List, Optional, Tuple

from . import keys
from .applications import Application
from .base import Option
from .boosters import Booster
from .columns import ColumnSelector
from .compose import OptionSet, compose
from .metrics import NDCG, MetricType
from .refined import RefinedNumber, render_double
from ..utils.exceptions import ConfigurationError

LIST_DELIMITER = ","


@functools.singledispatch
def render_value(value: Any) -> str:
    """Render a single typed value to its LightGBM literal.

    Raises:
        ConfigurationError: If the value type has no rendering rule
    """
    raise ConfigurationError(
        f"No rendering rule for {value!r}",
        error_code="UNRENDERABLE_VALUE",
        context={"type": type(value).__name__}
    )


@render_value.register
def _(value: bool) -> str:
    return "true" if value else "false"


@render_value.register
def _(value: int) -> str:
    return str(value)


@render_value.register
def _(value: float) -> str:
    return render_double(value)


@render_value.register
def _(value: str) -> str:
    return value


@render_value.register
def _(value: PurePath) -> str:
    return str(value)


@render_value.register
def _(value: RefinedNumber) -> str:
    return value.render()


@render_value.register
def _(value: ColumnSelector) -> str:
    return value.render()


@render_value.register
def _(value: Enum) -> str:
    try:
        return keys.literal_for(value)
    except KeyError:
        raise ConfigurationError(
            f"No literal for {value!r}",
            error_code="UNRENDERABLE_VALUE",
            context={"type": type(value).__name__}
        ) from None


@render_value.register
def _(value: NDCG) -> str:
    return keys.METRIC_NAMES[MetricType.NDCG]


@render_value.register(tuple)
@render_value.register(list)
def _(value) -> str:
    return LIST_DELIMITER.join(render_value(item) for item in value)


def to_pairs(option_set: OptionSet) -> List[Tuple[str, str]]:
    """Ordered ``(key, value)`` string pairs of an option set."""
    return [(entry.key, render_value(entry.value)) for entry in option_set]


def to_config_lines(option_set: OptionSet) -> List[str]:
    """``key=value`` lines, one per entry, as in a LightGBM config file."""
    return [f"{key}={value}" for key, value in to_pairs(option_set)]


def to_config_text(option_set: OptionSet) -> str:
    """Full config file contents, newline terminated."""
    lines = to_config_lines(option_set)
    return "\n".join(lines) + "\n" if lines else ""


def to_command_line(option_set: OptionSet) -> List[str]:
    """``--key=value`` tokens for the LightGBM executable."""
    return [f"--{key}={value}" for key, value in to_pairs(option_set)]


def serialize(
    options: Iterable[Option] = (),
    application: Optional[Application] = None,
    booster: Optional[Booster] = None,
) -> List[Tuple[str, str]]:
    """Compose options and render them in one step.

    Raises:
        CompositionError: If the options violate a cross-option constraint
    """
    return to_pairs(compose(options, application=application, booster=booster))
