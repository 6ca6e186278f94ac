# lgbm_params/params/base.py
"""Option base class and payload coercion.

Every configuration knob is a frozen dataclass with a single ``value``
payload. Subclasses declare the payload domain through ``value_type``; the
payload is coerced and validated once, in ``__post_init__``, so an option
that exists is an option that is valid.

Example:
    >>> class LearningRate(Param):
    ...     value_type = PositiveDouble
    >>> LearningRate(0.1).value
    PositiveDouble(0.1)
"""

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from collections.abc import Iterable
from typing import Any, ClassVar, Tuple

from .columns import ColumnSelector
from .refined import RefinedNumber
from ..utils.exceptions import ConfigurationError, validate_single_line


class ListOf:
    """Payload domain: an ordered sequence of ``item`` values, stored as a tuple."""

    def __init__(self, item: Any) -> None:
        self.item = item

    def __repr__(self) -> str:
        return f"ListOf({self.item!r})"


class OneOf:
    """Payload domain: the first of several domains that accepts the value."""

    def __init__(self, *choices: Any) -> None:
        self.choices = choices

    def __repr__(self) -> str:
        return f"OneOf{self.choices!r}"


def _mismatch(owner: str, raw: Any, expected: Any) -> ConfigurationError:
    return ConfigurationError(
        f"{owner} cannot hold {raw!r}",
        error_code="OPTION_TYPE_MISMATCH",
        context={"option": owner, "value": raw, "expected": getattr(expected, '__name__', repr(expected))}
    )


def coerce_payload(spec: Any, raw: Any, owner: str) -> Any:
    """Coerce ``raw`` into the payload domain ``spec``.

    Args:
        spec: Payload domain (a type, ``ListOf`` or ``OneOf``)
        raw: Value supplied by the caller
        owner: Name of the option, for error messages

    Returns:
        The validated payload

    Raises:
        InvalidRefinementValue: If a refined number is out of range
        ConfigurationError: If the value has the wrong shape
    """
    if isinstance(spec, ListOf):
        if isinstance(raw, (str, bytes)) or not isinstance(raw, Iterable):
            raise _mismatch(owner, raw, spec)
        return tuple(coerce_payload(spec.item, item, owner) for item in raw)

    if isinstance(spec, OneOf):
        for choice in spec.choices:
            try:
                return coerce_payload(choice, raw, owner)
            except ConfigurationError:
                continue
        raise _mismatch(owner, raw, spec)

    if spec is bool:
        if isinstance(raw, bool):
            return raw
        raise _mismatch(owner, raw, bool)

    if spec is int:
        if isinstance(raw, int) and not isinstance(raw, bool):
            return raw
        raise _mismatch(owner, raw, int)

    if spec is float:
        if isinstance(raw, (int, float)) and not isinstance(raw, bool):
            return float(raw)
        raise _mismatch(owner, raw, float)

    if spec is Path:
        if isinstance(raw, (str, os.PathLike)):
            path = os.fspath(raw)
            validate_single_line(owner, path)
            return path
        raise _mismatch(owner, raw, Path)

    if isinstance(spec, type):
        if issubclass(spec, RefinedNumber):
            return spec.coerce(raw)
        if issubclass(spec, ColumnSelector):
            return ColumnSelector.coerce(raw)
        if issubclass(spec, Enum):
            if isinstance(raw, spec):
                return raw
            try:
                return spec(raw)
            except ValueError:
                raise _mismatch(owner, raw, spec) from None
        if isinstance(raw, spec):
            return raw

    raise _mismatch(owner, raw, spec)


def coerce_members(members: Iterable[Any], family: type, owner: str) -> Tuple[Any, ...]:
    """Check that every sub-option belongs to ``family``.

    Raises:
        ConfigurationError: If a member comes from another family
    """
    if isinstance(members, (str, bytes)) or not isinstance(members, Iterable):
        raise _mismatch(owner, members, family)
    members = tuple(members)
    for member in members:
        if not isinstance(member, family):
            raise _mismatch(owner, member, family)
    return members


@dataclass(frozen=True)
class Option:
    """A single configuration knob carrying one validated payload."""

    value: Any
    value_type: ClassVar[Any] = None

    def __post_init__(self) -> None:
        object.__setattr__(
            self, 'value', coerce_payload(self.value_type, self.value, type(self).__name__)
        )

    @property
    def raw(self) -> Any:
        """Payload with refined numbers unwrapped to plain numbers."""
        if isinstance(self.value, RefinedNumber):
            return self.value.value
        return self.value


class Param(Option):
    """General (top-level) option."""


class PredictionParam(Option):
    """Option that only affects the prediction task."""
