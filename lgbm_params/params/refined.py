# lgbm_params/params/refined.py
"""Refined numeric value types.

Each type wraps a raw number and guarantees a range invariant for its whole
lifetime. The constructor is the only way to obtain an instance and it
raises ``InvalidRefinementValue`` when the invariant does not hold, so code
receiving a refined value never needs to check it again.

Example:
    >>> rate = PositiveDouble(0.1)
    >>> rate.value
    0.1
    >>> rate.render()
    '0.1'
    >>> LeftOpenProperFraction(1.0).render()
    '1.0'
"""

import functools
import math
import numbers
from typing import Any, ClassVar, Optional, Union

import numpy as np

from ..utils.exceptions import InvalidRefinementValue, RefinementFailure

Number = Union[int, float]


@functools.total_ordering
class RefinedNumber:
    """Base class for immutable numbers carrying a range invariant.

    Subclasses only declare their bounds through class attributes; checking,
    comparison, hashing and rendering are shared.
    """

    __slots__ = ('_value',)

    integral: ClassVar[bool] = False
    lower: ClassVar[Optional[float]] = None
    lower_inclusive: ClassVar[bool] = True
    upper: ClassVar[Optional[float]] = None
    upper_inclusive: ClassVar[bool] = True
    lower_failure: ClassVar[RefinementFailure] = RefinementFailure.BELOW_LOWER_BOUND

    def __init__(self, raw: Number) -> None:
        object.__setattr__(self, '_value', self._check(raw))

    @classmethod
    def _check(cls, raw: Any) -> Number:
        """Return the normalized raw value or raise on a violated invariant."""
        name = cls.__name__
        if isinstance(raw, bool) or not isinstance(raw, numbers.Real):
            raise InvalidRefinementValue(name, RefinementFailure.NOT_A_NUMBER, raw)

        value: Number
        if cls.integral:
            if isinstance(raw, numbers.Integral):
                value = int(raw)
            elif math.isfinite(raw) and float(raw).is_integer():
                value = int(raw)
            else:
                raise InvalidRefinementValue(name, RefinementFailure.NOT_INTEGER, raw)
        else:
            try:
                value = float(raw)
            except OverflowError:
                raise cls._overflow(raw) from None
            if not math.isfinite(value):
                raise InvalidRefinementValue(name, RefinementFailure.NOT_FINITE, raw)
            # -0.0 renders as "-0.0"; normalize to positive zero
            value = value + 0.0

        if cls.lower is not None:
            if value < cls.lower or (value == cls.lower and not cls.lower_inclusive):
                raise InvalidRefinementValue(name, cls.lower_failure, raw, cls.lower)

        if cls.upper is not None:
            if value > cls.upper or (value == cls.upper and not cls.upper_inclusive):
                raise InvalidRefinementValue(name, RefinementFailure.ABOVE_UPPER_BOUND, raw, cls.upper)

        return value

    @classmethod
    def _overflow(cls, raw: Any) -> InvalidRefinementValue:
        """Error for an integer too large in magnitude to become a double."""
        name = cls.__name__
        if raw > 0 and cls.upper is not None:
            return InvalidRefinementValue(name, RefinementFailure.ABOVE_UPPER_BOUND, raw, cls.upper)
        if raw < 0 and cls.lower is not None:
            return InvalidRefinementValue(name, cls.lower_failure, raw, cls.lower)
        return InvalidRefinementValue(name, RefinementFailure.NOT_FINITE, raw)

    @classmethod
    def coerce(cls, raw: Any) -> 'RefinedNumber':
        """Return ``raw`` if it already has this type, otherwise construct one.

        Another refined type is unwrapped to its raw value and re-checked
        against this type's invariant.
        """
        if isinstance(raw, cls):
            return raw
        if isinstance(raw, RefinedNumber):
            raw = raw.value
        return cls(raw)

    @property
    def value(self) -> Number:
        """The wrapped raw number."""
        return self._value

    def render(self) -> str:
        """Decimal literal for the wrapped value, never in scientific notation."""
        if self.integral:
            return str(self._value)
        return np.format_float_positional(self._value, unique=True, trim='0')

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        return (type(self), (self._value,))

    @staticmethod
    def _raw(other: Any) -> Any:
        if isinstance(other, RefinedNumber):
            return other.value
        if isinstance(other, numbers.Real) and not isinstance(other, bool):
            return other
        return NotImplemented

    def __eq__(self, other: Any) -> bool:
        raw = self._raw(other)
        if raw is NotImplemented:
            return NotImplemented
        return self._value == raw

    def __lt__(self, other: Any) -> bool:
        raw = self._raw(other)
        if raw is NotImplemented:
            return NotImplemented
        return self._value < raw

    def __hash__(self) -> int:
        return hash(self._value)

    def __float__(self) -> float:
        return float(self._value)

    def __int__(self) -> int:
        return int(self._value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value!r})"

    def __str__(self) -> str:
        return self.render()


class PositiveInt(RefinedNumber):
    """Integer strictly greater than zero."""

    __slots__ = ()
    integral = True
    lower = 0
    lower_inclusive = False
    lower_failure = RefinementFailure.NOT_STRICTLY_POSITIVE


class NonNegativeInt(RefinedNumber):
    """Integer greater than or equal to zero (a natural number)."""

    __slots__ = ()
    integral = True
    lower = 0


class IntGreaterThanOne(RefinedNumber):
    """Integer strictly greater than one."""

    __slots__ = ()
    integral = True
    lower = 1
    lower_inclusive = False


class PositiveDouble(RefinedNumber):
    """Finite double strictly greater than zero."""

    __slots__ = ()
    lower = 0.0
    lower_inclusive = False
    lower_failure = RefinementFailure.NOT_STRICTLY_POSITIVE


class NonNegativeDouble(RefinedNumber):
    """Finite double greater than or equal to zero."""

    __slots__ = ()
    lower = 0.0


class ProperFraction(RefinedNumber):
    """Double in the closed interval [0, 1]."""

    __slots__ = ()
    lower = 0.0
    upper = 1.0


class LeftOpenProperFraction(RefinedNumber):
    """Double in (0, 1]: zero excluded, one included."""

    __slots__ = ()
    lower = 0.0
    lower_inclusive = False
    upper = 1.0


class OpenProperFraction(RefinedNumber):
    """Double in the open interval (0, 1)."""

    __slots__ = ()
    lower = 0.0
    lower_inclusive = False
    upper = 1.0
    upper_inclusive = False


class OneToTwoLeftSemiClosed(RefinedNumber):
    """Double in [1, 2). Used for the Tweedie variance power."""

    __slots__ = ()
    lower = 1.0
    upper = 2.0
    upper_inclusive = False


REFINED_TYPES = (
    PositiveInt,
    NonNegativeInt,
    IntGreaterThanOne,
    PositiveDouble,
    NonNegativeDouble,
    ProperFraction,
    LeftOpenProperFraction,
    OpenProperFraction,
    OneToTwoLeftSemiClosed,
)


def render_double(value: float) -> str:
    """Render a plain float with the same rule refined doubles use."""
    return np.format_float_positional(float(value), unique=True, trim='0')
