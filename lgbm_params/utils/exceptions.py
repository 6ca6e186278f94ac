# lgbm_params/utils/exceptions.py
"""Exception hierarchy and constraint violation records for lgbm_params.

Refinement failures are raised the moment a bad raw value is wrapped.
Composition failures are collected as ``ConstraintViolation`` records and
raised together in a single ``CompositionError``.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple


class LgbmParamsError(Exception):
    """Base exception for all lgbm_params errors.

    Carries an optional machine-readable error code and a context
    dictionary that is rendered into the string form of the error.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ) -> None:
        """Initialize LgbmParamsError.

        Args:
            message: Human-readable error message
            error_code: Optional error code for programmatic handling
            context: Optional dictionary with additional error context
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}

    def __str__(self) -> str:
        """Return string representation of error."""
        base_msg = self.message
        if self.error_code:
            base_msg = f"[{self.error_code}] {base_msg}"
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base_msg = f"{base_msg} (Context: {context_str})"
        return base_msg


class ConfigurationError(LgbmParamsError):
    """Raised when an option or configuration is invalid.

    This exception is raised for issues with:
    - Payloads of the wrong type for an option
    - Sub-options placed in the wrong container
    - Unknown keys in a configuration file
    """
    pass


class RefinementFailure(Enum):
    """Which invariant of a refined number was violated."""

    BELOW_LOWER_BOUND = "below_lower_bound"
    ABOVE_UPPER_BOUND = "above_upper_bound"
    NOT_STRICTLY_POSITIVE = "not_strictly_positive"
    NOT_INTEGER = "not_integer"
    NOT_A_NUMBER = "not_a_number"
    NOT_FINITE = "not_finite"


class InvalidRefinementValue(ConfigurationError):
    """Raised when a raw value does not satisfy a refined type's invariant."""

    def __init__(
        self,
        type_name: str,
        kind: RefinementFailure,
        value: Any,
        bound: Optional[float] = None
    ) -> None:
        """Initialize InvalidRefinementValue.

        Args:
            type_name: Name of the refined type being constructed
            kind: The violated invariant
            value: Offending raw value
            bound: Boundary that was crossed, when the failure is a bound
        """
        if bound is None:
            message = f"{type_name} rejected {value!r}: {kind.value}"
        else:
            message = f"{type_name} rejected {value!r}: {kind.value} (bound {bound})"
        super().__init__(
            message,
            error_code="INVALID_REFINEMENT_VALUE",
            context={"type": type_name, "kind": kind.value, "value": value, "bound": bound}
        )
        self.type_name = type_name
        self.kind = kind
        self.value = value
        self.bound = bound


@dataclass(frozen=True)
class ConstraintViolation:
    """A single constraint broken by a combination of options.

    Attributes:
        code: Stable identifier of the violated constraint
        message: Human-readable explanation
        keys: External option keys involved in the violation
    """

    code: str
    message: str
    keys: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class DuplicateOption(ConstraintViolation):
    """The same single-valued key was supplied more than once."""


@dataclass(frozen=True)
class MissingDependentOption(ConstraintViolation):
    """An option requires another option (or payload) that is absent."""


@dataclass(frozen=True)
class IncompatibleOption(ConstraintViolation):
    """An option is only meaningful under a different top-level choice."""


@dataclass(frozen=True)
class ConflictingOptions(ConstraintViolation):
    """Two options may not be used together."""


class CompositionError(ConfigurationError):
    """Raised when a set of options cannot be composed.

    Every violation found during composition is reported, so a caller can
    fix the whole configuration in one pass.
    """

    def __init__(self, violations: Sequence[ConstraintViolation]) -> None:
        """Initialize CompositionError.

        Args:
            violations: All constraint violations found, in discovery order
        """
        self.violations: List[ConstraintViolation] = list(violations)
        summary = "; ".join(v.message for v in self.violations)
        super().__init__(
            f"{len(self.violations)} option constraint(s) violated: {summary}",
            error_code="COMPOSITION_FAILED",
            context={"codes": [v.code for v in self.violations]}
        )

    @property
    def codes(self) -> List[str]:
        """Constraint codes of all violations, in discovery order."""
        return [v.code for v in self.violations]


class FileOperationError(LgbmParamsError):
    """Raised when reading or writing configuration files fails.

    This exception is raised for issues with:
    - File reading/writing
    - Directory creation
    - Log file setup
    """
    pass


# Utility functions for error handling
def handle_and_reraise(
    exception: Exception,
    error_class: type,
    message: str,
    error_code: Optional[str] = None,
    context: Optional[Dict[str, Any]] = None
) -> None:
    """Re-raise an external exception as an lgbm_params exception.

    The original exception is chained and summarized in the context.

    Args:
        exception: Original exception that was caught
        error_class: LgbmParamsError subclass to raise
        message: Custom error message
        error_code: Optional error code
        context: Optional error context

    Raises:
        error_class: The specified lgbm_params exception
    """
    if context is None:
        context = {}

    context["original_error"] = str(exception)
    context["original_error_type"] = type(exception).__name__

    raise error_class(message, error_code, context) from exception


def validate_parameter(
    param_name: str,
    param_value: Any,
    valid_values: Optional[List[Any]] = None,
    min_value: Optional[float] = None,
    max_value: Optional[float] = None,
    required: bool = False
) -> None:
    """Validate a parameter value and raise ConfigurationError if invalid.

    Args:
        param_name: Name of the parameter being validated
        param_value: Value to validate
        valid_values: List of valid values (if applicable)
        min_value: Minimum allowed value (for numeric parameters)
        max_value: Maximum allowed value (for numeric parameters)
        required: Whether the parameter is required (cannot be None)

    Raises:
        ConfigurationError: If validation fails
    """
    if required and param_value is None:
        raise ConfigurationError(
            f"Parameter '{param_name}' is required but was not provided",
            error_code="PARAM_REQUIRED",
            context={"parameter": param_name}
        )

    if param_value is None:
        return

    if valid_values is not None and param_value not in valid_values:
        raise ConfigurationError(
            f"Parameter '{param_name}' must be one of {valid_values}, got {param_value}",
            error_code="PARAM_INVALID_VALUE",
            context={"parameter": param_name, "value": param_value, "valid_values": valid_values}
        )

    if min_value is not None and param_value < min_value:
        raise ConfigurationError(
            f"Parameter '{param_name}' must be >= {min_value}, got {param_value}",
            error_code="PARAM_TOO_SMALL",
            context={"parameter": param_name, "value": param_value, "min_value": min_value}
        )

    if max_value is not None and param_value > max_value:
        raise ConfigurationError(
            f"Parameter '{param_name}' must be <= {max_value}, got {param_value}",
            error_code="PARAM_TOO_LARGE",
            context={"parameter": param_name, "value": param_value, "max_value": max_value}
        )


def validate_single_line(param_name: str, text: str) -> None:
    """Reject text that would break the one-pair-per-line config file form.

    Raises:
        ConfigurationError: If ``text`` contains a line break
    """
    if any(ch in text for ch in "\r\n"):
        raise ConfigurationError(
            f"Parameter '{param_name}' must not contain line breaks, got {text!r}",
            error_code="PARAM_LINE_BREAK",
            context={"parameter": param_name, "value": text}
        )


def create_error_context(**kwargs: Any) -> Dict[str, Any]:
    """Create an error context dictionary, stringifying complex objects.

    Args:
        **kwargs: Key-value pairs to include in context

    Returns:
        Dictionary with error context information
    """
    context = {}
    for key, value in kwargs.items():
        if hasattr(value, '__dict__') or hasattr(value, '__slots__'):
            context[key] = str(value)
        else:
            context[key] = value

    return context
