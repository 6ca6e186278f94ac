# lgbm_params/params/columns.py
"""Column selectors: pick a data column by position or by name."""

from dataclasses import dataclass
from typing import Any, Union

from .refined import NonNegativeInt
from ..utils.exceptions import ConfigurationError, validate_single_line


class ColumnSelector:
    """Marker base for the two ways of naming a column."""

    __slots__ = ()

    def render(self) -> str:
        raise NotImplementedError

    @staticmethod
    def coerce(raw: Any) -> 'ColumnSelector':
        """Build a selector from an int (position) or a str (name).

        Raises:
            ConfigurationError: If ``raw`` is neither
        """
        if isinstance(raw, ColumnSelector):
            return raw
        if isinstance(raw, str):
            return ColName(raw)
        if isinstance(raw, int) and not isinstance(raw, bool):
            return Index(raw)
        raise ConfigurationError(
            f"Cannot select a column with {raw!r}",
            error_code="OPTION_TYPE_MISMATCH",
            context={"value": raw, "expected": "int or str"}
        )


@dataclass(frozen=True)
class Index(ColumnSelector):
    """Zero-based column position."""

    position: int

    def __post_init__(self) -> None:
        object.__setattr__(self, 'position', NonNegativeInt(self.position).value)

    def render(self) -> str:
        return str(self.position)


@dataclass(frozen=True)
class ColName(ColumnSelector):
    """Column name. Not validated here; LightGBM rejects unknown names."""

    name: str

    def __post_init__(self) -> None:
        validate_single_line("ColName", self.name)

    def render(self) -> str:
        return self.name


def col_sel_argument(selector: Union[Index, ColName]) -> str:
    """External string form of a column selector.

    Example:
        >>> col_sel_argument(Index(2))
        '2'
        >>> col_sel_argument(ColName("age"))
        'age'
    """
    return selector.render()
