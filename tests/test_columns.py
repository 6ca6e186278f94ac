# tests/test_columns.py
"""Unit tests for column selectors."""

import pytest

from lgbm_params.params.columns import ColName, ColumnSelector, Index, col_sel_argument
from lgbm_params.utils.exceptions import ConfigurationError, InvalidRefinementValue


class TestColumnSelector:
    """Rendering and coercion of column selectors."""

    @pytest.mark.unit
    def test_index_renders_decimal(self):
        """Index 2 renders as "2"."""
        assert col_sel_argument(Index(2)) == "2"

    @pytest.mark.unit
    def test_name_renders_unchanged(self):
        """Names render as given, without validation."""
        assert col_sel_argument(ColName("age")) == "age"
        assert ColName("not a real column!").render() == "not a real column!"

    @pytest.mark.unit
    def test_negative_index_rejected(self):
        """Column positions are non-negative."""
        with pytest.raises(InvalidRefinementValue):
            Index(-1)

    @pytest.mark.unit
    def test_coerce(self):
        """Ints become indices, strings become names."""
        assert ColumnSelector.coerce(3) == Index(3)
        assert ColumnSelector.coerce("label") == ColName("label")

        existing = ColName("weight")
        assert ColumnSelector.coerce(existing) is existing

    @pytest.mark.unit
    @pytest.mark.parametrize("raw", [True, 1.5, None, ["a"]])
    def test_coerce_rejects_other_types(self, raw):
        """Anything else is a type mismatch."""
        with pytest.raises(ConfigurationError) as exc_info:
            ColumnSelector.coerce(raw)
        assert exc_info.value.error_code == "OPTION_TYPE_MISMATCH"

    @pytest.mark.unit
    def test_selectors_are_values(self):
        """Selectors compare and hash by content."""
        assert Index(1) == Index(1)
        assert Index(1) != ColName("1")
        assert len({Index(0), Index(0), ColName("a")}) == 2

    @pytest.mark.unit
    @pytest.mark.parametrize("name", ["x\nobjective=binary", "label\r", "a\r\nb"])
    def test_name_with_line_break_rejected(self, name):
        """Names cannot smuggle extra lines into a config file."""
        with pytest.raises(ConfigurationError) as exc_info:
            ColName(name)
        assert exc_info.value.error_code == "PARAM_LINE_BREAK"
