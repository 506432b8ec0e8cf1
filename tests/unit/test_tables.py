"""Tests for value table and diagnostic assembly."""

import pytest

from str_enum.core import ir
from str_enum.core.errors import InternalConsistencyError
from str_enum.core.tables import (
    PARSE_WRAPPING,
    SERDE_WRAPPING,
    DiagnosticWrapping,
    build_diagnostic,
    build_tables,
    build_value_table,
    diagnostic_length,
    value_table_length,
)


class TestValueTable:
    """Tests for build_value_table."""

    def test_joins_in_declaration_order(self) -> None:
        assert build_value_table(["Variant1", "Variant2"]) == "Variant1,Variant2"

    def test_single_value_has_no_separator(self) -> None:
        assert build_value_table(["only"]) == "only"

    def test_no_trailing_separator(self) -> None:
        table = build_value_table(["a", "b", "c"])
        assert table == "a,b,c"
        assert not table.endswith(",")

    def test_multibyte_values(self) -> None:
        table = build_value_table(["café", "☃"])
        assert table == "café,☃"
        assert value_table_length(["café", "☃"]) == len(table.encode("utf-8")) == 9

    def test_length_is_arithmetic(self) -> None:
        values = ["red", "green", "blue"]
        assert value_table_length(values) == 3 + 5 + 4 + 2

    def test_empty_is_internal_error(self) -> None:
        with pytest.raises(InternalConsistencyError):
            build_value_table([])


class TestDiagnostics:
    """Tests for build_diagnostic."""

    def test_parse_wrapping(self) -> None:
        assert build_diagnostic("a,b", PARSE_WRAPPING) == "expected one of [a,b]"

    def test_serde_wrapping(self) -> None:
        assert build_diagnostic("a,b", SERDE_WRAPPING) == "one of [a,b]"

    def test_custom_wrapping(self) -> None:
        wrapping = DiagnosticWrapping(prefix="«", suffix="»")
        assert build_diagnostic("x", wrapping) == "«x»"
        assert diagnostic_length("x", wrapping) == 5


class TestBuildTables:
    """Tests for build_tables."""

    def test_my_enum(self, my_enum_spec: ir.SchemaSpec) -> None:
        tables = build_tables(my_enum_spec)
        assert tables.values == ("Variant1", "Variant2")
        assert tables.value_table == "Variant1,Variant2"
        assert tables.parse_diagnostic == "expected one of [Variant1,Variant2]"
        assert tables.serde_diagnostic == "one of [Variant1,Variant2]"

    def test_aliases_are_not_listed(self, plain_spec: ir.SchemaSpec) -> None:
        tables = build_tables(plain_spec)
        assert tables.value_table == "alpha,beta"
        assert tables.split() == ["alpha", "beta"]
