"""Tests for the generated error type and parsing entry points."""

from __future__ import annotations

import pickle
from pathlib import PurePosixPath

import pytest

from str_enum import runtime
from str_enum.codegen.adapters import ErrorTypeGenerator
from str_enum.core import ir
from str_enum.core.errors import GenerationError
from str_enum.core.tables import build_tables

EXPECTED = "expected one of [Variant1,Variant2]"


class TestErrorType:
    """Tests for the error class itself."""

    def test_is_value_error(self, my_enum_error: type) -> None:
        assert issubclass(my_enum_error, ValueError)

    def test_message(self, my_enum_error: type) -> None:
        error = my_enum_error()
        assert str(error) == EXPECTED
        assert error.args == (EXPECTED,)

    def test_expected_str(self, my_enum_error: type) -> None:
        assert my_enum_error.EXPECTED_STR == EXPECTED

    def test_pickle(self, my_enum_error: type) -> None:
        restored = pickle.loads(pickle.dumps(my_enum_error()))
        assert type(restored) is my_enum_error
        assert str(restored) == EXPECTED

    def test_single_variant_message(self) -> None:
        spec = ir.SchemaSpec(
            name="Only",
            variants=(ir.VariantSpec(name="One", canonical="one"),),
            error_type_name="OnlyError",
        )
        result = ErrorTypeGenerator(spec, build_tables(spec)).generate()
        assert result.artifacts["parse_diagnostic"] == "expected one of [one]"
        assert result.exports == ["OnlyError"]

    def test_not_applied_without_name(self, plain_spec: ir.SchemaSpec) -> None:
        assert not ErrorTypeGenerator.applies_to(plain_spec)

    def test_generate_without_name_raises(self, plain_spec: ir.SchemaSpec) -> None:
        generator = ErrorTypeGenerator(plain_spec, build_tables(plain_spec))
        with pytest.raises(GenerationError, match="declares no error type"):
            generator.generate()


class TestParse:
    """Tests for parse and value calls."""

    def test_parse_canonical_and_alias(self, my_enum: type) -> None:
        assert my_enum.parse("Variant1") is my_enum.Variant1
        assert my_enum.parse("variant1") is my_enum.Variant1
        assert my_enum.parse("Variant2") is my_enum.Variant2

    def test_parse_unknown(self, my_enum: type, my_enum_error: type) -> None:
        with pytest.raises(my_enum_error) as exc_info:
            my_enum.parse("VARIANT1")
        assert str(exc_info.value) == EXPECTED

    def test_parse_empty(self, my_enum: type, my_enum_error: type) -> None:
        with pytest.raises(my_enum_error):
            my_enum.parse("")

    def test_value_call_accepts_aliases(self, my_enum: type) -> None:
        assert my_enum("variant1") is my_enum.Variant1

    def test_value_call_raises_error_type(self, my_enum: type, my_enum_error: type) -> None:
        with pytest.raises(my_enum_error):
            my_enum("Variant3")

    def test_value_call_non_text(self, my_enum: type) -> None:
        with pytest.raises(ValueError):
            my_enum(3)

    def test_parse_absent_without_error_type(self, plain: type) -> None:
        assert not hasattr(plain, "parse")
        assert not hasattr(plain, "from_bytes")


class TestByteConversions:
    """Tests for from_bytes and from_os_str."""

    def test_from_bytes(self, my_enum: type) -> None:
        assert my_enum.from_bytes(b"Variant2") is my_enum.Variant2
        assert my_enum.from_bytes(bytearray(b"variant1")) is my_enum.Variant1
        assert my_enum.from_bytes(memoryview(b"Variant1")) is my_enum.Variant1

    def test_from_bytes_invalid_utf8(self, my_enum: type) -> None:
        with pytest.raises(runtime.Utf8Error) as exc_info:
            my_enum.from_bytes(b"Variant\xff")
        assert isinstance(exc_info.value.cause, UnicodeDecodeError)
        assert not isinstance(exc_info.value, runtime.InvalidVariant)

    def test_from_bytes_unknown_variant(self, my_enum: type, my_enum_error: type) -> None:
        with pytest.raises(runtime.InvalidVariant) as exc_info:
            my_enum.from_bytes(b"Variant3")
        assert isinstance(exc_info.value.error, my_enum_error)
        assert str(exc_info.value) == EXPECTED

    def test_failures_share_base(self, my_enum: type) -> None:
        for data in (b"\xff", b"nope"):
            with pytest.raises(runtime.Utf8EnumError):
                my_enum.from_bytes(data)

    def test_from_os_str(self, my_enum: type) -> None:
        assert my_enum.from_os_str("Variant1") is my_enum.Variant1
        assert my_enum.from_os_str(b"variant1") is my_enum.Variant1
        assert my_enum.from_os_str(PurePosixPath("Variant2")) is my_enum.Variant2

    def test_from_os_str_undecodable(self, my_enum: type) -> None:
        """Lone surrogates, as produced by surrogateescape decoding, are not text."""
        with pytest.raises(runtime.Utf8Error):
            my_enum.from_os_str("Variant\udcff")
        with pytest.raises(runtime.Utf8Error):
            my_enum.from_os_str(b"Variant\xff")

    def test_from_os_str_unknown(self, my_enum: type) -> None:
        with pytest.raises(runtime.InvalidVariant):
            my_enum.from_os_str("Variant3")
