"""Tests for the pydantic serialization adapter."""

import pytest
from pydantic import BaseModel, TypeAdapter, ValidationError

from str_enum.codegen.adapters import SerializationAdapterGenerator
from str_enum.core import ir
from str_enum.core.tables import build_tables

SERDE_EXPECTED = "one of [Variant1,Variant2]"


class TestTypeAdapter:
    """Tests through a bare TypeAdapter."""

    def test_serializes_canonical_string(self, my_enum: type) -> None:
        adapter = TypeAdapter(my_enum)
        assert adapter.dump_python(my_enum.Variant1) == "Variant1"
        assert adapter.dump_json(my_enum.Variant2) == b'"Variant2"'

    def test_serialized_value_is_plain_text(self, my_enum: type) -> None:
        dumped = TypeAdapter(my_enum).dump_python(my_enum.Variant1)
        assert type(dumped) is str

    def test_deserializes_canonical_and_alias(self, my_enum: type) -> None:
        adapter = TypeAdapter(my_enum)
        assert adapter.validate_python("Variant1") is my_enum.Variant1
        assert adapter.validate_python("variant1") is my_enum.Variant1
        assert adapter.validate_json('"Variant2"') is my_enum.Variant2

    def test_accepts_member(self, my_enum: type) -> None:
        assert TypeAdapter(my_enum).validate_python(my_enum.Variant2) is my_enum.Variant2

    def test_round_trip(self, my_enum: type) -> None:
        adapter = TypeAdapter(my_enum)
        for member in my_enum.all_variants():
            assert adapter.validate_json(adapter.dump_json(member)) is member

    def test_unknown_value(self, my_enum: type) -> None:
        with pytest.raises(ValidationError) as exc_info:
            TypeAdapter(my_enum).validate_python("VARIANT1")
        error = exc_info.value.errors()[0]
        assert error["type"] == "str_enum_value"
        assert error["msg"] == f'invalid value: string "VARIANT1", expected {SERDE_EXPECTED}'
        assert error["ctx"]["expected"] == SERDE_EXPECTED

    def test_wrong_type(self, my_enum: type) -> None:
        with pytest.raises(ValidationError) as exc_info:
            TypeAdapter(my_enum).validate_json("1")
        error = exc_info.value.errors()[0]
        assert error["type"] == "str_enum_type"
        assert error["msg"] == f"invalid type: int, expected {SERDE_EXPECTED}"

    def test_json_schema(self, my_enum: type) -> None:
        assert TypeAdapter(my_enum).json_schema() == {
            "type": "string",
            "enum": ["Variant1", "Variant2"],
        }


class TestModelField:
    """Tests with the enum as a BaseModel field."""

    def test_round_trip(self, my_enum: type) -> None:
        class Record(BaseModel):
            kind: my_enum  # type: ignore[valid-type]

        record = Record.model_validate_json('{"kind": "variant1"}')
        assert record.kind is my_enum.Variant1
        assert record.model_dump() == {"kind": "Variant1"}
        assert record.model_dump_json() == '{"kind":"Variant1"}'
        assert Record.model_validate(record.model_dump()).kind is my_enum.Variant1

    def test_invalid_field(self, my_enum: type) -> None:
        class Record(BaseModel):
            kind: my_enum  # type: ignore[valid-type]

        with pytest.raises(ValidationError) as exc_info:
            Record(kind="other")
        assert exc_info.value.errors()[0]["loc"] == ("kind",)


class TestSerdeDiagnostic:
    """Tests for the serialization "expected" text."""

    def test_class_constants(self, my_enum: type, my_enum_error: type) -> None:
        assert my_enum.SERDE_EXPECTED_STR == SERDE_EXPECTED
        assert my_enum_error.SERDE_EXPECTED_STR == SERDE_EXPECTED

    def test_differs_from_parse_diagnostic(self, my_enum_error: type) -> None:
        assert my_enum_error.EXPECTED_STR == f"expected {my_enum_error.SERDE_EXPECTED_STR}"

    def test_artifact(self, my_enum_spec: ir.SchemaSpec) -> None:
        result = SerializationAdapterGenerator(my_enum_spec, build_tables(my_enum_spec)).generate()
        assert result.artifacts["serde_diagnostic"] == SERDE_EXPECTED

    def test_absent_when_disabled(self, plain: type) -> None:
        assert not hasattr(plain, "__get_pydantic_core_schema__")
        assert not hasattr(plain, "SERDE_EXPECTED_STR")
