"""Tests for the reflection adapter."""

from __future__ import annotations

from str_enum import runtime
from str_enum.codegen.adapters import ReflectionAdapterGenerator
from str_enum.core import ir


class TestVariantMetadata:
    """Tests for VariantMetadata bindings."""

    def test_protocol(self, my_enum: type) -> None:
        assert isinstance(my_enum.Variant1, runtime.VariantMetadata)

    def test_counts(self, my_enum: type) -> None:
        assert my_enum.VARIANT_COUNT == 2
        assert my_enum.COUNT == 2

    def test_variant_names(self, my_enum: type) -> None:
        assert my_enum.VARIANT_NAMES == ("Variant1", "Variant2")

    def test_variant_name(self, my_enum: type) -> None:
        assert my_enum.Variant1.variant_name() == "Variant1"

    def test_iter_variants(self, my_enum: type) -> None:
        assert list(my_enum.iter_variants()) == [my_enum.Variant1, my_enum.Variant2]

    def test_declared_name_differs_from_value(self, level: type) -> None:
        assert level.Mid.variant_name() == "Mid"
        assert level.Mid.as_str() == "mid"
        assert level.VARIANT_NAMES == ("Low", "Mid", "High")

    def test_absent_when_disabled(self, plain: type) -> None:
        assert not hasattr(plain, "VARIANT_NAMES")
        assert not isinstance(plain.Alpha, runtime.VariantMetadata)


class TestIntoDiscriminant:
    """Tests for the discriminant reflection binding."""

    def test_discriminant(self, level: type) -> None:
        assert [m.discriminant() for m in level.iter_variants()] == [0, 10, 11]
        assert isinstance(level.Low, runtime.IntoDiscriminant)

    def test_no_discriminant_without_repr(self, my_enum: type) -> None:
        assert not isinstance(my_enum.Variant1, runtime.IntoDiscriminant)

    def test_applies_to(self, my_enum_spec: ir.SchemaSpec, plain_spec: ir.SchemaSpec) -> None:
        assert ReflectionAdapterGenerator.applies_to(my_enum_spec)
        assert not ReflectionAdapterGenerator.applies_to(plain_spec)


class TestEnumProperty:
    """Tests for property lookups."""

    def test_get_str_is_canonical(self, level: type) -> None:
        assert level.Mid.get_str("anything") == "mid"
        assert level.Low.get_str("") == "low"

    def test_get_int_and_bool_are_absent(self, my_enum: type) -> None:
        assert my_enum.Variant1.get_int("weight") is None
        assert my_enum.Variant1.get_bool("enabled") is None
