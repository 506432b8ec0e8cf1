"""Shared pytest fixtures for str-enum tests."""

from collections.abc import Callable
from pathlib import Path
from types import ModuleType

import pytest

from str_enum.codegen import load_module
from str_enum.core import ir

COLOR_SCHEMA = """
[generate]
output = "out/colors.py"

[[enums]]
name = "Color"
error_type = "ColorError"
derive = ["eq", "ord", "copy", "debug"]
repr = "u8"
reflection = true
serialization = true

[[enums.variants]]
name = "Red"
value = "red"
aliases = ["RED", "r"]

[[enums.variants]]
name = "Green"
value = "green"
discriminant = 5

[[enums.variants]]
name = "Blue"
value = "blue"
"""


@pytest.fixture
def my_enum_spec() -> ir.SchemaSpec:
    """MyEnum with every optional feature except discriminants."""
    return ir.SchemaSpec(
        name="MyEnum",
        variants=(
            ir.VariantSpec(name="Variant1", canonical="Variant1", aliases=("variant1",)),
            ir.VariantSpec(name="Variant2", canonical="Variant2"),
        ),
        error_type_name="MyEnumError",
        capabilities=frozenset(ir.Capability),
        reflection=True,
        serialization=True,
    )


@pytest.fixture
def plain_spec() -> ir.SchemaSpec:
    """Core type only: no error type, capabilities or adapters."""
    return ir.SchemaSpec(
        name="Plain",
        variants=(
            ir.VariantSpec(name="Alpha", canonical="alpha", aliases=("a",)),
            ir.VariantSpec(name="Beta", canonical="beta"),
        ),
    )


@pytest.fixture
def numbered_spec() -> ir.SchemaSpec:
    """Discriminants with an explicit value in the middle."""
    return ir.SchemaSpec(
        name="Level",
        variants=(
            ir.VariantSpec(name="Low", canonical="low"),
            ir.VariantSpec(name="Mid", canonical="mid", discriminant=10),
            ir.VariantSpec(name="High", canonical="high"),
        ),
        repr_type=ir.ReprType.U8,
        error_type_name="LevelError",
        reflection=True,
    )


@pytest.fixture
def my_enum_module(my_enum_spec: ir.SchemaSpec) -> ModuleType:
    return load_module(ir.SchemaFile(enums=(my_enum_spec,)))


@pytest.fixture
def my_enum(my_enum_module: ModuleType) -> type:
    return my_enum_module.MyEnum


@pytest.fixture
def my_enum_error(my_enum_module: ModuleType) -> type:
    return my_enum_module.MyEnumError


@pytest.fixture
def plain(plain_spec: ir.SchemaSpec) -> type:
    return load_module(ir.SchemaFile(enums=(plain_spec,))).Plain


@pytest.fixture
def level(numbered_spec: ir.SchemaSpec) -> type:
    return load_module(ir.SchemaFile(enums=(numbered_spec,))).Level


@pytest.fixture
def write_schema(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper that writes TOML text to a schema file."""

    def _write(content: str = COLOR_SCHEMA, name: str = "strenum.toml") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
