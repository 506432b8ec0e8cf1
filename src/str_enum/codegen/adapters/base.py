"""
Base adapter classes for enum code generation.

All adapters extend the Generator interface from str_enum.codegen.generator.
"""

from __future__ import annotations

from textwrap import indent
from typing import TYPE_CHECKING

from str_enum.codegen.generator import Generator

if TYPE_CHECKING:
    from str_enum.core.ir import SchemaSpec

INDENT = "    "


def class_block(code: str) -> str:
    """Indent a dedented method block for placement inside the class body."""
    return indent(code.strip("\n"), INDENT)


def py_literal(value: object) -> str:
    """Python source literal for a str, int, tuple or dict of those."""
    return repr(value)


class EnumAdapter(Generator):
    """
    Base class for the per-schema generators.

    Subclasses set ``name`` and override ``applies_to`` when they are only
    emitted for schemas that opt in.
    """

    name: str = ""

    @classmethod
    def applies_to(cls, spec: SchemaSpec) -> bool:
        """Whether this adapter contributes to the given schema."""
        return True


class AdapterRegistry:
    """
    Registry for enum adapters.

    Adapters run in registration order, which is also the order their
    fragments appear in the generated module.
    """

    _adapters: dict[str, type[EnumAdapter]] = {}

    @classmethod
    def register(cls, adapter: type[EnumAdapter]) -> type[EnumAdapter]:
        """Register an adapter under its ``name``. Usable as a decorator."""
        cls._adapters[adapter.name] = adapter
        return adapter

    @classmethod
    def get(cls, name: str) -> type[EnumAdapter] | None:
        """Get adapter by name."""
        return cls._adapters.get(name)

    @classmethod
    def list_adapters(cls) -> list[str]:
        """List registered adapter names."""
        return list(cls._adapters.keys())

    @classmethod
    def for_schema(cls, spec: SchemaSpec) -> list[type[EnumAdapter]]:
        """Adapters that apply to a schema, in run order."""
        return [a for a in cls._adapters.values() if a.applies_to(spec)]
