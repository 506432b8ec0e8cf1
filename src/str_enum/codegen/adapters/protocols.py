"""
Protocol adapter.

Emits the interoperability methods that let a member stand in for its
canonical string:
- Display (``__str__`` / ``__format__``)
- Hashing identical to the canonical string's hash
- Equality and ordering against text and text paths
- Path and byte views (``__fspath__`` / ``__bytes__``)
- Capability-driven extras: member ordering, copying, debug repr
- Discriminant projection when a representation type is declared

Concatenation, joining, slicing and membership tests come from the ``str``
base class and always yield plain ``str`` results.
"""

from __future__ import annotations

from textwrap import dedent

from str_enum.codegen.generator import GeneratorResult
from str_enum.core.ir import Capability

from .base import AdapterRegistry, EnumAdapter, class_block, py_literal

_COMPARISONS = (("__lt__", "<"), ("__le__", "<="), ("__gt__", ">"), ("__ge__", ">="))


@AdapterRegistry.register
class ProtocolAdapterGenerator(EnumAdapter):
    """Generate display, hashing, comparison and view methods."""

    name = "protocols"

    def generate(self) -> GeneratorResult:
        result = GeneratorResult()
        result.add_import("from typing import Any, Final")
        result.add_import("from str_enum import runtime")

        result.add_class_section(self._generate_display())
        result.add_class_section(self._generate_hash_and_equality())
        result.add_class_section(self._generate_ordering())
        result.add_class_section(self._generate_views())

        if self.spec.has(Capability.COPY):
            result.add_class_section(self._generate_copy())
        if self.spec.has(Capability.DEBUG):
            result.add_class_section(self._generate_repr())

        discriminants = self.spec.discriminants()
        if discriminants is not None:
            mapping = {
                v.name: value for v, value in zip(self.spec.variants, discriminants, strict=True)
            }
            result.add_module_section(
                f"{self._const('DISCRIMINANTS')}: Final = {py_literal(mapping)}"
            )
            result.add_class_section(self._generate_discriminant())
            result.add_artifact("discriminants", mapping)

        return result

    def _generate_display(self) -> str:
        return class_block(
            dedent(
                """
                def __str__(self) -> str:
                    return self._value_

                def __format__(self, format_spec: str) -> str:
                    return format(self._value_, format_spec)
                """
            )
        )

    def _generate_hash_and_equality(self) -> str:
        lines = [
            "def __hash__(self) -> int:",
            '    """Hash of the canonical string, so text keys find member keys."""',
            "    return hash(self._value_)",
            "",
            "def __eq__(self, other: object) -> bool:",
        ]
        if self.spec.has(Capability.EQ):
            lines += [
                f"    if isinstance(other, {self.spec.name}):",
                "        return self is other",
            ]
        lines += [
            "    text = runtime.coerce_text(other)",
            "    if text is None:",
            "        return NotImplemented",
            "    return self._value_ == text",
            "",
            "def __ne__(self, other: object) -> bool:",
            "    result = self.__eq__(other)",
            "    if result is NotImplemented:",
            "        return result",
            "    return not result",
        ]
        return class_block("\n".join(lines))

    def _generate_ordering(self) -> str:
        lines = ["def _text_operand(self, other: object) -> str | None:"]
        if self.spec.has(Capability.ORD):
            lines.append('    """Members order by canonical string, like any other text."""')
        else:
            lines += [
                '    """Members of this enum are not ordered against each other."""',
                f"    if isinstance(other, {self.spec.name}):",
                "        return None",
            ]
        lines.append("    return runtime.coerce_text(other)")

        blocks = ["\n".join(lines)]
        for method, op in _COMPARISONS:
            blocks.append(
                dedent(
                    """
                    def {method}(self, other: object) -> bool:
                        text = self._text_operand(other)
                        if text is None:
                            return NotImplemented
                        return self._value_ {op} text
                    """
                )
                .format(method=method, op=op)
                .strip("\n")
            )
        return class_block("\n\n".join(blocks))

    def _generate_views(self) -> str:
        return class_block(
            dedent(
                """
                def __fspath__(self) -> str:
                    return self._value_

                def __bytes__(self) -> bytes:
                    return self._value_.encode("utf-8")
                """
            )
        )

    def _generate_copy(self) -> str:
        return class_block(
            dedent(
                """
                def __copy__(self) -> {name}:
                    return self

                def __deepcopy__(self, memo: dict[int, Any]) -> {name}:
                    return self
                """
            ).format(name=self.spec.name)
        )

    def _generate_repr(self) -> str:
        return class_block(
            dedent(
                """
                def __repr__(self) -> str:
                    return type(self).__name__ + "." + self._name_
                """
            )
        )

    def _generate_discriminant(self) -> str:
        return class_block(
            dedent(
                '''
                def into_repr(self) -> int:
                    """Integer discriminant ({repr_type})."""
                    return {table}[self._name_]

                def __int__(self) -> int:
                    return {table}[self._name_]
                '''
            ).format(repr_type=self.spec.repr_type.value, table=self._const("DISCRIMINANTS"))
        )
