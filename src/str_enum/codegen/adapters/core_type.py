"""
Core type adapter.

Emits the enumeration class itself with its minimal contract:
- Members whose values are the canonical strings
- ``as_str`` / ``len`` projections
- ``try_from_str`` lookup over canonical strings and aliases
- ``all_variants`` / ``num_variants`` / ``all_values`` listings
- The baked value table and lookup tables
"""

from __future__ import annotations

import logging
from textwrap import dedent

from str_enum.codegen.generator import GeneratorResult

from .base import AdapterRegistry, EnumAdapter, class_block, py_literal

logger = logging.getLogger(__name__)


@AdapterRegistry.register
class CoreTypeGenerator(EnumAdapter):
    """Generate the enum class, its members and lookup tables."""

    name = "core"

    def generate(self) -> GeneratorResult:
        result = GeneratorResult()
        spec = self.spec
        result.add_import("import enum")
        result.add_import("from typing import Final")

        for literal, winner, loser in spec.ambiguous_literals():
            message = (
                f"{spec.name}: {literal!r} is accepted by '{winner}' and '{loser}'; "
                f"lookups resolve to '{winner}'"
            )
            logger.warning(message)
            result.add_warning(message)

        result.add_module_section(self._generate_constants())
        result.add_artifact("class_header", self._generate_class_header())
        result.add_class_section(self._generate_projections())
        result.add_class_section(self._generate_lookup())
        result.add_class_section(self._generate_listings())
        if spec.error_type_name is None:
            # With an error type, the error adapter owns _missing_
            result.add_class_section(self._generate_missing())
        result.add_trailer_section(self._generate_tables())
        result.add_trailer_section(self._generate_class_constants())

        shadowed = spec.shadowed_canonicals()
        if shadowed:
            # Name(text) consults the value map before _missing_
            result.add_import("from typing import Any")
            result.add_class_section(self._generate_pickling())
            result.add_trailer_section(self._generate_value_overrides(shadowed))

        result.add_export(spec.name)
        result.add_artifact("value_table", self.tables.value_table)
        return result

    def _generate_constants(self) -> str:
        lengths = {v.name: len(v.canonical.encode("utf-8")) for v in self.spec.variants}
        return "\n".join(
            [
                f"{self._const('VALUE_TABLE')}: Final = {py_literal(self.tables.value_table)}",
                f"{self._const('BYTE_LENGTHS')}: Final = {py_literal(lengths)}",
            ]
        )

    def _generate_class_header(self) -> str:
        lines = [
            f"class {self.spec.name}(str, enum.Enum):",
            '    """',
            f"    String enumeration {self.spec.name}.",
            "",
            f"    Values: {self._docstring_safe(self.tables.value_table)}",
            '    """',
            "",
        ]
        for variant in self.spec.variants:
            lines.append(f"    {variant.name} = {py_literal(variant.canonical)}")
        return "\n".join(lines)

    @staticmethod
    def _docstring_safe(text: str) -> str:
        escaped = text.encode("unicode_escape").decode("ascii")
        return escaped.replace('"""', '\\"\\"\\"')

    def _generate_projections(self) -> str:
        return class_block(
            dedent(
                '''
                def as_str(self) -> str:
                    """Canonical string of this variant."""
                    return self._value_

                def len(self) -> int:
                    """UTF-8 byte length of the canonical string."""
                    return {lengths}[self._name_]
                '''
            ).format(lengths=self._const("BYTE_LENGTHS"))
        )

    def _generate_lookup(self) -> str:
        return class_block(
            dedent(
                '''
                @classmethod
                def try_from_str(cls, text: object) -> {name} | None:
                    """
                    Variant whose canonical string or alias equals ``text``.

                    Matching is exact and case-sensitive. When a literal is declared
                    by several variants the earliest declaration wins. Returns None
                    when nothing matches.
                    """
                    if not isinstance(text, str):
                        return None
                    return {lookup}.get(text)
                '''
            ).format(name=self.spec.name, lookup=self._const("LOOKUP"))
        )

    def _generate_listings(self) -> str:
        return class_block(
            dedent(
                '''
                @classmethod
                def all_variants(cls) -> tuple[{name}, ...]:
                    """Every variant in declaration order."""
                    return {variants}

                @classmethod
                def num_variants(cls) -> int:
                    return {count}

                @classmethod
                def all_values(cls) -> tuple[str, ...]:
                    """Canonical strings in declaration order."""
                    return {values}
                '''
            ).format(
                name=self.spec.name,
                variants=self._const("ALL_VARIANTS"),
                count=len(self.spec.variants),
                values=self._const("ALL_VALUES"),
            )
        )

    def _generate_missing(self) -> str:
        return class_block(
            dedent(
                """
                @classmethod
                def _missing_(cls, value: object) -> {name} | None:
                    return cls.try_from_str(value)
                """
            ).format(name=self.spec.name)
        )

    def _generate_pickling(self) -> str:
        return class_block(
            dedent(
                '''
                def __reduce_ex__(self, protocol: int) -> tuple[Any, ...]:
                    """Pickle by member name; some canonical strings resolve elsewhere."""
                    return getattr, (type(self), self._name_)
                '''
            )
        )

    def _generate_value_overrides(self, shadowed: dict[str, str]) -> str:
        name = self.spec.name
        return "\n".join(
            f"{name}._value2member_map_[{py_literal(literal)}] = {name}.{winner}"
            for literal, winner in shadowed.items()
        )

    def _generate_tables(self) -> str:
        name = self.spec.name
        members = ", ".join(f"{name}.{v.name}" for v in self.spec.variants)
        lines = [
            f"{self._const('ALL_VARIANTS')}: Final = ({members},)",
            f"{self._const('ALL_VALUES')}: Final = {py_literal(self.tables.values)}",
            f"{self._const('LOOKUP')}: Final = {{",
        ]
        for literal, variant_name in self.spec.lookup_table().items():
            lines.append(f"    {py_literal(literal)}: {name}.{variant_name},")
        lines.append("}")
        return "\n".join(lines)

    def _generate_class_constants(self) -> str:
        name = self.spec.name
        return "\n".join(
            [
                f"{name}.ALL_VARIANTS = {self._const('ALL_VARIANTS')}",
                f"{name}.NUM_VARIANTS = {len(self.spec.variants)}",
                f"{name}.ALL_VALUES = {self._const('ALL_VALUES')}",
                f"{name}.ALL_VALUE_STR = {self._const('VALUE_TABLE')}",
            ]
        )
