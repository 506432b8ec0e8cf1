"""
Reflection adapter.

Binds the generated class to ``str_enum.runtime.VariantMetadata`` (and
``IntoDiscriminant`` when a representation type is declared): variant count,
ordered members, ordered declared names, per-member declared name, discriminant
projection and string property lookup.
"""

from __future__ import annotations

from textwrap import dedent
from typing import TYPE_CHECKING

from str_enum.codegen.generator import GeneratorResult

from .base import AdapterRegistry, EnumAdapter, class_block, py_literal

if TYPE_CHECKING:
    from str_enum.core.ir import SchemaSpec


@AdapterRegistry.register
class ReflectionAdapterGenerator(EnumAdapter):
    """Generate reflection protocol bindings."""

    name = "reflection"

    @classmethod
    def applies_to(cls, spec: SchemaSpec) -> bool:
        return spec.reflection

    def generate(self) -> GeneratorResult:
        result = GeneratorResult()
        spec = self.spec
        result.add_import("from collections.abc import Iterator")

        result.add_class_section(
            class_block(
                dedent(
                    '''
                    def variant_name(self) -> str:
                        return self._name_

                    @classmethod
                    def iter_variants(cls) -> Iterator[{name}]:
                        return iter({variants})

                    def get_str(self, prop: str) -> str | None:
                        """String property lookup; every property is the canonical string."""
                        return self._value_

                    def get_int(self, prop: str) -> int | None:
                        return None

                    def get_bool(self, prop: str) -> bool | None:
                        return None
                    '''
                ).format(name=spec.name, variants=self._const("ALL_VARIANTS"))
            )
        )

        if spec.repr_type is not None:
            result.add_class_section(
                class_block(
                    dedent(
                        """
                        def discriminant(self) -> int:
                            return self.into_repr()
                        """
                    )
                )
            )

        count = len(spec.variants)
        result.add_trailer_section(
            "\n".join(
                [
                    f"{spec.name}.VARIANT_COUNT = {count}",
                    f"{spec.name}.COUNT = {count}",
                    f"{spec.name}.VARIANT_NAMES = {py_literal(spec.variant_names)}",
                ]
            )
        )
        return result
