"""
Serialization adapter.

Binds the generated class to pydantic: members serialize as their canonical
string and deserialize through ``try_from_str``, so aliases are accepted on
input. Failures carry the serialization diagnostic ("one of [...]"), which is
distinct from the error type's parse diagnostic.
"""

from __future__ import annotations

from textwrap import dedent
from typing import TYPE_CHECKING

from str_enum.codegen.generator import GeneratorResult

from .base import AdapterRegistry, EnumAdapter, class_block, py_literal

if TYPE_CHECKING:
    from str_enum.core.ir import SchemaSpec

PYDANTIC_IMPORT = "from pydantic_core import PydanticCustomError, core_schema"


@AdapterRegistry.register
class SerializationAdapterGenerator(EnumAdapter):
    """Generate pydantic core and JSON schema hooks."""

    name = "serialization"

    @classmethod
    def applies_to(cls, spec: SchemaSpec) -> bool:
        return spec.serialization

    def generate(self) -> GeneratorResult:
        result = GeneratorResult()
        spec = self.spec
        expected = self._const("SERDE_EXPECTED")

        result.add_import(PYDANTIC_IMPORT)
        result.add_import("from typing import Any, Final")
        result.add_module_section(
            f"{expected}: Final = {py_literal(self.tables.serde_diagnostic)}"
        )
        result.add_class_section(self._generate_hooks())
        result.add_class_section(self._generate_deserialize())

        trailer = [f"{spec.name}.SERDE_EXPECTED_STR = {expected}"]
        if spec.error_type_name is not None:
            trailer.append(f"{spec.error_type_name}.SERDE_EXPECTED_STR = {expected}")
        result.add_trailer_section("\n".join(trailer))

        result.add_artifact("serde_diagnostic", self.tables.serde_diagnostic)
        return result

    def _generate_hooks(self) -> str:
        return class_block(
            dedent(
                """
                @classmethod
                def __get_pydantic_core_schema__(
                    cls, source_type: Any, handler: Any
                ) -> core_schema.CoreSchema:
                    return core_schema.no_info_plain_validator_function(
                        cls._deserialize,
                        serialization=core_schema.plain_serializer_function_ser_schema(
                            cls.as_str, return_schema=core_schema.str_schema()
                        ),
                    )

                @classmethod
                def __get_pydantic_json_schema__(cls, schema: Any, handler: Any) -> dict[str, Any]:
                    return {{"type": "string", "enum": list({values})}}
                """
            ).format(values=self._const("ALL_VALUES"))
        )

    def _generate_deserialize(self) -> str:
        return class_block(
            dedent(
                """
                @classmethod
                def _deserialize(cls, value: Any) -> {name}:
                    if isinstance(value, cls):
                        return value
                    if not isinstance(value, str):
                        raise PydanticCustomError(
                            "str_enum_type",
                            "invalid type: {{actual}}, expected {{expected}}",
                            {{"actual": type(value).__name__, "expected": {expected}}},
                        )
                    variant = cls.try_from_str(value)
                    if variant is None:
                        raise PydanticCustomError(
                            "str_enum_value",
                            'invalid value: string "{{value}}", expected {{expected}}',
                            {{"value": value, "expected": {expected}}},
                        )
                    return variant
                """
            ).format(name=self.spec.name, expected=self._const("SERDE_EXPECTED"))
        )
