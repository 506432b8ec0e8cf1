"""
Error type adapter.

Emitted only for schemas that name an error type. Produces:
- A ``ValueError`` subclass whose message is always the parse diagnostic
  ("expected one of [...]"), baked as a module constant
- ``parse`` / ``_missing_`` raising that error for unknown text
- ``from_bytes`` / ``from_os_str`` which keep invalid UTF-8 apart from
  unknown variants
"""

from __future__ import annotations

from textwrap import dedent
from typing import TYPE_CHECKING

from str_enum.codegen.generator import GeneratorResult
from str_enum.core.errors import GenerationError

from .base import AdapterRegistry, EnumAdapter, class_block, py_literal

if TYPE_CHECKING:
    from str_enum.core.ir import SchemaSpec


@AdapterRegistry.register
class ErrorTypeGenerator(EnumAdapter):
    """Generate the lookup-failure error class and parsing entry points."""

    name = "error_type"

    @classmethod
    def applies_to(cls, spec: SchemaSpec) -> bool:
        return spec.error_type_name is not None

    @property
    def error_name(self) -> str:
        if self.spec.error_type_name is None:
            raise GenerationError(f"'{self.spec.name}' declares no error type")
        return self.spec.error_type_name

    def generate(self) -> GeneratorResult:
        result = GeneratorResult()
        result.add_import("import os")
        result.add_import("from typing import Any, Final")
        result.add_import("from str_enum import runtime")

        result.add_module_section(
            f"{self._const('PARSE_EXPECTED')}: Final = "
            f"{py_literal(self.tables.parse_diagnostic)}"
        )
        result.add_module_section(self._generate_error_class())
        result.add_class_section(self._generate_parse())
        result.add_class_section(self._generate_byte_conversions())

        result.add_export(self.error_name)
        result.add_artifact("parse_diagnostic", self.tables.parse_diagnostic)
        return result

    def _generate_error_class(self) -> str:
        return dedent(
            '''
            class {error}(ValueError):
                """Raised when text names no {name} variant."""

                EXPECTED_STR: Final = {expected}

                def __init__(self) -> None:
                    super().__init__({expected})

                def __str__(self) -> str:
                    return {expected}

                def __reduce__(self) -> tuple[type[{error}], tuple[()]]:
                    return type(self), ()
            '''
        ).format(error=self.error_name, name=self.spec.name, expected=self._const("PARSE_EXPECTED"))

    def _generate_parse(self) -> str:
        return class_block(
            dedent(
                '''
                @classmethod
                def parse(cls, text: str) -> {name}:
                    """
                    Variant for ``text``.

                    Raises:
                        {error}: If no canonical string or alias matches
                    """
                    variant = cls.try_from_str(text)
                    if variant is None:
                        raise {error}()
                    return variant

                @classmethod
                def _missing_(cls, value: object) -> {name} | None:
                    if isinstance(value, str):
                        return cls.parse(value)
                    return None
                '''
            ).format(name=self.spec.name, error=self.error_name)
        )

    def _generate_byte_conversions(self) -> str:
        return class_block(
            dedent(
                '''
                @classmethod
                def from_bytes(cls, data: bytes | bytearray | memoryview) -> {name}:
                    """
                    Variant for UTF-8 encoded ``data``.

                    Raises:
                        runtime.Utf8Error: If ``data`` is not valid UTF-8
                        runtime.InvalidVariant: If the text names no variant
                    """
                    text = runtime.decode_text(data)
                    try:
                        return cls.parse(text)
                    except {error} as e:
                        raise runtime.InvalidVariant(e) from e

                @classmethod
                def from_os_str(cls, value: str | bytes | os.PathLike[Any]) -> {name}:
                    """
                    Variant for an OS-level string or path.

                    Raises:
                        runtime.Utf8Error: If ``value`` is not valid text
                        runtime.InvalidVariant: If the text names no variant
                    """
                    text = runtime.decode_os_text(value)
                    try:
                        return cls.parse(text)
                    except {error} as e:
                        raise runtime.InvalidVariant(e) from e
                '''
            ).format(name=self.spec.name, error=self.error_name)
        )
