"""
Base generator classes for enum code generation.

Generators are responsible for one slice of a generated enum module:
- The core type emits the class, its members and the minimal contract
- Protocol adapters emit display, hashing, comparison and text views
- The error type emits the lookup-failure class and parsing entry points
- Reflection and serialization adapters bind to external protocols

Each generator focuses on one aspect, making them easier to:
- Understand
- Test
- Modify
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from str_enum.core import ir
from str_enum.core.tables import ValueTables


@dataclass
class GeneratorResult:
    """
    Result from a generator execution.

    Attributes:
        imports: Import statements the fragments rely on
        module_sections: Module-level code placed before the class
        class_sections: Method blocks placed inside the class body
        trailer_sections: Module-level code placed after the class
        exports: Names to list in the module's ``__all__``
        artifacts: Data to share with other generators
        errors: Any non-fatal errors encountered
        warnings: Any warnings to display to user
    """

    imports: set[str] = field(default_factory=set)
    module_sections: list[str] = field(default_factory=list)
    class_sections: list[str] = field(default_factory=list)
    trailer_sections: list[str] = field(default_factory=list)
    exports: list[str] = field(default_factory=list)
    artifacts: dict[str, Any] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """Whether generation succeeded (no errors)."""
        return len(self.errors) == 0

    def add_import(self, statement: str) -> None:
        self.imports.add(statement)

    def add_module_section(self, code: str) -> None:
        self.module_sections.append(code.strip("\n"))

    def add_class_section(self, code: str) -> None:
        self.class_sections.append(code.strip("\n"))

    def add_trailer_section(self, code: str) -> None:
        self.trailer_sections.append(code.strip("\n"))

    def add_export(self, name: str) -> None:
        if name not in self.exports:
            self.exports.append(name)

    def add_artifact(self, key: str, value: Any) -> None:
        """Add an artifact for other generators."""
        self.artifacts[key] = value

    def add_error(self, error: str) -> None:
        """Record an error."""
        self.errors.append(error)

    def add_warning(self, warning: str) -> None:
        """Record a warning."""
        self.warnings.append(warning)

    def merge(self, other: "GeneratorResult") -> None:
        """Merge another result into this one."""
        self.imports.update(other.imports)
        self.module_sections.extend(other.module_sections)
        self.class_sections.extend(other.class_sections)
        self.trailer_sections.extend(other.trailer_sections)
        for name in other.exports:
            self.add_export(name)
        self.artifacts.update(other.artifacts)
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)


class Generator(ABC):
    """
    Base class for all generators.

    A generator creates code fragments from one schema and its tables.

    Example:
        class DocGenerator(Generator):
            def generate(self) -> GeneratorResult:
                result = GeneratorResult()
                result.add_class_section(self._build_doc_method())
                result.add_artifact("documented", True)
                return result
    """

    def __init__(self, spec: ir.SchemaSpec, tables: ValueTables):
        """
        Initialize generator.

        Args:
            spec: Validated enum schema
            tables: Value table and diagnostics built from the schema
        """
        self.spec = spec
        self.tables = tables

    @abstractmethod
    def generate(self) -> GeneratorResult:
        """
        Generate code fragments.

        Returns:
            GeneratorResult with fragments and artifacts
        """
        pass

    @property
    def const_prefix(self) -> str:
        """Prefix of the private module-level constants for this enum."""
        return f"_{self.spec.name.upper()}"

    def _const(self, suffix: str) -> str:
        return f"{self.const_prefix}_{suffix}"


class CompositeGenerator(Generator):
    """
    Generator that runs multiple sub-generators.

    Useful for organizing related generators together.

    Example:
        class FullEnumGenerator(CompositeGenerator):
            def get_generators(self) -> list[Generator]:
                return [
                    CoreTypeGenerator(self.spec, self.tables),
                    ProtocolAdapterGenerator(self.spec, self.tables),
                ]
    """

    @abstractmethod
    def get_generators(self) -> list[Generator]:
        """
        Get the list of sub-generators to run.

        Returns:
            List of Generator instances
        """
        pass

    def generate(self) -> GeneratorResult:
        """
        Run all sub-generators and merge results.

        Returns:
            Combined GeneratorResult from all sub-generators
        """
        combined = GeneratorResult()

        for generator in self.get_generators():
            result = generator.generate()
            combined.merge(result)

            # Stop if a generator had errors
            if not result.success:
                break

        return combined
