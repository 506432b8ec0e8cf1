"""
Module assembly.

Runs the adapter pipeline for every schema in a SchemaFile and lays the
fragments out as one Python module: header, grouped imports, ``__all__``,
then for each enum its module-level constants, the class, and the tables
that reference its members.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from str_enum._version import get_version
from str_enum.core import ir
from str_enum.core.errors import GenerationError
from str_enum.core.tables import ValueTables, build_tables

from .adapters import AdapterRegistry
from .config import GenerationConfig
from .generator import CompositeGenerator, Generator, GeneratorResult

logger = logging.getLogger(__name__)

FIRST_PARTY_PACKAGES = frozenset({"str_enum"})
THIRD_PARTY_PACKAGES = frozenset({"pydantic", "pydantic_core"})


class EnumGenerator(CompositeGenerator):
    """Run every adapter that applies to one schema."""

    def get_generators(self) -> list[Generator]:
        adapters = AdapterRegistry.for_schema(self.spec)
        return [adapter(self.spec, self.tables) for adapter in adapters]


@dataclass
class RenderedEnum:
    """Generator output for one schema."""

    spec: ir.SchemaSpec
    tables: ValueTables
    result: GeneratorResult

    def render_class(self) -> str:
        header = self.result.artifacts.get("class_header")
        if header is None:
            raise GenerationError(f"No class header generated for '{self.spec.name}'")
        return "\n\n".join([header, *self.result.class_sections])

    def render(self) -> str:
        sections = [
            *self.result.module_sections,
            self.render_class(),
            *self.result.trailer_sections,
        ]
        return "\n\n\n".join(sections)


def _root_module(statement: str) -> str:
    return statement.split()[1].split(".")[0]


def format_imports(statements: set[str]) -> str:
    """
    Merge and group import statements.

    ``from X import a`` statements for the same module are merged. Groups are
    standard library, third party and first party, separated by blank lines.
    """
    plain: set[str] = set()
    from_imports: dict[str, set[str]] = {}
    for statement in statements:
        if statement.startswith("from "):
            module, names = statement[len("from ") :].split(" import ", 1)
            from_imports.setdefault(module, set()).update(n.strip() for n in names.split(","))
        else:
            plain.add(statement)

    lines = sorted(plain) + [
        f"from {module} import {', '.join(sorted(names))}"
        for module, names in sorted(from_imports.items())
    ]

    groups: dict[str, list[str]] = {"stdlib": [], "third_party": [], "first_party": []}
    for line in lines:
        root = _root_module(line)
        if root in FIRST_PARTY_PACKAGES:
            groups["first_party"].append(line)
        elif root in THIRD_PARTY_PACKAGES:
            groups["third_party"].append(line)
        else:
            groups["stdlib"].append(line)

    for group in groups.values():
        # "import x" lines before "from x import y" lines within a group
        group.sort(key=lambda line: (line.startswith("from "), line))

    return "\n\n".join("\n".join(group) for group in groups.values() if group)


def _docstring_text(text: str) -> str:
    return text.replace('"""', '\\"\\"\\"').strip()


class ModuleBuilder:
    """
    Build the source of one generated module from a SchemaFile.

    Example:
        builder = ModuleBuilder(schema_file)
        source = builder.render()
    """

    def __init__(self, schema_file: ir.SchemaFile, config: GenerationConfig | None = None):
        self.schema_file = schema_file
        self.config = config or GenerationConfig()
        self._rendered: list[RenderedEnum] | None = None

    def build(self) -> list[RenderedEnum]:
        """
        Run the adapter pipeline for every schema.

        Raises:
            GenerationError: If any adapter reports errors
        """
        if self._rendered is not None:
            return self._rendered

        rendered = []
        for spec in self.schema_file.enums:
            tables = build_tables(spec)
            result = EnumGenerator(spec, tables).generate()
            if not result.success:
                raise GenerationError(
                    f"Generation of '{spec.name}' failed: " + "; ".join(result.errors)
                )
            logger.debug(
                "Generated %s: %d class sections, %d module sections",
                spec.name,
                len(result.class_sections),
                len(result.module_sections),
            )
            rendered.append(RenderedEnum(spec=spec, tables=tables, result=result))

        self._rendered = rendered
        return rendered

    @property
    def warnings(self) -> list[str]:
        return [w for r in self.build() for w in r.result.warnings]

    def exports(self) -> list[str]:
        """Names listed in ``__all__``: public enums and their error types."""
        names: list[str] = []
        for r in self.build():
            if r.spec.visibility == ir.Visibility.PUBLIC:
                names.extend(r.result.exports)
        return names

    def render_header(self) -> str:
        docstring = self.config.module_docstring
        if not docstring:
            names = ", ".join(s.name for s in self.schema_file.enums)
            docstring = f"String enumerations: {names}."
        return "\n".join(
            [
                '"""',
                _docstring_text(docstring),
                "",
                f"Generated by str-enum {get_version()} - DO NOT EDIT.",
                '"""',
            ]
        )

    def render(self) -> str:
        """
        Render the complete module source.

        Returns:
            Python source text ending with a newline
        """
        rendered = self.build()

        imports: set[str] = set()
        for r in rendered:
            imports.update(r.result.imports)

        all_lines = ["__all__ = ["]
        all_lines.extend(f"    {name!r}," for name in self.exports())
        all_lines.append("]")

        parts = [
            self.render_header(),
            "from __future__ import annotations",
            format_imports(imports),
            "\n".join(all_lines),
        ]
        body = "\n\n\n".join(r.render() for r in rendered)
        return "\n\n".join(parts) + "\n\n\n" + body + "\n"


def render_module(schema_file: ir.SchemaFile, config: GenerationConfig | None = None) -> str:
    """Render the module source for a SchemaFile."""
    return ModuleBuilder(schema_file, config).render()


def render_schema(schema: ir.SchemaSpec, config: GenerationConfig | None = None) -> str:
    """Render a module holding a single enum."""
    return render_module(ir.SchemaFile(enums=(schema,)), config)
