"""
Generation runner - orchestrates module generation.

The GenerationRunner renders a SchemaFile into a module, writes it, and
verifies that the written source is self-contained: it parses, defines every
declared type, and imports nothing outside the runtime support package, the
standard library modules the adapters use, and pydantic_core.
"""

from __future__ import annotations

import ast
import logging
from pathlib import Path

from str_enum.core import ir
from str_enum.core.errors import StrEnumError

from .config import GenerationConfig
from .module import ModuleBuilder

logger = logging.getLogger(__name__)

# Top-level packages a generated module may import
ALLOWED_IMPORT_ROOTS = frozenset(
    {"__future__", "collections", "enum", "os", "typing", "pydantic_core", "str_enum"}
)


def verify_source(
    source: str,
    schema_file: ir.SchemaFile,
    label: str = "<generated>",
) -> VerificationResult:
    """
    Verify generated module source.

    Checks that the source parses, that every enum and error type named in
    the schema file is defined at module level, and that imports stay within
    ALLOWED_IMPORT_ROOTS.
    """
    result = VerificationResult()

    try:
        tree = ast.parse(source, filename=label)
    except SyntaxError as e:
        result.add_error(f"{label}:{e.lineno}: Syntax error: {e.msg}")
        return result

    defined = {node.name for node in tree.body if isinstance(node, ast.ClassDef)}
    for schema in schema_file.enums:
        for type_name in (schema.name, schema.error_type_name):
            if type_name is not None and type_name not in defined:
                result.add_error(f"{label}: '{type_name}' is not defined")

    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            modules = [alias.name for alias in node.names]
        elif isinstance(node, ast.ImportFrom):
            modules = [node.module or ""]
        else:
            continue
        for module in modules:
            if module.split(".")[0] not in ALLOWED_IMPORT_ROOTS:
                result.add_error(f"{label}:{node.lineno}: Unexpected import: {module}")

    return result


class GenerationRunner:
    """
    Orchestrates the generation process.

    Renders every schema of a SchemaFile into one module and writes it to the
    configured output path.
    """

    def __init__(
        self,
        schema_file: ir.SchemaFile,
        project_root: Path,
        config: GenerationConfig | None = None,
        output_path: Path | None = None,
    ):
        """
        Initialize the generation runner.

        Args:
            schema_file: Validated schemas to render
            project_root: Directory relative output paths resolve against
            config: Optional generation configuration
            output_path: Overrides the configured output path
        """
        self.schema_file = schema_file
        self.project_root = project_root
        self.config = config or GenerationConfig()
        self.output_path = output_path or self.config.get_output_path(project_root)

    def render(self) -> GenerationResult:
        """Render the module without writing it."""
        result = GenerationResult()
        builder = ModuleBuilder(self.schema_file, self.config)

        try:
            source = builder.render()
        except StrEnumError as e:
            result.add_error(str(e))
            return result

        for warning in builder.warnings:
            result.add_warning(warning)
        result.add_file(self.output_path, source)
        return result

    def run(self, dry_run: bool = False, verify: bool | None = None) -> GenerationResult:
        """
        Run the generation process.

        Args:
            dry_run: Render and verify without writing
            verify: Verify the rendered module (uses config if None)

        Returns:
            GenerationResult with the rendered file and any errors
        """
        result = self.render()
        if not result.success:
            return result

        should_verify = verify if verify is not None else self.config.verify
        if should_verify:
            for path, source in result.files.items():
                verification = verify_source(source, self.schema_file, label=path.name)
                result.verified = verification.verified
                result.verification_errors = verification.errors
                for error in verification.errors:
                    result.add_error(f"[verification] {error}")

        if dry_run or not result.success:
            return result

        result.write_files()
        logger.info("Wrote %s", self.output_path)
        return result

    def verify(self) -> VerificationResult:
        """Verify the module already written at the output path."""
        if not self.output_path.exists():
            result = VerificationResult()
            result.add_error(f"{self.output_path} does not exist")
            return result
        return verify_source(
            self.output_path.read_text(encoding="utf-8"),
            self.schema_file,
            label=self.output_path.name,
        )


class VerificationResult:
    """Result of verifying a generated module."""

    def __init__(self):
        self.errors: list[str] = []

    def add_error(self, message: str) -> None:
        """Add a verification error."""
        self.errors.append(message)

    @property
    def verified(self) -> bool:
        """Check if verification passed."""
        return len(self.errors) == 0


class GenerationResult:
    """
    Result of a generation run.

    Tracks rendered files, errors, and warnings.
    """

    def __init__(self):
        self.files: dict[Path, str] = {}
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self.verified: bool = False
        self.verification_errors: list[str] = []
        self.written: bool = False

    def add_file(self, path: Path, content: str) -> None:
        """Add a file to be written."""
        self.files[path] = content

    def add_error(self, message: str) -> None:
        """Add an error message."""
        self.errors.append(message)

    def add_warning(self, message: str) -> None:
        """Add a warning message."""
        self.warnings.append(message)

    def write_files(self) -> None:
        """Write all files to disk."""
        for path, content in self.files.items():
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        self.written = True

    @property
    def success(self) -> bool:
        """Check if generation was successful (no errors)."""
        return len(self.errors) == 0

    def summary(self) -> str:
        """Get a summary of the generation result."""
        lines = []

        if self.success:
            verb = "Generated" if self.written else "Rendered"
            lines.append(f"{verb} {len(self.files)} file(s)")
        else:
            lines.append(f"Generation failed with {len(self.errors)} errors")

        if self.warnings:
            lines.append(f"Warnings: {len(self.warnings)}")

        return "\n".join(lines)
