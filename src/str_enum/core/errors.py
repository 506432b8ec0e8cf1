"""
Error types for str-enum schema loading, validation and code generation.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class StrEnumError(Exception):
    """Base exception for all str-enum errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class SchemaValidationError(StrEnumError):
    """
    Raised when a schema is rejected at build time.

    Examples:
    - No variants
    - Empty or duplicated canonical strings
    - Discriminant without a representation type
    - Ambiguous aliases under the ``reject`` alias policy
    """

    def __init__(
        self,
        message: str,
        context: Optional["ErrorContext"] = None,
        problems: list[str] | None = None,
    ):
        self.problems = problems or [message]
        super().__init__(message, context)


class SchemaLoadError(StrEnumError):
    """
    Raised when a schema file cannot be read.

    Examples:
    - Missing file
    - Invalid TOML
    - Tables of the wrong shape
    """

    pass


class GenerationError(StrEnumError):
    """
    Raised when module generation fails.

    Examples:
    - A generator reported errors
    - The written module failed verification
    - Output path issues
    """

    pass


class InternalConsistencyError(StrEnumError):
    """
    Raised when a generated table fails its own well-formedness check.

    Inputs are validated text before any table is built, so this signals a
    defect in the generator rather than a problem with the schema.
    """

    pass


@dataclass
class ErrorContext:
    """
    Location of an error inside a schema file.

    Attributes:
        file: Path to the schema file
        enum: Name (or index) of the enum table being processed
        variant: Name (or index) of the variant being processed
    """

    file: Path | None = None
    enum: str | None = None
    variant: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "colors.toml: enum Color, variant Red"
        """
        parts = []
        if self.enum:
            parts.append(f"enum {self.enum}")
        if self.variant:
            parts.append(f"variant {self.variant}")

        location = str(self.file) if self.file else "<schema>"
        if parts:
            return f"{location}: {', '.join(parts)}"
        return location


def make_load_error(
    message: str,
    file: Path | None,
    enum: str | None = None,
    variant: str | None = None,
) -> SchemaLoadError:
    """
    Helper to create a SchemaLoadError with context.

    Args:
        message: Error description
        file: Schema file being loaded
        enum: Enum table where the error occurred
        variant: Variant table where the error occurred

    Returns:
        SchemaLoadError with context attached
    """
    context = ErrorContext(file=file, enum=enum, variant=variant)
    return SchemaLoadError(message, context)
