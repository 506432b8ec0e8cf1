"""
Core schema model, table builder, validation and loading.
"""

from . import ir
from .errors import (
    ErrorContext,
    GenerationError,
    InternalConsistencyError,
    SchemaLoadError,
    SchemaValidationError,
    StrEnumError,
)
from .loader import DEFAULT_SCHEMA_FILE, load_schema_data, load_schema_file
from .tables import (
    PARSE_WRAPPING,
    SERDE_WRAPPING,
    VALUE_SEPARATOR,
    DiagnosticWrapping,
    ValueTables,
    build_diagnostic,
    build_tables,
    build_value_table,
)
from .validator import lint_schema, lint_schema_file

__all__ = [
    "ir",
    # Errors
    "ErrorContext",
    "GenerationError",
    "InternalConsistencyError",
    "SchemaLoadError",
    "SchemaValidationError",
    "StrEnumError",
    # Loading
    "DEFAULT_SCHEMA_FILE",
    "load_schema_data",
    "load_schema_file",
    # Tables
    "PARSE_WRAPPING",
    "SERDE_WRAPPING",
    "VALUE_SEPARATOR",
    "DiagnosticWrapping",
    "ValueTables",
    "build_diagnostic",
    "build_tables",
    "build_value_table",
    # Lint
    "lint_schema",
    "lint_schema_file",
]
