"""
str-enum - closed string enumerations from declarative schemas.

Generates ``str``-valued enum classes with a baked value table, alias-aware
lookup, optional error types, and reflection and pydantic adapters.
"""

from __future__ import annotations

from ._version import get_version

# Re-export commonly used types for convenience
from .core import ir
from .core.errors import (
    GenerationError,
    InternalConsistencyError,
    SchemaLoadError,
    SchemaValidationError,
    StrEnumError,
)

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "StrEnumError",
    "SchemaValidationError",
    "SchemaLoadError",
    "GenerationError",
    "InternalConsistencyError",
]
