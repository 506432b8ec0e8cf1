"""
str-enum Intermediate Representation (IR) types.

All types are re-exported from this package.
"""

from .schema import (
    GENERATED_MEMBER_NAMES,
    RESERVED_MEMBER_NAMES,
    RESERVED_TYPE_NAMES,
    AliasPolicy,
    Capability,
    ReprType,
    SchemaFile,
    SchemaSpec,
    VariantSpec,
    Visibility,
    collect_schema_problems,
)

__all__ = [
    "AliasPolicy",
    "Capability",
    "ReprType",
    "SchemaFile",
    "SchemaSpec",
    "VariantSpec",
    "Visibility",
    "collect_schema_problems",
    "GENERATED_MEMBER_NAMES",
    "RESERVED_MEMBER_NAMES",
    "RESERVED_TYPE_NAMES",
]
