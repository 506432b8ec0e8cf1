"""
Schema file loading.

Reads ``[[enums]]`` tables from a TOML schema file (``strenum.toml`` by
default) and builds a validated SchemaFile.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

import pydantic

from . import ir
from .errors import ErrorContext, SchemaValidationError, make_load_error

logger = logging.getLogger(__name__)

DEFAULT_SCHEMA_FILE = "strenum.toml"

_ENUM_KEYS = frozenset(
    {
        "name",
        "variants",
        "error_type",
        "repr",
        "derive",
        "visibility",
        "reflection",
        "serialization",
        "alias_policy",
    }
)
_VARIANT_KEYS = frozenset({"name", "value", "aliases", "discriminant"})


def read_toml(path: Path) -> dict[str, Any]:
    """
    Read a TOML file.

    Raises:
        SchemaLoadError: If the file is missing or not valid TOML
    """
    if not path.exists():
        raise make_load_error("Schema file not found", path)

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise make_load_error(f"Invalid TOML: {e}", path) from e


def _check_keys(
    table: dict[str, Any],
    allowed: frozenset[str],
    path: Path,
    enum: str,
    variant: str | None = None,
) -> None:
    unknown = sorted(set(table) - allowed)
    if unknown:
        raise make_load_error(f"Unknown keys: {', '.join(unknown)}", path, enum, variant)


def _parse_variant(data: Any, path: Path, enum: str, index: int) -> dict[str, Any]:
    label = f"#{index}"
    if not isinstance(data, dict):
        raise make_load_error("Variant must be a table", path, enum, label)

    label = str(data.get("name", label))
    _check_keys(data, _VARIANT_KEYS, path, enum, label)

    for key in ("name", "value"):
        if not isinstance(data.get(key), str):
            raise make_load_error(f"'{key}' must be a string", path, enum, label)

    aliases = data.get("aliases", [])
    if not isinstance(aliases, list) or not all(isinstance(a, str) for a in aliases):
        raise make_load_error("'aliases' must be a list of strings", path, enum, label)

    discriminant = data.get("discriminant")
    if discriminant is not None and (
        not isinstance(discriminant, int) or isinstance(discriminant, bool)
    ):
        raise make_load_error("'discriminant' must be an integer", path, enum, label)

    return {
        "name": data["name"],
        "canonical": data["value"],
        "aliases": tuple(aliases),
        "discriminant": discriminant,
    }


def parse_enum_table(data: Any, path: Path, index: int = 0) -> ir.SchemaSpec:
    """
    Build a SchemaSpec from one ``[[enums]]`` table.

    Args:
        data: Parsed TOML table
        path: Schema file, for error context
        index: Position of the table in the file

    Returns:
        Validated SchemaSpec

    Raises:
        SchemaLoadError: If the table has the wrong shape
        SchemaValidationError: If the schema breaks an invariant
    """
    label = f"#{index}"
    if not isinstance(data, dict):
        raise make_load_error("Enum must be a table", path, label)

    label = str(data.get("name", label))
    _check_keys(data, _ENUM_KEYS, path, label)

    variants_data = data.get("variants", [])
    if not isinstance(variants_data, list):
        raise make_load_error("'variants' must be an array of tables", path, label)

    spec_dict: dict[str, Any] = {
        "name": data.get("name"),
        "variants": [
            _parse_variant(v, path, label, i) for i, v in enumerate(variants_data)
        ],
        "error_type_name": data.get("error_type"),
        "repr_type": data.get("repr"),
        "capabilities": data.get("derive", []),
        "visibility": data.get("visibility", ir.Visibility.PUBLIC.value),
        "reflection": data.get("reflection", False),
        "serialization": data.get("serialization", False),
        "alias_policy": data.get("alias_policy", ir.AliasPolicy.FIRST_WINS.value),
    }

    try:
        return ir.SchemaSpec.model_validate(spec_dict)
    except pydantic.ValidationError as e:
        raise make_load_error(f"Invalid enum definition: {e}", path, label) from e
    except SchemaValidationError as e:
        context = ErrorContext(file=path, enum=label)
        raise SchemaValidationError(e.message, context, e.problems) from e


def load_schema_data(data: dict[str, Any], path: Path) -> ir.SchemaFile:
    """Build a SchemaFile from already-parsed TOML data."""
    enums_data = data.get("enums")
    if not isinstance(enums_data, list) or not enums_data:
        raise make_load_error("Expected at least one [[enums]] table", path)

    schemas = tuple(parse_enum_table(e, path, i) for i, e in enumerate(enums_data))
    try:
        schema_file = ir.SchemaFile(enums=schemas)
    except SchemaValidationError as e:
        raise SchemaValidationError(e.message, ErrorContext(file=path), e.problems) from e

    logger.debug("Loaded %d enums from %s", len(schema_file.enums), path)
    return schema_file


def load_schema_file(path: Path) -> ir.SchemaFile:
    """
    Load and validate a schema file.

    Args:
        path: Path to the TOML schema file

    Returns:
        SchemaFile with every enum validated
    """
    return load_schema_data(read_toml(path), path)
