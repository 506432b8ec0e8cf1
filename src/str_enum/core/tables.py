"""
Value table and diagnostic string assembly.

The value table is every canonical string, in declaration order, joined by a
single separator. Diagnostics wrap that table in fixed text for failure
messages. Both are computed once per schema at generation time and baked into
the generated module as literals.

Lengths are computed arithmetically first and each artifact is written into a
single buffer of exactly that size.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from .errors import InternalConsistencyError
from .ir import SchemaSpec

logger = logging.getLogger(__name__)

VALUE_SEPARATOR = ","


@dataclass(frozen=True)
class DiagnosticWrapping:
    """Fixed text placed around the value table in a diagnostic."""

    prefix: str
    suffix: str


PARSE_WRAPPING = DiagnosticWrapping(prefix="expected one of [", suffix="]")
SERDE_WRAPPING = DiagnosticWrapping(prefix="one of [", suffix="]")


@dataclass(frozen=True)
class ValueTables:
    """
    Every table derived from one schema.

    Attributes:
        values: Canonical strings in declaration order
        value_table: Separator-joined canonical strings
        parse_diagnostic: Message carried by the generated error type
        serde_diagnostic: "Expected" description for deserialization failures
    """

    values: tuple[str, ...]
    value_table: str
    parse_diagnostic: str
    serde_diagnostic: str

    def split(self) -> list[str]:
        return self.value_table.split(VALUE_SEPARATOR)


def _utf8_len(text: str) -> int:
    return len(text.encode("utf-8"))


def value_table_length(values: Sequence[str]) -> int:
    """
    Byte length of the value table for the given canonical strings.

    Raises:
        InternalConsistencyError: If there are no values
    """
    if not values:
        raise InternalConsistencyError("value table requested for an empty enumeration")
    separator_len = _utf8_len(VALUE_SEPARATOR)
    return sum(_utf8_len(v) for v in values) + separator_len * (len(values) - 1)


def _finish(buffer: bytearray, written: int, what: str) -> str:
    if written != len(buffer):
        raise InternalConsistencyError(
            f"{what} wrote {written} bytes into a {len(buffer)}-byte buffer"
        )
    try:
        return buffer.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InternalConsistencyError(f"{what} is not valid UTF-8: {e}") from e


def build_value_table(values: Sequence[str]) -> str:
    """
    Join canonical strings with the separator, without a trailing separator.

    Args:
        values: Canonical strings in declaration order

    Returns:
        The value table
    """
    buffer = bytearray(value_table_length(values))
    separator = VALUE_SEPARATOR.encode("utf-8")
    cursor = 0
    last = len(values) - 1
    for index, value in enumerate(values):
        encoded = value.encode("utf-8")
        buffer[cursor : cursor + len(encoded)] = encoded
        cursor += len(encoded)
        if index != last:
            buffer[cursor : cursor + len(separator)] = separator
            cursor += len(separator)
    return _finish(buffer, cursor, "value table")


def diagnostic_length(value_table: str, wrapping: DiagnosticWrapping) -> int:
    return _utf8_len(wrapping.prefix) + _utf8_len(value_table) + _utf8_len(wrapping.suffix)


def build_diagnostic(value_table: str, wrapping: DiagnosticWrapping) -> str:
    """
    Wrap a value table in prefix and suffix text.

    Args:
        value_table: Output of build_value_table
        wrapping: Prefix/suffix pair

    Returns:
        ``prefix + value_table + suffix``
    """
    buffer = bytearray(diagnostic_length(value_table, wrapping))
    cursor = 0
    for part in (wrapping.prefix, value_table, wrapping.suffix):
        encoded = part.encode("utf-8")
        buffer[cursor : cursor + len(encoded)] = encoded
        cursor += len(encoded)
    return _finish(buffer, cursor, "diagnostic string")


def build_tables(schema: SchemaSpec) -> ValueTables:
    """
    Compute the value table and both diagnostics for a schema.

    Args:
        schema: Validated schema

    Returns:
        ValueTables for the schema
    """
    values = schema.canonicals
    value_table = build_value_table(values)
    tables = ValueTables(
        values=values,
        value_table=value_table,
        parse_diagnostic=build_diagnostic(value_table, PARSE_WRAPPING),
        serde_diagnostic=build_diagnostic(value_table, SERDE_WRAPPING),
    )
    logger.debug(
        "Built value table for %s: %d values, %d bytes",
        schema.name,
        len(values),
        _utf8_len(value_table),
    )
    return tables
