"""
Runtime support imported by generated enum modules.

Holds the pieces shared by every generated class: text coercion used by the
comparison adapters, decoding of byte and OS-level text, the error types that
keep "not valid text" apart from "not a recognized variant", and the
reflection protocol.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from typing import Any, ClassVar, Protocol, runtime_checkable


class Utf8EnumError(ValueError):
    """Base for failures converting byte or OS-level text into a variant."""

    pass


class Utf8Error(Utf8EnumError):
    """The input was not valid UTF-8 text."""

    def __init__(self, cause: UnicodeError):
        self.cause = cause
        super().__init__(str(cause))

    def __str__(self) -> str:
        return str(self.cause)


class InvalidVariant(Utf8EnumError):
    """The input was valid text but names no variant."""

    def __init__(self, error: Exception):
        self.error = error
        super().__init__(str(error))

    def __str__(self) -> str:
        return str(self.error)


def coerce_text(other: object) -> str | None:
    """
    Text view of an operand for comparison adapters.

    ``str`` (including members of generated enums) is returned as a plain
    ``str`` with the same content, and ``os.PathLike`` objects with a text path
    are returned as that path. Anything else yields None.
    """
    if isinstance(other, str):
        return str.__str__(other)
    if isinstance(other, os.PathLike):
        path = os.fspath(other)
        if isinstance(path, str):
            return path
    return None


def decode_text(data: bytes | bytearray | memoryview) -> str:
    """
    Decode UTF-8 bytes.

    Raises:
        Utf8Error: If the bytes are not valid UTF-8
    """
    try:
        return bytes(data).decode("utf-8")
    except UnicodeDecodeError as e:
        raise Utf8Error(e) from e


def decode_os_text(value: str | bytes | os.PathLike[Any]) -> str:
    """
    Text form of an OS-level string or path.

    Byte paths must be UTF-8. Text paths must not carry lone surrogates
    (as produced by the ``surrogateescape`` error handler for undecodable
    file names).

    Raises:
        Utf8Error: If the value is not valid text
    """
    raw = os.fspath(value)
    if isinstance(raw, bytes):
        return decode_text(raw)
    try:
        raw.encode("utf-8")
    except UnicodeEncodeError as e:
        raise Utf8Error(e) from e
    return raw


@runtime_checkable
class VariantMetadata(Protocol):
    """
    Reflection protocol implemented by enums generated with reflection enabled.

    Class attributes give the variant count and declared member names in
    declaration order; instances report their own declared name.
    """

    VARIANT_COUNT: ClassVar[int]
    VARIANT_NAMES: ClassVar[tuple[str, ...]]

    def variant_name(self) -> str: ...

    @classmethod
    def iter_variants(cls) -> Iterator[Any]: ...

    def get_str(self, prop: str) -> str | None: ...


@runtime_checkable
class IntoDiscriminant(Protocol):
    """Reflection protocol for enums that carry integer discriminants."""

    def discriminant(self) -> int: ...
