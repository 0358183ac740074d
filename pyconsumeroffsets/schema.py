# Copyright (c) 2026 Firefly Software Solutions Inc.
# Licensed under the Apache License, Version 2.0

"""
Version-gated field tables.

Each versioned structure of ``__consumer_offsets`` is described as an ordered
tuple of FieldSpec entries. decode_fields() walks the table front to back and,
for every field, either reads it (the structure's version is in the field's
``versions``) or uses its default. Table order is wire order.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from .reader import ByteReader

T = TypeVar("T")

# Highest schema generation known for every versioned structure.
MAX_SUPPORTED_VERSION: int = 3

ALL_VERSIONS = range(0, MAX_SUPPORTED_VERSION + 1)

FieldReader = Callable[[ByteReader, int], Any]


def since(version: int) -> range:
    """Versions from ``version`` up to the highest supported one."""
    return range(version, MAX_SUPPORTED_VERSION + 1)


def only(version: int) -> range:
    """The single version ``version``."""
    return range(version, version + 1)


def is_supported(version: int) -> bool:
    """Whether ``version`` is a known schema version (0..3)."""
    return version in ALL_VERSIONS


@dataclass(frozen=True)
class FieldSpec:
    """A field of a versioned structure."""

    name: str
    read: FieldReader
    versions: range = ALL_VERSIONS
    default: Any = None


def decode_fields(
    reader: ByteReader, version: int, fields: tuple[FieldSpec, ...]
) -> dict[str, Any]:
    """
    Decode a structure's fields in table order.

    Args:
        reader: Reader positioned at the first field.
        version: Schema version of the structure being decoded.
        fields: Field table of the structure.

    Returns:
        Mapping of field name to decoded (or default) value.
    """
    values: dict[str, Any] = {}
    for spec in fields:
        if version in spec.versions:
            values[spec.name] = spec.read(reader, version)
        else:
            values[spec.name] = spec.default
    return values


# Primitive field readers. The version argument is unused by primitives; it is
# passed so nested structures can inherit their parent's version.


def i32(reader: ByteReader, version: int) -> int:
    return reader.read_i32()


def i64(reader: ByteReader, version: int) -> int:
    return reader.read_i64()


def string(reader: ByteReader, version: int) -> str:
    return reader.read_string()


def byte_array(reader: ByteReader, version: int) -> bytes:
    return reader.read_byte_array()


def array_of(element: Callable[[ByteReader, int], T]) -> Callable[[ByteReader, int], tuple[T, ...]]:
    """
    Build a reader for an i32 count followed by that many elements.

    A count of zero or less yields an empty tuple.
    """

    def read_array(reader: ByteReader, version: int) -> tuple[T, ...]:
        count = reader.read_i32()
        return tuple(element(reader, version) for _ in range(count))

    return read_array
