# Copyright (c) 2026 Firefly Software Solutions Inc.
# Licensed under the Apache License, Version 2.0

"""
Offset commit records.

Written by the group coordinator when a consumer commits the offset it reached
on a partition of a topic.

Key Format (message version 0 or 1):
    [2B group_len][group][2B topic_len][topic][4B partition]

Payload Format:
    [2B schema_version][8B offset]
    [4B leader_epoch]                  (schema >= 3, else -1)
    [2B metadata_len][metadata][8B commit_timestamp]
    [8B expire_timestamp]              (schema == 1, else -1)
"""

from __future__ import annotations

from . import schema
from .exceptions import UnsupportedOffsetCommitSchemaError
from .models import NO_TIMESTAMP, CommitRecord
from .reader import ByteReader
from .schema import FieldSpec, decode_fields, only, since

OFFSET_COMMIT_KEY_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("group", schema.string),
    FieldSpec("topic", schema.string),
    FieldSpec("partition", schema.i32),
)

OFFSET_COMMIT_VALUE_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("offset", schema.i64),
    FieldSpec("leader_epoch", schema.i32, since(3), -1),
    FieldSpec("metadata", schema.string),
    FieldSpec("commit_timestamp", schema.i64),
    FieldSpec("expire_timestamp", schema.i64, only(1), NO_TIMESTAMP),
)


def decode_offset_commit(
    message_version: int,
    key: ByteReader,
    payload: ByteReader | None,
) -> CommitRecord:
    """
    Decode an offset commit record.

    Args:
        message_version: Version tag already read from the key.
        key: Reader positioned right after the version tag.
        payload: Reader over the payload, or None for a tombstone.

    Returns:
        The decoded CommitRecord.

    Raises:
        UnsupportedOffsetCommitSchemaError: If the payload schema is not 0..3.
        CorruptRecordError: If key or payload bytes are malformed.
    """
    fields = decode_fields(key, message_version, OFFSET_COMMIT_KEY_FIELDS)
    if payload is None:
        return CommitRecord(message_version=message_version, is_tombstone=True, **fields)

    schema_version = payload.read_i16()
    if not schema.is_supported(schema_version):
        raise UnsupportedOffsetCommitSchemaError(schema_version)
    fields.update(decode_fields(payload, schema_version, OFFSET_COMMIT_VALUE_FIELDS))

    return CommitRecord(
        message_version=message_version,
        is_tombstone=False,
        schema_version=schema_version,
        **fields,
    )
