# Copyright (c) 2026 Firefly Software Solutions Inc.
# Licensed under the Apache License, Version 2.0

"""
Group metadata records.

Written by the group coordinator when the membership of a consumer group
changes: who the members are, what they subscribe to, and what they were
assigned.

Key Format (message version 2):
    [2B group_len][group]

Payload Format:
    [2B schema_version][2B protocol_type_len][protocol_type][4B generation]
    [2B protocol_len][protocol][2B leader_len][leader]
    [8B current_state_timestamp]       (schema >= 2, else -1)
    [4B member_count][members...]

Each member (shares the record's schema_version):
    [2B id_len][id]
    [2B group_instance_id_len][group_instance_id]   (schema >= 3)
    [2B client_id_len][client_id][2B client_host_len][client_host]
    [4B rebalance_timeout]             (schema >= 1, else 0)
    [4B session_timeout]
    [4B subscription_len][subscription blob]
    [4B assignment_len][assignment blob]

The subscription and assignment blobs carry their own version and are decoded
from readers bounded to the blob length; bytes the decoder does not consume
are discarded.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

from . import schema
from .exceptions import (
    UnableToParseForVersionError,
    UnsupportedAssignmentVersionError,
    UnsupportedGroupMetadataSchemaError,
    UnsupportedSubscriptionVersionError,
)
from .models import NO_TIMESTAMP, Assignment, Member, MembershipRecord, Subscription, TopicPartitions
from .reader import ByteReader, BytesLike, as_reader
from .schema import FieldSpec, decode_fields, since

logger = logging.getLogger(__name__)

T = TypeVar("T")

SUBSCRIPTION_PARENT = "ConsumerProtocolSubscription"
ASSIGNMENT_PARENT = "ConsumerProtocolAssignment"


# =============================================================================
# Topic Partitions
# =============================================================================


def decode_topic_partitions(reader: ByteReader, version: int, parent: str) -> TopicPartitions:
    """
    Decode a topic and its partitions.

    Format: [2B topic_len][topic][4B count][4B partition...]

    The layout itself is not versioned, but it is only known up to version 3
    of the structure embedding it.

    Raises:
        UnableToParseForVersionError: If ``version`` is above 3. Nothing is
            read in that case.
    """
    if version > schema.MAX_SUPPORTED_VERSION:
        raise UnableToParseForVersionError("TopicPartitions", version, parent)
    topic = reader.read_string()
    partitions = schema.array_of(schema.i32)(reader, version)
    return TopicPartitions(topic=topic, partitions=partitions)


def _topic_partitions_of(parent: str) -> Callable[[ByteReader, int], TopicPartitions]:
    def read(reader: ByteReader, version: int) -> TopicPartitions:
        return decode_topic_partitions(reader, version, parent)

    return read


# =============================================================================
# Consumer Protocol Subscription
# =============================================================================

SUBSCRIPTION_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("subscribed_topics", schema.array_of(schema.string)),
    FieldSpec("user_data", schema.byte_array),
    FieldSpec(
        "owned_topic_partitions",
        schema.array_of(_topic_partitions_of(SUBSCRIPTION_PARENT)),
        since(1),
        (),
    ),
    FieldSpec("generation_id", schema.i32, since(2), -1),
    FieldSpec("rack_id", schema.string, since(3), ""),
)


def decode_subscription(data: ByteReader | BytesLike) -> Subscription:
    """
    Decode a member's subscription blob.

    Args:
        data: Reader bounded to the blob, or the raw blob bytes.

    Raises:
        UnsupportedSubscriptionVersionError: If the blob version is not 0..3.
    """
    reader = as_reader(data)
    version = reader.read_i16()
    if not schema.is_supported(version):
        raise UnsupportedSubscriptionVersionError(version)
    return Subscription(version=version, **decode_fields(reader, version, SUBSCRIPTION_FIELDS))


# =============================================================================
# Consumer Protocol Assignment
# =============================================================================

ASSIGNMENT_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec(
        "assigned_topic_partitions",
        schema.array_of(_topic_partitions_of(ASSIGNMENT_PARENT)),
    ),
    FieldSpec("user_data", schema.byte_array),
)


def decode_assignment(data: ByteReader | BytesLike) -> Assignment:
    """
    Decode a member's assignment blob.

    Raises:
        UnsupportedAssignmentVersionError: If the blob version is not 0..3.
    """
    reader = as_reader(data)
    version = reader.read_i16()
    if not schema.is_supported(version):
        raise UnsupportedAssignmentVersionError(version)
    return Assignment(version=version, **decode_fields(reader, version, ASSIGNMENT_FIELDS))


# =============================================================================
# Members
# =============================================================================


def _blob(decode: Callable[[ByteReader], T]) -> Callable[[ByteReader, int], T]:
    def read(reader: ByteReader, version: int) -> T:
        blob = reader.read_blob()
        value = decode(blob)
        if blob.remaining:
            logger.debug("Ignoring %d trailing bytes after %s", blob.remaining, type(value).__name__)
        return value

    return read


MEMBER_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("id", schema.string),
    FieldSpec("group_instance_id", schema.string, since(3), ""),
    FieldSpec("client_id", schema.string),
    FieldSpec("client_host", schema.string),
    FieldSpec("rebalance_timeout", schema.i32, since(1), 0),
    FieldSpec("session_timeout", schema.i32),
    FieldSpec("subscription", _blob(decode_subscription)),
    FieldSpec("assignment", _blob(decode_assignment)),
)


def decode_member(reader: ByteReader, schema_version: int) -> Member:
    """Decode one member using the schema version of the enclosing record."""
    return Member(**decode_fields(reader, schema_version, MEMBER_FIELDS))


# =============================================================================
# Group Metadata
# =============================================================================

GROUP_METADATA_KEY_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("group", schema.string),
)

GROUP_METADATA_VALUE_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("protocol_type", schema.string),
    FieldSpec("generation", schema.i32),
    FieldSpec("protocol", schema.string),
    FieldSpec("leader", schema.string),
    FieldSpec("current_state_timestamp", schema.i64, since(2), NO_TIMESTAMP),
    FieldSpec("members", schema.array_of(decode_member)),
)


def decode_group_metadata(
    message_version: int,
    key: ByteReader,
    payload: ByteReader | None,
) -> MembershipRecord:
    """
    Decode a group metadata record.

    Args:
        message_version: Version tag already read from the key.
        key: Reader positioned right after the version tag.
        payload: Reader over the payload, or None for a tombstone.

    Returns:
        The decoded MembershipRecord.

    Raises:
        UnsupportedGroupMetadataSchemaError: If the payload schema is not 0..3.
        UnsupportedVersionError: If a member's subscription or assignment
            blob has an unknown version.
        CorruptRecordError: If key or payload bytes are malformed.
    """
    fields = decode_fields(key, message_version, GROUP_METADATA_KEY_FIELDS)
    if payload is None:
        return MembershipRecord(message_version=message_version, is_tombstone=True, **fields)

    schema_version = payload.read_i16()
    if not schema.is_supported(schema_version):
        raise UnsupportedGroupMetadataSchemaError(schema_version)
    fields.update(decode_fields(payload, schema_version, GROUP_METADATA_VALUE_FIELDS))

    return MembershipRecord(
        message_version=message_version,
        is_tombstone=False,
        schema_version=schema_version,
        **fields,
    )
