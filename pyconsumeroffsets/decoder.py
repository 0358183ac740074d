# Copyright (c) 2026 Firefly Software Solutions Inc.
# Licensed under the Apache License, Version 2.0

"""
Entry point for decoding ``__consumer_offsets`` records.

Record Format:
    Key:     [2B message_version][key fields...]
    Payload: [2B schema_version][payload fields...]   (absent for tombstones)

Message Versions:
    - 0, 1: offset commit
    - 2: group metadata
"""

from __future__ import annotations

import logging

from .exceptions import MissingKeyError, UnsupportedMessageVersionError
from .group_metadata import decode_group_metadata
from .models import CommitRecord, MembershipRecord
from .offset_commit import decode_offset_commit
from .reader import ByteReader, BytesLike

logger = logging.getLogger(__name__)

MSG_V0_OFFSET_COMMIT: int = 0
MSG_V1_OFFSET_COMMIT: int = 1
MSG_V2_GROUP_METADATA: int = 2


def decode_record(
    key: BytesLike | None,
    payload: BytesLike | None,
) -> CommitRecord | MembershipRecord:
    """
    Decode a record of the __consumer_offsets topic.

    Args:
        key: Record key as read from the topic.
        payload: Record payload, or None for a tombstone.

    Returns:
        A CommitRecord or a MembershipRecord. ``is_tombstone`` is set when
        no payload was given.

    Raises:
        MissingKeyError: If ``key`` is None.
        UnsupportedMessageVersionError: If the key's message version is not
            0, 1 or 2.
        ConsumerOffsetsError: Any other decoding failure. Decoding stops at
            the first error; no partial record is returned.

    Example:
        >>> record = decode_record(msg.key(), msg.value())
        >>> if isinstance(record, CommitRecord) and not record.is_tombstone:
        ...     print(f"{record.group} {record.topic}/{record.partition} @ {record.offset}")
    """
    if key is None:
        raise MissingKeyError()

    key_reader = ByteReader(key)
    message_version = key_reader.read_i16()
    payload_reader = ByteReader(payload) if payload is not None else None

    if message_version in (MSG_V0_OFFSET_COMMIT, MSG_V1_OFFSET_COMMIT):
        logger.debug("Decoding offset commit (message version %d)", message_version)
        return decode_offset_commit(message_version, key_reader, payload_reader)
    if message_version == MSG_V2_GROUP_METADATA:
        logger.debug("Decoding group metadata (message version %d)", message_version)
        return decode_group_metadata(message_version, key_reader, payload_reader)

    raise UnsupportedMessageVersionError(message_version)
