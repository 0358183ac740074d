# Copyright (c) 2026 Firefly Software Solutions Inc.
# Licensed under the Apache License, Version 2.0

"""
PyConsumerOffsets - decoder for Kafka's ``__consumer_offsets`` topic.

Each record of the internal topic is a ``(key, payload)`` pair holding one of
two record types:
- Offset commits: which offset a consumer group reached on a partition
- Group metadata: the members of a consumer group, their subscriptions and
  their assignments

A record without payload is a tombstone: its key is being deleted.

Quick Start:
    >>> from pyconsumeroffsets import decode_record, CommitRecord
    >>>
    >>> record = decode_record(msg.key(), msg.value())
    >>> if isinstance(record, CommitRecord):
    ...     print(f"{record.group}: {record.topic}/{record.partition} @ {record.offset}")

Handling Errors:
    >>> from pyconsumeroffsets import CorruptRecordError, UnsupportedVersionError
    >>>
    >>> try:
    ...     record = decode_record(key, payload)
    ... except UnsupportedVersionError as e:
    ...     print(f"Newer record format: {e.kind.value}")
    ... except CorruptRecordError as e:
    ...     print(f"Corrupt record: {e}")

Reactive Streams:
    >>> from pyconsumeroffsets import DecodeStreamConfig, decode_pairs
    >>>
    >>> decode_pairs(pairs, DecodeStreamConfig(skip_errors=True)).subscribe(
    ...     on_next=print
    ... )
"""

from .decoder import (
    MSG_V0_OFFSET_COMMIT,
    MSG_V1_OFFSET_COMMIT,
    MSG_V2_GROUP_METADATA,
    decode_record,
)
from .exceptions import (
    ConsumerOffsetsError,
    CorruptRecordError,
    ErrorKind,
    InsufficientDataError,
    MalformedTextError,
    MissingKeyError,
    UnableToParseForVersionError,
    UnsupportedAssignmentVersionError,
    UnsupportedGroupMetadataSchemaError,
    UnsupportedMessageVersionError,
    UnsupportedOffsetCommitSchemaError,
    UnsupportedSubscriptionVersionError,
    UnsupportedVersionError,
)
from .group_metadata import decode_assignment, decode_subscription
from .models import (
    Assignment,
    CommitRecord,
    DecodedRecord,
    DecodeStreamConfig,
    Member,
    MembershipRecord,
    RecordType,
    Subscription,
    TopicPartitions,
    load_record,
    load_record_json,
)
from .reactive import decode_pairs, decode_records, from_pairs
from .reader import ByteReader

__version__ = "0.1.0"
__author__ = "Firefly Software Solutions Inc."
__license__ = "Apache-2.0"

__all__ = [
    # Decoding
    "decode_record",
    "decode_subscription",
    "decode_assignment",
    "ByteReader",
    # Message versions
    "MSG_V0_OFFSET_COMMIT",
    "MSG_V1_OFFSET_COMMIT",
    "MSG_V2_GROUP_METADATA",
    # Records (Pydantic models)
    "DecodedRecord",
    "RecordType",
    "CommitRecord",
    "MembershipRecord",
    "Member",
    "Subscription",
    "Assignment",
    "TopicPartitions",
    "load_record",
    "load_record_json",
    # Reactive
    "DecodeStreamConfig",
    "decode_records",
    "decode_pairs",
    "from_pairs",
    # Exceptions
    "ErrorKind",
    "ConsumerOffsetsError",
    "MissingKeyError",
    "CorruptRecordError",
    "InsufficientDataError",
    "MalformedTextError",
    "UnsupportedVersionError",
    "UnsupportedMessageVersionError",
    "UnsupportedOffsetCommitSchemaError",
    "UnsupportedGroupMetadataSchemaError",
    "UnsupportedSubscriptionVersionError",
    "UnsupportedAssignmentVersionError",
    "UnableToParseForVersionError",
]
