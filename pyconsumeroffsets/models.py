# Copyright (c) 2026 Firefly Software Solutions Inc.
# Licensed under the Apache License, Version 2.0

"""
Pydantic models for decoded ``__consumer_offsets`` records.

Provides immutable, serializable data models for both record types stored in
the topic, plus the configuration of the stream operators.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

_EPOCH = datetime(1970, 1, 1)

# Sentinel for version-gated timestamps absent from the payload.
NO_TIMESTAMP: int = -1


def millis_to_datetime(millis: int) -> datetime | None:
    """
    Convert Unix epoch milliseconds to a naive datetime.

    No timezone is attached. Returns None for the ``-1`` sentinel and for
    values outside the range ``datetime`` can represent.
    """
    if millis == NO_TIMESTAMP:
        return None
    try:
        return _EPOCH + timedelta(milliseconds=millis)
    except OverflowError:
        return None


class RecordType(str, Enum):
    """Record types stored in __consumer_offsets."""
    OFFSET_COMMIT = "offset_commit"
    GROUP_METADATA = "group_metadata"


_RECORD_CONFIG = ConfigDict(frozen=True, ser_json_bytes="base64", val_json_bytes="base64")


# ============================================================================
# Consumer Protocol Models
# ============================================================================


class TopicPartitions(BaseModel):
    """A topic and a list of its partitions."""

    model_config = _RECORD_CONFIG

    topic: str = ""
    partitions: tuple[int, ...] = ()


class Subscription(BaseModel):
    """
    Subscription state of a group member (ConsumerProtocolSubscription).

    Versioned independently of the record that embeds it.

    Attributes:
        version: Subscription schema version (0..3).
        subscribed_topics: Topics the member subscribed to.
        user_data: Opaque bytes set by the partition assignor.
        owned_topic_partitions: Partitions the member owned when it
            (re)joined the group. Version 1 and later.
        generation_id: Group generation of the owned partitions, -1 before
            version 2.
        rack_id: Rack of the member's client. Version 3 and later.
    """

    model_config = _RECORD_CONFIG

    version: int = 0
    subscribed_topics: tuple[str, ...] = ()
    user_data: bytes = b""
    owned_topic_partitions: tuple[TopicPartitions, ...] = ()
    generation_id: int = -1
    rack_id: str = ""


class Assignment(BaseModel):
    """Partitions assigned to a group member (ConsumerProtocolAssignment)."""

    model_config = _RECORD_CONFIG

    version: int = 0
    assigned_topic_partitions: tuple[TopicPartitions, ...] = ()
    user_data: bytes = b""


class Member(BaseModel):
    """
    A member of a consumer group.

    Attributes:
        id: Member id assigned by the group coordinator.
        group_instance_id: Static membership id. Schema version 3 and later.
        client_id: Client id of the member's consumer.
        client_host: Host the member connected from.
        rebalance_timeout: Rebalance timeout in milliseconds, 0 before
            schema version 1.
        session_timeout: Session timeout in milliseconds.
        subscription: What the member subscribed to.
        assignment: What the member was assigned.
    """

    model_config = _RECORD_CONFIG

    id: str = ""
    group_instance_id: str = ""
    client_id: str = ""
    client_host: str = ""
    rebalance_timeout: int = 0
    session_timeout: int = 0
    subscription: Subscription = Field(default_factory=Subscription)
    assignment: Assignment = Field(default_factory=Assignment)


# ============================================================================
# Record Models
# ============================================================================


class CommitRecord(BaseModel):
    """
    Offset a consumer group committed for a partition of a topic.

    ``message_version``, ``group``, ``topic`` and ``partition`` come from the
    record key. All other fields come from the payload and hold zero values
    when ``is_tombstone`` is set.
    """

    model_config = _RECORD_CONFIG

    record_type: Literal["offset_commit"] = "offset_commit"

    message_version: int
    group: str
    topic: str
    partition: int
    is_tombstone: bool = True

    schema_version: int = 0
    offset: int = 0
    leader_epoch: int = 0
    metadata: str = ""
    commit_timestamp: int = 0
    expire_timestamp: int = 0

    @property
    def commit_datetime(self) -> datetime | None:
        """Commit timestamp as a naive datetime (None for tombstones)."""
        if self.is_tombstone:
            return None
        return millis_to_datetime(self.commit_timestamp)

    @property
    def expire_datetime(self) -> datetime | None:
        """Expire timestamp as a naive datetime, if the payload carried one."""
        if self.is_tombstone:
            return None
        return millis_to_datetime(self.expire_timestamp)


class MembershipRecord(BaseModel):
    """
    Membership snapshot of a consumer group.

    ``message_version`` and ``group`` come from the record key. All other
    fields come from the payload and hold zero values when ``is_tombstone``
    is set.
    """

    model_config = _RECORD_CONFIG

    record_type: Literal["group_metadata"] = "group_metadata"

    message_version: int
    group: str
    is_tombstone: bool = True

    schema_version: int = 0
    protocol_type: str = ""
    generation: int = 0
    protocol: str = ""
    leader: str = ""
    current_state_timestamp: int = 0
    members: tuple[Member, ...] = ()

    @property
    def current_state_datetime(self) -> datetime | None:
        """Current state timestamp as a naive datetime, if the payload carried one."""
        if self.is_tombstone:
            return None
        return millis_to_datetime(self.current_state_timestamp)

    @property
    def member_ids(self) -> list[str]:
        """Ids of the members, in record order."""
        return [m.id for m in self.members]

    @property
    def subscribed_topics(self) -> list[str]:
        """Sorted union of the topics every member subscribed to."""
        return sorted({t for m in self.members for t in m.subscription.subscribed_topics})

    @property
    def assigned_partitions(self) -> dict[str, list[int]]:
        """Partitions assigned across all members, grouped by topic."""
        assigned: dict[str, set[int]] = {}
        for m in self.members:
            for tp in m.assignment.assigned_topic_partitions:
                assigned.setdefault(tp.topic, set()).update(tp.partitions)
        return {topic: sorted(parts) for topic, parts in sorted(assigned.items())}


DecodedRecord = Annotated[
    Union[CommitRecord, MembershipRecord],
    Field(discriminator="record_type"),
]

_DECODED_RECORD_ADAPTER: TypeAdapter[Any] = TypeAdapter(DecodedRecord)


def load_record(data: dict[str, Any]) -> CommitRecord | MembershipRecord:
    """Rebuild a decoded record from the output of ``model_dump()``."""
    return _DECODED_RECORD_ADAPTER.validate_python(data)


def load_record_json(data: str | bytes) -> CommitRecord | MembershipRecord:
    """Rebuild a decoded record from the output of ``model_dump_json()``."""
    return _DECODED_RECORD_ADAPTER.validate_json(data)


# ============================================================================
# Configuration Models
# ============================================================================


class DecodeStreamConfig(BaseModel):
    """Configuration for the stream decoding operators."""

    model_config = ConfigDict(validate_assignment=True)

    skip_errors: bool = Field(
        default=False,
        description="Drop undecodable records instead of terminating the stream",
    )
    skip_tombstones: bool = False
    record_types: frozenset[RecordType] = Field(
        default=frozenset(RecordType),
        description="Record types to emit",
    )
