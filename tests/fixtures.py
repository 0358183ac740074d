# Copyright (c) 2026 Firefly Software Solutions Inc.
# Licensed under the Apache License, Version 2.0

"""Sample __consumer_offsets records with their expected decoded form."""

from __future__ import annotations

from pyconsumeroffsets import (
    Assignment,
    CommitRecord,
    Member,
    MembershipRecord,
    Subscription,
    TopicPartitions,
)

from . import wire

# =============================================================================
# Offset Commits
# =============================================================================

OFFSET_COMMITS: dict[str, CommitRecord] = {
    "01-schema-0": CommitRecord(
        message_version=1,
        group="console-consumer-51423",
        topic="orders",
        partition=3,
        is_tombstone=False,
        schema_version=0,
        offset=1024,
        leader_epoch=-1,
        metadata="",
        commit_timestamp=1689172800000,
        expire_timestamp=-1,
    ),
    "02-schema-1": CommitRecord(
        message_version=1,
        group="billing",
        topic="invoices",
        partition=0,
        is_tombstone=False,
        schema_version=1,
        offset=99,
        leader_epoch=-1,
        metadata="manual",
        commit_timestamp=1689172800000,
        expire_timestamp=1689259200000,
    ),
    "03-schema-2": CommitRecord(
        message_version=1,
        group="billing",
        topic="payments",
        partition=11,
        is_tombstone=False,
        schema_version=2,
        offset=0,
        leader_epoch=-1,
        metadata="",
        commit_timestamp=1700000000000,
        expire_timestamp=-1,
    ),
    "04-schema-3": CommitRecord(
        message_version=1,
        group="kafka-lag-exporter",
        topic="__transaction_state",
        partition=42,
        is_tombstone=False,
        schema_version=3,
        offset=9_007_199_254_740_993,
        leader_epoch=7,
        metadata="checkpoint",
        commit_timestamp=1700000000123,
        expire_timestamp=-1,
    ),
    "05-message-v0": CommitRecord(
        message_version=0,
        group="gruppe-üß",
        topic="訂單",
        partition=1,
        is_tombstone=False,
        schema_version=3,
        offset=-1,
        leader_epoch=0,
        metadata="{\"source\": \"connect\"}",
        commit_timestamp=0,
        expire_timestamp=-1,
    ),
}


# =============================================================================
# Group Metadata
# =============================================================================


def _member(
    n: int,
    *,
    schema_version: int,
    subscription_version: int,
    assignment_version: int,
) -> Member:
    owned: tuple[TopicPartitions, ...] = ()
    if subscription_version >= 1:
        owned = (
            TopicPartitions(topic="orders", partitions=(n, n + 3)),
            TopicPartitions(topic="payments", partitions=(n,)),
        )
    return Member(
        id=f"consumer-{n}-6f1c2a3e-9c71-4a5e-8a0b-{n:012d}",
        group_instance_id=f"instance-{n}" if schema_version >= 3 else "",
        client_id=f"consumer-{n}",
        client_host=f"/10.0.0.{n}",
        rebalance_timeout=300000 if schema_version >= 1 else 0,
        session_timeout=45000,
        subscription=Subscription(
            version=subscription_version,
            subscribed_topics=("orders", "payments"),
            user_data=b"" if n % 2 else bytes([0, 1, 2, n]),
            owned_topic_partitions=owned,
            generation_id=5 if subscription_version >= 2 else -1,
            rack_id=f"rack-{n}" if subscription_version >= 3 else "",
        ),
        assignment=Assignment(
            version=assignment_version,
            assigned_topic_partitions=(
                TopicPartitions(topic="orders", partitions=(n, n + 3)),
                TopicPartitions(topic="payments", partitions=(n,)),
            ),
            user_data=b"",
        ),
    )


def _members(count: int, **versions: int) -> tuple[Member, ...]:
    return tuple(_member(n, **versions) for n in range(count))


GROUP_METADATA: dict[str, MembershipRecord] = {
    "01-schema-0": MembershipRecord(
        message_version=2,
        group="console-consumer-51423",
        is_tombstone=False,
        schema_version=0,
        protocol_type="consumer",
        generation=1,
        protocol="range",
        leader="consumer-0-6f1c2a3e-9c71-4a5e-8a0b-000000000000",
        current_state_timestamp=-1,
        members=_members(1, schema_version=0, subscription_version=0, assignment_version=0),
    ),
    "02-schema-1": MembershipRecord(
        message_version=2,
        group="billing",
        is_tombstone=False,
        schema_version=1,
        protocol_type="consumer",
        generation=4,
        protocol="roundrobin",
        leader="consumer-1-6f1c2a3e-9c71-4a5e-8a0b-000000000001",
        current_state_timestamp=-1,
        members=_members(2, schema_version=1, subscription_version=1, assignment_version=1),
    ),
    "03-schema-2": MembershipRecord(
        message_version=2,
        group="billing",
        is_tombstone=False,
        schema_version=2,
        protocol_type="consumer",
        generation=5,
        protocol="cooperative-sticky",
        leader="consumer-0-6f1c2a3e-9c71-4a5e-8a0b-000000000000",
        current_state_timestamp=1700000000000,
        members=_members(3, schema_version=2, subscription_version=2, assignment_version=2),
    ),
    "04-schema-3": MembershipRecord(
        message_version=2,
        group="kafka-lag-exporter",
        is_tombstone=False,
        schema_version=3,
        protocol_type="consumer",
        generation=12,
        protocol="cooperative-sticky",
        leader="consumer-2-6f1c2a3e-9c71-4a5e-8a0b-000000000002",
        current_state_timestamp=1700000000123,
        members=_members(3, schema_version=3, subscription_version=3, assignment_version=3),
    ),
    "05-empty-group": MembershipRecord(
        message_version=2,
        group="connect-cluster",
        is_tombstone=False,
        schema_version=3,
        protocol_type="connect",
        generation=0,
        protocol="",
        leader="",
        current_state_timestamp=1689172800000,
        members=(),
    ),
}


def commit_pair(name: str) -> tuple[bytes, bytes]:
    record = OFFSET_COMMITS[name]
    return wire.commit_key(record), wire.commit_payload(record)


def membership_pair(name: str) -> tuple[bytes, bytes]:
    record = GROUP_METADATA[name]
    return wire.membership_key(record), wire.membership_payload(record)


# Literal fixtures, written out byte by byte.

# Message v1, group "g", topic "t", partition 0.
# Schema 3, offset 42, leader epoch 5, metadata "", commit 1700000000000.
COMMIT_KEY_HEX = "0001 0001 67 0001 74 00000000"
COMMIT_PAYLOAD_HEX = "0003 000000000000002a 00000005 0000 0000018bcfe56800"

# Message v2, group "g". Schema 0, protocol type "consumer", generation 1,
# protocol "range", leader "m", one member "m" (client "c" on "/h", session
# timeout 10000) subscribed to "t" and assigned partition 0 of "t".
MEMBERSHIP_KEY_HEX = "0002 0001 67"
MEMBERSHIP_PAYLOAD_HEX = (
    "0000"
    " 0008 636f6e73756d6572"
    " 00000001"
    " 0005 72616e6765"
    " 0001 6d"
    " 00000001"
    " 0001 6d"
    " 0001 63"
    " 0002 2f68"
    " 00002710"
    " 0000000d 0000 00000001 0001 74 00000000"
    " 00000015 0000 00000001 0001 74 00000001 00000000 00000000"
)
