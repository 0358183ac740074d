#!/usr/bin/env python3
"""
01_decode_consumer_offsets.py - Tail the __consumer_offsets topic

This example reads the internal topic where Kafka brokers store committed
offsets and consumer group membership, and prints each record decoded.

What this example demonstrates:
- Reading __consumer_offsets with a plain Kafka consumer
- decode_record() on raw (key, value) pairs
- Telling offset commits from group metadata
- Handling records written by a newer broker

Key Concepts:
- Tombstone: A record without value; the broker deleted the entry
- Message version: First two bytes of the key, selects the record type
- Schema version: First two bytes of the value, selects the field layout

Prerequisites:
    - Kafka broker running on localhost:9092
    - pyconsumeroffsets installed with examples: pip install "pyconsumeroffsets[examples]"

Expected Output:
    Reading __consumer_offsets from localhost:9092...
    [commit]   billing  invoices/0 @ 99  (2023-07-12 14:40:00)
    [group]    billing  generation 4, protocol roundrobin, 2 members
    [delete]   billing  invoices/0

Run with:
    python 01_decode_consumer_offsets.py [bootstrap.servers]
"""

import sys
import uuid

from confluent_kafka import Consumer

from pyconsumeroffsets import (
    CommitRecord,
    ConsumerOffsetsError,
    MembershipRecord,
    UnsupportedVersionError,
    decode_record,
)

TOPIC = "__consumer_offsets"


def print_record(record):
    """Print a one-line summary of a decoded record"""
    if isinstance(record, CommitRecord):
        if record.is_tombstone:
            print(f"[delete]   {record.group}  {record.topic}/{record.partition}")
        else:
            print(
                f"[commit]   {record.group}  {record.topic}/{record.partition} "
                f"@ {record.offset}  ({record.commit_datetime})"
            )
    elif isinstance(record, MembershipRecord):
        if record.is_tombstone:
            print(f"[delete]   {record.group}")
        else:
            print(
                f"[group]    {record.group}  generation {record.generation}, "
                f"protocol {record.protocol or '-'}, {len(record.members)} members"
            )
            for topic, partitions in record.assigned_partitions.items():
                print(f"             {topic}: {partitions}")


def main():
    bootstrap_servers = sys.argv[1] if len(sys.argv) > 1 else "localhost:9092"
    print(f"Reading {TOPIC} from {bootstrap_servers}...")

    consumer = Consumer({
        "bootstrap.servers": bootstrap_servers,
        "group.id": f"offsets-reader-{uuid.uuid4().hex[:8]}",
        "auto.offset.reset": "earliest",
        "enable.auto.commit": False,
        # Needed to read internal topics
        "exclude.internal.topics": False,
    })
    consumer.subscribe([TOPIC])

    try:
        while True:
            msg = consumer.poll(1.0)
            if msg is None:
                continue
            if msg.error():
                print(f"Consumer error: {msg.error()}")
                continue

            try:
                record = decode_record(msg.key(), msg.value())
            except UnsupportedVersionError as e:
                print(f"[skipped]  written by a newer broker: {e.kind.value} (version {e.version})")
                continue
            except ConsumerOffsetsError as e:
                print(f"[corrupt]  partition {msg.partition()} offset {msg.offset()}: {e}")
                continue

            print_record(record)
    except KeyboardInterrupt:
        print("\nStopped.")
    finally:
        consumer.close()


if __name__ == "__main__":
    main()
