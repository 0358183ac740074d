#!/usr/bin/env python3
"""
02_reactive_decoding.py - Decoding records as a reactive stream

This example decodes a batch of raw __consumer_offsets records with the
RxPY operators, without a running broker.

What this example demonstrates:
- from_pairs() and decode_records() in a pipe
- DecodeStreamConfig to skip tombstones and undecodable records
- Computing the latest committed offset per group and partition
- Dumping decoded records as JSON

Prerequisites:
    - pyconsumeroffsets installed

Expected Output:
    Latest Committed Offsets
    --------------------------------------------------
      audit      payments/3 -> 42
      billing    invoices/0 -> 120
      billing    invoices/1 -> 7
    ...

Run with:
    python 02_reactive_decoding.py
"""

import struct

from reactivex import operators as ops

from pyconsumeroffsets import (
    CommitRecord,
    DecodeStreamConfig,
    RecordType,
    decode_records,
    from_pairs,
)


def _string(value):
    data = value.encode("utf-8")
    return struct.pack(">h", len(data)) + data


def commit(group, topic, partition, offset, timestamp):
    """Build a raw offset commit record (message v1, schema 3)"""
    key = struct.pack(">h", 1) + _string(group) + _string(topic) + struct.pack(">i", partition)
    value = (
        struct.pack(">hqi", 3, offset, 0)
        + _string("")
        + struct.pack(">q", timestamp)
    )
    return key, value


def delete(group, topic, partition):
    """Build a tombstone for an offset commit"""
    key, _ = commit(group, topic, partition, 0, 0)
    return key, None


RAW_RECORDS = [
    commit("billing", "invoices", 0, 100, 1700000000000),
    commit("billing", "invoices", 1, 7, 1700000000500),
    commit("billing", "invoices", 0, 120, 1700000001000),
    delete("reporting", "invoices", 0),
    (struct.pack(">h", 9) + _string("future"), b""),
    commit("audit", "payments", 3, 42, 1700000002000),
]


def latest_offsets():
    """Track the latest committed offset per group and partition"""
    print("Latest Committed Offsets")
    print("-" * 50)

    config = DecodeStreamConfig(
        skip_errors=True,
        skip_tombstones=True,
        record_types={RecordType.OFFSET_COMMIT},
    )

    latest = {}

    def remember(record: CommitRecord):
        latest[(record.group, record.topic, record.partition)] = record.offset

    from_pairs(RAW_RECORDS).pipe(
        decode_records(config),
    ).subscribe(on_next=remember)

    for (group, topic, partition), offset in sorted(latest.items()):
        print(f"  {group:<10} {topic}/{partition} -> {offset}")


def json_dump():
    """Dump decoded records as JSON lines"""
    print("\nDecoded Records as JSON")
    print("-" * 50)

    from_pairs(RAW_RECORDS[:2]).pipe(
        decode_records(),
        ops.map(lambda record: record.model_dump_json()),
    ).subscribe(on_next=print)


def main():
    latest_offsets()
    json_dump()
    print("\n✓ Done!")


if __name__ == "__main__":
    main()
