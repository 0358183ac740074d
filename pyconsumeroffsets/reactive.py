# Copyright (c) 2026 Firefly Software Solutions Inc.
# Licensed under the Apache License, Version 2.0

"""
Reactive Streams support for decoding ``__consumer_offsets``.

Provides RxPY operators that turn a stream of raw ``(key, payload)`` pairs,
as delivered by any Kafka client, into a stream of decoded records.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, Callable

import reactivex as rx
from reactivex import Observable

from .decoder import decode_record
from .exceptions import ConsumerOffsetsError
from .models import CommitRecord, DecodeStreamConfig, MembershipRecord, RecordType
from .reader import BytesLike

logger = logging.getLogger(__name__)

RawRecord = tuple[BytesLike | None, BytesLike | None]
Record = CommitRecord | MembershipRecord


def decode_records(
    config: DecodeStreamConfig | None = None,
) -> Callable[[Observable[RawRecord]], Observable[Record]]:
    """
    Create an operator decoding ``(key, payload)`` pairs.

    Args:
        config: Stream options. Defaults decode every record and terminate
            the stream on the first decoding error.

    Returns:
        Operator function for use with pipe().

    Example:
        >>> from_pairs(pairs).pipe(
        ...     decode_records(DecodeStreamConfig(skip_tombstones=True)),
        ...     ops.filter(lambda r: isinstance(r, CommitRecord)),
        ... ).subscribe(on_next=print)
    """
    config = config or DecodeStreamConfig()

    def _decode_records(source: Observable[RawRecord]) -> Observable[Record]:
        def subscribe(observer: Any, scheduler: Any = None) -> Any:
            def on_next(raw: RawRecord) -> None:
                key, payload = raw
                try:
                    record = decode_record(key, payload)
                except ConsumerOffsetsError as e:
                    if not config.skip_errors:
                        observer.on_error(e)
                        return
                    logger.warning("Skipping undecodable record (%s): %s", e.kind.value, e)
                    return

                if config.skip_tombstones and record.is_tombstone:
                    return
                if RecordType(record.record_type) not in config.record_types:
                    return
                observer.on_next(record)

            return source.subscribe(
                on_next=on_next,
                on_error=observer.on_error,
                on_completed=observer.on_completed,
                scheduler=scheduler,
            )

        return rx.create(subscribe)

    return _decode_records


def from_pairs(pairs: Iterable[RawRecord]) -> Observable[RawRecord]:
    """
    Create an Observable from ``(key, payload)`` pairs.

    Args:
        pairs: Raw records, e.g. collected from a Kafka consumer poll.

    Returns:
        Observable stream of the pairs.
    """
    return rx.from_iterable(pairs)


def decode_pairs(
    pairs: Iterable[RawRecord],
    config: DecodeStreamConfig | None = None,
) -> Observable[Record]:
    """Shorthand for ``from_pairs(pairs).pipe(decode_records(config))``."""
    return from_pairs(pairs).pipe(decode_records(config))
