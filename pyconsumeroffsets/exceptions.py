# Copyright (c) 2026 Firefly Software Solutions Inc.
# Licensed under the Apache License, Version 2.0

"""
Exceptions raised while decoding ``__consumer_offsets`` records.

All exceptions inherit from ConsumerOffsetsError, making it easy to catch every
decoding failure with a single except clause:

    try:
        record = decode_record(key, payload)
    except ConsumerOffsetsError as e:
        print(f"Cannot decode record: {e}")

The set of failures is closed. Every exception carries a ``kind`` from
ErrorKind, and two intermediate bases separate the two families callers
usually want to treat differently:

    try:
        record = decode_record(key, payload)
    except UnsupportedVersionError as e:
        alert(f"Written by a newer broker: {e.kind}")
    except CorruptRecordError as e:
        skip(f"Corrupt or truncated record: {e}")
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Closed set of decode failure kinds."""

    MISSING_KEY = "missing-key"
    INSUFFICIENT_DATA = "insufficient-data"
    MALFORMED_TEXT = "malformed-text"
    UNSUPPORTED_MESSAGE_VERSION = "unsupported-message-version"
    UNSUPPORTED_OFFSET_COMMIT_SCHEMA = "unsupported-offset-commit-schema"
    UNSUPPORTED_GROUP_METADATA_SCHEMA = "unsupported-group-metadata-schema"
    UNSUPPORTED_SUBSCRIPTION_VERSION = "unsupported-consumer-protocol-subscription-version"
    UNSUPPORTED_ASSIGNMENT_VERSION = "unsupported-consumer-protocol-assignment-version"
    UNABLE_TO_PARSE_FOR_VERSION = "unable-to-parse-for-version"


class ConsumerOffsetsError(Exception):
    """
    Base exception for all decoding errors.

    All decoding exceptions inherit from this class, allowing you to catch
    all of them with a single except clause.
    """

    kind: ErrorKind

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        self.hint = hint
        if hint:
            message = f"{message}\n\n  Hint: {hint}"
        super().__init__(message)


class MissingKeyError(ConsumerOffsetsError):
    """
    Raised when a record has no key.

    The message version lives in the first two bytes of the key: without it
    the record type cannot be determined.
    """

    kind = ErrorKind.MISSING_KEY

    def __init__(self) -> None:
        super().__init__(
            "Cannot decode record without its key: unable to determine message version",
            hint="Pass the record key exactly as read from __consumer_offsets",
        )


class CorruptRecordError(ConsumerOffsetsError):
    """Base exception for malformed or truncated byte streams."""


class InsufficientDataError(CorruptRecordError):
    """
    Raised when the cursor runs out of bytes in the middle of a read.

    This typically means:
    - The record was truncated
    - A length prefix is negative or larger than the remaining input
    - Key and payload were swapped
    """

    kind = ErrorKind.INSUFFICIENT_DATA

    def __init__(self, needed: int, remaining: int, position: int) -> None:
        self.needed = needed
        self.remaining = remaining
        self.position = position
        super().__init__(
            f"Insufficient data at position {position}: "
            f"needed {needed} bytes, {remaining} remaining"
        )


class MalformedTextError(CorruptRecordError):
    """Raised when a string field does not hold valid UTF-8."""

    kind = ErrorKind.MALFORMED_TEXT

    def __init__(self, position: int, reason: str) -> None:
        self.position = position
        super().__init__(f"Malformed UTF-8 string at position {position}: {reason}")


class UnsupportedVersionError(ConsumerOffsetsError):
    """
    Base exception for versions this decoder does not understand.

    The bytes may well be valid: they were produced by a schema generation
    that is not (yet) supported.
    """

    def __init__(self, message: str, version: int) -> None:
        self.version = version
        super().__init__(
            message,
            hint="The record may have been written by a newer Kafka version",
        )


class UnsupportedMessageVersionError(UnsupportedVersionError):
    """Raised when the key's message version is not 0, 1 or 2."""

    kind = ErrorKind.UNSUPPORTED_MESSAGE_VERSION

    def __init__(self, version: int) -> None:
        super().__init__(f"Unsupported message version: {version}", version)


class UnsupportedOffsetCommitSchemaError(UnsupportedVersionError):
    """Raised when an offset commit payload declares a schema outside 0..3."""

    kind = ErrorKind.UNSUPPORTED_OFFSET_COMMIT_SCHEMA

    def __init__(self, version: int) -> None:
        super().__init__(f"Unsupported schema version for offset commit: {version}", version)


class UnsupportedGroupMetadataSchemaError(UnsupportedVersionError):
    """Raised when a group metadata payload declares a schema outside 0..3."""

    kind = ErrorKind.UNSUPPORTED_GROUP_METADATA_SCHEMA

    def __init__(self, version: int) -> None:
        super().__init__(f"Unsupported schema version for group metadata: {version}", version)


class UnsupportedSubscriptionVersionError(UnsupportedVersionError):
    """Raised when a member's subscription blob has a version outside 0..3."""

    kind = ErrorKind.UNSUPPORTED_SUBSCRIPTION_VERSION

    def __init__(self, version: int) -> None:
        super().__init__(
            f"Unsupported consumer protocol subscription version: {version}", version
        )


class UnsupportedAssignmentVersionError(UnsupportedVersionError):
    """Raised when a member's assignment blob has a version outside 0..3."""

    kind = ErrorKind.UNSUPPORTED_ASSIGNMENT_VERSION

    def __init__(self, version: int) -> None:
        super().__init__(
            f"Unsupported consumer protocol assignment version: {version}", version
        )


class UnableToParseForVersionError(UnsupportedVersionError):
    """
    Raised when a nested structure is asked to parse at an unknown version.

    The nested structure inherits the version of its parent; its layout past
    version 3 is unknown.
    """

    kind = ErrorKind.UNABLE_TO_PARSE_FOR_VERSION

    def __init__(self, structure: str, version: int, parent: str) -> None:
        self.structure = structure
        self.parent = parent
        super().__init__(
            f"Unable to parse {structure} for version {version} of {parent}", version
        )
