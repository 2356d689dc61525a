import json
from dataclasses import dataclass
from typing import Any
from urllib.parse import unquote_plus


class EnvelopeError(Exception):
    """Raised when a queue message body is not a storage notification."""


@dataclass(frozen=True)
class QueueMessage:
    """One delivery received from the queue."""

    message_id: str
    receipt_handle: str
    body: str
    receive_count: int = 1


@dataclass(frozen=True)
class ObjectRef:
    """Location of an object named in a storage notification."""

    bucket: str
    key: str
    size_bytes: int | None = None
    event_name: str = ""


def parse_storage_events(body: str) -> list[ObjectRef]:
    """Decode an S3 event notification delivered through SQS.

    Object keys arrive URL-encoded ("+" for spaces) and are decoded here.
    The "s3:TestEvent" sent when a notification is configured yields no refs.

    Raises:
        EnvelopeError: if the body is not JSON or a record is malformed.
    """
    try:
        payload: Any = json.loads(body)
    except json.JSONDecodeError as exc:
        raise EnvelopeError(f"Message body is not JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise EnvelopeError("Message body must be a JSON object")
    if payload.get("Event") == "s3:TestEvent":
        return []

    records = payload.get("Records")
    if not isinstance(records, list):
        raise EnvelopeError("Message body has no 'Records' list")
    return [_parse_record(record) for record in records]


def _parse_record(record: Any) -> ObjectRef:
    try:
        s3 = record["s3"]
        bucket = s3["bucket"]["name"]
        key = unquote_plus(s3["object"]["key"])
        size = s3["object"].get("size")
        size_bytes = int(size) if size is not None else None
        event_name = record.get("eventName", "")
    except KeyError as exc:
        raise EnvelopeError(f"Malformed storage event record: missing {exc}") from exc
    except (TypeError, ValueError, AttributeError) as exc:
        raise EnvelopeError(f"Malformed storage event record: {exc}") from exc

    return ObjectRef(bucket=bucket, key=key, size_bytes=size_bytes, event_name=event_name)
