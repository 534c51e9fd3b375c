# ==============================================================================
# Log Entry Decoder
# ==============================================================================
"""
Decode Loki ``(timestamp, line)`` entries into PageViewEvent models.

Loki returns each stream's entries as ``[nanosecond_timestamp, log_line]``
string pairs. The log line is a JSON object written by the web tier, e.g.:

    {"path": "/blog", "session_id": "abc", "client_ip": "10.0.0.1",
     "referrer": "https://www.google.com/", "user_agent": "Mozilla/5.0"}

A bad entry never fails the batch: decode_streams() drops it with a warning
and keeps going.
"""

import json
from collections.abc import Iterable
from datetime import datetime, timedelta
from typing import Any

from pydantic import ValidationError

from loki_analytics.base.diagnostics import DiagnosticSink
from loki_analytics.core.models import EPOCH, PageViewEvent
from loki_analytics.core.query import NANOS_PER_MILLI

# Log payload keys copied onto the event unchanged
PASSTHROUGH_FIELDS = ("session_id", "user_id", "client_ip", "referrer", "user_agent")


class LogEntryDecodeError(ValueError):
    """A single log entry could not be turned into a PageViewEvent."""


class MalformedResponseError(ValueError):
    """The Loki response body does not have the expected shape."""


def _timestamp_from_nanos(timestamp: str) -> datetime:
    millis = int(timestamp) // NANOS_PER_MILLI
    return EPOCH + timedelta(milliseconds=millis)


def decode_log_entry(timestamp: str, log_line: str) -> PageViewEvent:
    """
    Decode one Loki entry into a PageViewEvent.

    Args:
        timestamp: Nanosecond Unix timestamp as a decimal string
        log_line: JSON object payload

    Returns:
        The decoded event

    Raises:
        LogEntryDecodeError: If the payload is not a JSON object, the
            timestamp is not a usable integer, or a field has the wrong type
    """
    if not isinstance(log_line, str):
        raise LogEntryDecodeError(f"Log line is not a string: {type(log_line).__name__}")

    try:
        record = json.loads(log_line)
    except (TypeError, ValueError) as e:
        raise LogEntryDecodeError(f"Invalid JSON payload: {e}") from e

    if not isinstance(record, dict):
        raise LogEntryDecodeError(f"Expected a JSON object, got {type(record).__name__}")

    try:
        event_time = _timestamp_from_nanos(timestamp)
    except (TypeError, ValueError, OverflowError) as e:
        raise LogEntryDecodeError(f"Invalid timestamp {timestamp!r}: {e}") from e

    fields: dict[str, Any] = {name: record.get(name) for name in PASSTHROUGH_FIELDS}
    try:
        return PageViewEvent(timestamp=event_time, path=record.get("path") or "/", **fields)
    except ValidationError as e:
        raise LogEntryDecodeError(f"Invalid field value: {e}") from e


def _iter_entries(streams: Iterable[Any]) -> Iterable[Any]:
    for stream in streams:
        if not isinstance(stream, dict) or not isinstance(stream.get("values"), list):
            raise MalformedResponseError("Stream is missing its 'values' list")
        yield from stream["values"]


def _split_entry(entry: Any) -> tuple[Any, Any]:
    if not isinstance(entry, (list, tuple)) or len(entry) < 2:
        raise LogEntryDecodeError(f"Entry is not a [timestamp, line] pair: {entry!r}")
    return entry[0], entry[1]


def decode_streams(streams: Iterable[Any], logger: DiagnosticSink) -> list[PageViewEvent]:
    """
    Flatten and decode every entry of every Loki stream.

    Entries that fail to decode, including entries that are not a
    ``[timestamp, line]`` pair, are dropped, each with one warning carrying
    the raw line and the failure detail.

    Args:
        streams: The ``data.result`` list of a Loki query_range response
        logger: Sink for per-entry warnings

    Returns:
        Decoded events in stream order

    Raises:
        MalformedResponseError: If a stream has no ``values`` list
    """
    events: list[PageViewEvent] = []
    for raw_entry in _iter_entries(streams):
        log_line = raw_entry
        try:
            timestamp, log_line = _split_entry(raw_entry)
            events.append(decode_log_entry(timestamp, log_line))
        except LogEntryDecodeError as e:
            logger.warning({"log_line": log_line, "error": str(e)}, "Failed to parse log line")
    return events


def extract_streams(body: Any) -> list[Any]:
    """
    Pull ``data.result`` out of a Loki query_range response body.

    A missing ``data`` or ``data.result`` (or a null one) is an empty result,
    not an error.

    Raises:
        MalformedResponseError: If the body or its ``data`` member is not an
            object, or ``data.result`` is not a list
    """
    if not isinstance(body, dict):
        raise MalformedResponseError(f"Response body is not an object: {type(body).__name__}")
    data = body.get("data")
    if data is None:
        return []
    if not isinstance(data, dict):
        raise MalformedResponseError("Response 'data' member is not an object")
    result = data.get("result")
    if result is None:
        return []
    if not isinstance(result, list):
        raise MalformedResponseError("Response 'data.result' member is not a list")
    return result
