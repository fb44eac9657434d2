"""Serialization and line emission for output documents."""

from __future__ import annotations

import json
import sys
import threading
from typing import TYPE_CHECKING, BinaryIO

if TYPE_CHECKING:
    from webhook2stdout._types import JsonValue


def serialize(document: JsonValue, pretty: bool = False) -> bytes:
    """Encode a document as UTF-8 JSON with sorted keys.

    ``pretty`` uses a fixed two-space indent; otherwise the output is
    compact and single-line.
    """
    if pretty:
        text = json.dumps(document, sort_keys=True, indent=2, ensure_ascii=False, allow_nan=False)
    else:
        text = json.dumps(
            document, sort_keys=True, separators=(",", ":"), ensure_ascii=False, allow_nan=False
        )
    return text.encode("utf-8")


class LineEmitter:
    """Write newline-terminated records to a binary stream.

    One lock guards write + flush, so records from concurrent requests
    never interleave. Write errors propagate as OSError; nothing is retried.
    """

    def __init__(self, stream: BinaryIO | None = None) -> None:
        self._stream = stream if stream is not None else sys.stdout.buffer
        self._lock = threading.Lock()

    def emit(self, data: bytes) -> None:
        with self._lock:
            self._stream.write(data + b"\n")
            self._stream.flush()
