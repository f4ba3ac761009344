from __future__ import annotations

import base64
import binascii
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from .exceptions import DecodeError

Clock = Callable[[], datetime]

SUPPORTED_ENCODINGS = ("hex", "base64")


def epoch_millis(clock: Optional[Clock] = None) -> int:
    now = clock() if clock is not None else datetime.now(timezone.utc)
    return int(now.timestamp() * 1000)


def resolve_label(explicit: Any, clock: Optional[Clock] = None) -> Any:
    if explicit is None or explicit == "":
        return epoch_millis(clock)

    return explicit


def payload_to_bytes(raw: Any, encoding: str = "hex") -> bytes:
    if isinstance(raw, (bytes, bytearray)):
        return bytes(raw)

    if not isinstance(raw, str):
        raise DecodeError(f"Payload must be a string, got {type(raw).__name__}.")

    text = raw.strip()
    if encoding == "hex":
        try:
            return bytes.fromhex(text)
        except ValueError as e:
            raise DecodeError(f"Invalid hex payload '{raw}': {e}") from e

    if encoding == "base64":
        try:
            return base64.b64decode(text, validate=True)
        except (binascii.Error, ValueError) as e:
            raise DecodeError(f"Invalid base64 payload '{raw}': {e}") from e

    raise DecodeError(f"Unsupported payload encoding '{encoding}' (allowed: {list(SUPPORTED_ENCODINGS)}).")
