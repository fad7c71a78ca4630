"""Converters for the raw field values the portal puts in its JSON payloads."""

from __future__ import annotations

import base64
import binascii
from datetime import datetime
from typing import Any, Optional

DATE_TIME_FORMAT = "%Y-%m-%d %H:%M"
DATE_TIME_SECONDS_FORMAT = "%Y-%m-%d %H:%M:%S"


def _require_str(value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError(f"expected a string, got {value!r}")
    return value


def parse_date_time(value: str) -> datetime:
    return datetime.strptime(_require_str(value), DATE_TIME_FORMAT)


def parse_date_time_seconds(value: str) -> datetime:
    return datetime.strptime(_require_str(value), DATE_TIME_SECONDS_FORMAT)


def optional_date_time(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    return parse_date_time(value)


def optional_date_time_seconds(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    return parse_date_time_seconds(value)


def yes_to_bool(value: Any) -> bool:
    """The read flag is spelled out as "是" (yes) / "否" (no)."""

    return value == "是"


def one_to_bool(value: Any) -> bool:
    return value == "1"


def int_to_bool(value: Any) -> bool:
    if value is None:
        raise ValueError("expected an integer flag, got None")
    return int(value) != 0


def decode_base64(value: Optional[str]) -> str:
    """Decode a base64 encoded UTF-8 string; a missing value decodes to ``""``."""

    if value is None:
        return ""
    try:
        return base64.b64decode(_require_str(value), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as exc:
        raise ValueError(f"invalid base64 content: {exc}") from exc


def nonempty(value: Optional[str]) -> Optional[str]:
    return value or None
