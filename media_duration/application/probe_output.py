"""
Parsers for ffprobe JSON output.

Both extractors are total: malformed, truncated or incomplete output yields
None rather than an exception, so the resolver can map absence to a typed
failure.
"""

from __future__ import annotations

import json
import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional, Tuple

from media_duration.application.models import ProbeHeaderResult, ProbePacketResult


def _load_json_object(raw: Optional[str]) -> Optional[dict]:
    if not raw:
        return None
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, TypeError, ValueError):
        return None
    return data if isinstance(data, dict) else None


def _parse_seconds(value: Any) -> Optional[float]:
    """Parse a non-negative, finite number of seconds ("210.700000", 12.5)."""
    if isinstance(value, bool) or value is None:
        return None
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(seconds) or seconds < 0:
        return None
    return seconds


def split_format_names(format_name: str) -> Tuple[str, ...]:
    """Split a demuxer alias list such as "mov,mp4,m4a" into lowercase tokens.

    Example:
        >>> split_format_names("MOV, mp4,,m4a")
        ('mov', 'mp4', 'm4a')
    """
    tokens = []
    for part in format_name.split(","):
        token = part.strip().lower()
        if token and token not in tokens:
            tokens.append(token)
    return tuple(tokens)


def extract_header(raw: Optional[str]) -> Optional[ProbeHeaderResult]:
    """Read format names and file-level duration from the "format" section."""
    data = _load_json_object(raw)
    if data is None:
        return None
    fmt = data.get("format")
    if not isinstance(fmt, dict):
        return None

    format_name = fmt.get("format_name")
    if not isinstance(format_name, str):
        return None
    format_names = split_format_names(format_name)
    if not format_names:
        return None

    duration = _parse_seconds(fmt.get("duration"))
    if duration is None:
        return None

    return ProbeHeaderResult(format_names=format_names, duration_seconds=duration)


def extract_last_packet_timestamp(raw: Optional[str]) -> Optional[ProbePacketResult]:
    """Take the pts_time of the last packet, in the order ffprobe delivered them."""
    data = _load_json_object(raw)
    if data is None:
        return None
    packets = data.get("packets")
    if not isinstance(packets, list) or not packets:
        return None

    last = packets[-1]
    if not isinstance(last, dict):
        return None
    timestamp = _parse_seconds(last.get("pts_time"))
    if timestamp is None:
        return None
    return ProbePacketResult(last_packet_timestamp=timestamp)


def round_seconds(seconds: float) -> int:
    """Round half away from zero: 12345.5 -> 12346, 12345.49 -> 12345."""
    return int(Decimal(repr(seconds)).quantize(Decimal(1), rounding=ROUND_HALF_UP))
