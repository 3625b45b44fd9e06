from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Collection, Optional, Tuple, Union


class FailureKind(str, Enum):
    MALFORMED_JOB = "MALFORMED_JOB"
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    FILE_UNREADABLE = "FILE_UNREADABLE"
    PROBE_UNAVAILABLE = "PROBE_UNAVAILABLE"
    PACKET_SCAN_FAILED = "PACKET_SCAN_FAILED"

    @property
    def message(self) -> str:
        """Default human-readable message sent back for this failure."""
        return _FAILURE_MESSAGES[self]


_FAILURE_MESSAGES = {
    FailureKind.MALFORMED_JOB: "Job was not formatted properly.",
    FailureKind.FILE_NOT_FOUND: "Media file was not found.",
    FailureKind.FILE_UNREADABLE: "Media file could not be opened.",
    FailureKind.PROBE_UNAVAILABLE: "Media file could not be probed.",
    FailureKind.PACKET_SCAN_FAILED: "Media packets could not be scanned.",
}


@dataclass(frozen=True, slots=True)
class ProbeHeaderResult:
    """Container-level metadata reported by a header probe.

    format_names keeps the demuxer aliases in the order ffprobe lists them,
    e.g. ("mov", "mp4", "m4a", "3gp", "3g2", "mj2").
    """

    format_names: Tuple[str, ...]
    duration_seconds: float

    def has_format(self, names: Collection[str]) -> bool:
        return any(name in names for name in self.format_names)


@dataclass(frozen=True, slots=True)
class ProbePacketResult:
    last_packet_timestamp: float


@dataclass(frozen=True, slots=True)
class DurationSuccess:
    duration_seconds: int

    @property
    def success(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class DurationFailure:
    kind: FailureKind
    message: str

    @property
    def success(self) -> bool:
        return False

    @classmethod
    def of(cls, kind: FailureKind) -> "DurationFailure":
        return cls(kind=kind, message=kind.message)


Resolution = Union[DurationSuccess, DurationFailure]


@dataclass(frozen=True, slots=True)
class Acknowledgement:
    """Terminal outcome emitted for one job.

    - success: True when send_success was called, False for send_fail
    - payload: JSON bytes delivered on success
    - message: human-readable failure message
    - kind: failure category, None on success
    """

    success: bool
    payload: Optional[bytes] = None
    message: Optional[str] = None
    kind: Optional[FailureKind] = None
