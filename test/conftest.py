"""
Shared fixtures for the duration worker tests.
"""

import json
import logging
from typing import List, Optional

import pytest

from media_duration.application.use_cases.handle_job import JobHandler
from media_duration.application.use_cases.resolve_duration import DurationResolver

logging.basicConfig(
    level=logging.DEBUG, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


def header_output(format_name: Optional[str], duration) -> str:
    """Build ffprobe header-mode JSON the way ffprobe prints it."""
    fmt = {}
    if format_name is not None:
        fmt["format_name"] = format_name
    if duration is not None:
        fmt["duration"] = duration
    return json.dumps({"programs": [], "streams": [], "format": fmt})


def packets_output(*pts_times) -> str:
    """Build ffprobe packets-mode JSON for the given pts_time values."""
    return json.dumps({"packets": [{"pts_time": t} for t in pts_times]})


class FakeMediaProbe:
    """Stand-in for ffprobe that records every call."""

    def __init__(self, header: Optional[str] = None, packets: Optional[str] = None):
        self.header = header
        self.packets = packets
        self.calls: List[tuple] = []

    async def probe_header(self, input_path: str) -> Optional[str]:
        self.calls.append(("header", input_path))
        return self.header

    async def probe_packets(self, input_path: str) -> Optional[str]:
        self.calls.append(("packets", input_path))
        return self.packets

    @property
    def modes(self) -> List[str]:
        return [mode for mode, _ in self.calls]


class RecordingJob:
    """Job that records the acknowledgements sent for it."""

    def __init__(self, body):
        self._body = body
        self.successes: List[bytes] = []
        self.failures: List[str] = []

    @property
    def body(self) -> bytes:
        return self._body

    def send_success(self, payload: bytes) -> None:
        self.successes.append(payload)

    def send_fail(self, message: str) -> None:
        self.failures.append(message)

    @property
    def ack_count(self) -> int:
        return len(self.successes) + len(self.failures)


def job_body(filename) -> bytes:
    return json.dumps({"filename": str(filename)}).encode("utf-8")


@pytest.fixture
def fake_probe() -> FakeMediaProbe:
    return FakeMediaProbe()


@pytest.fixture
def handler(fake_probe) -> JobHandler:
    return JobHandler(DurationResolver(fake_probe))


@pytest.fixture
def media_file(tmp_path):
    """A readable regular file; content is irrelevant because ffprobe is faked."""
    path = tmp_path / "clip.m4a"
    path.write_bytes(b"\x00" * 16)
    return path
