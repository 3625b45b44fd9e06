import shutil

import pytest

import media_duration.infrastructure.adapters.media_probe_ffprobe as mp
from media_duration.core.exceptions import ConfigurationError
from media_duration.infrastructure.adapters import (
    FFprobeMediaProbe,
    resolve_probe_binary,
)
from media_duration.utils.subprocess_utils import SubprocessError


class DummyResult:
    def __init__(self, stdout="", stderr="", returncode=0):
        self.stdout = stdout
        self.stderr = stderr
        self.returncode = returncode


@pytest.fixture
def probe():
    return FFprobeMediaProbe("/usr/bin/ffprobe", timeout=7.5, packet_offset=432000)


def test_header_command(probe):
    cmd = probe.header_command("/media/it's a song.mp3")
    assert cmd[0] == "/usr/bin/ffprobe"
    assert cmd[-1] == "/media/it's a song.mp3"
    assert "-show_packets" not in cmd
    assert cmd[cmd.index("-show_entries") + 1] == "format=format_name,duration"
    assert cmd[cmd.index("-print_format") + 1] == "json"
    assert cmd[cmd.index("-select_streams") + 1] == "a"


def test_packets_command_seeks_to_offset(probe):
    cmd = probe.packets_command("/media/a.mp3")
    assert cmd[cmd.index("-read_intervals") + 1] == "432000%"
    assert "-show_packets" in cmd
    assert cmd[cmd.index("-show_entries") + 1] == "packet=pts_time"
    assert cmd[cmd.index("-select_streams") + 1] == "a"


@pytest.mark.asyncio
async def test_probe_header_returns_stdout(probe, monkeypatch):
    seen = {}

    def fake_run(cmd, operation_name, custom_logger=None, timeout=None):
        seen["cmd"] = cmd
        seen["timeout"] = timeout
        return DummyResult(stdout='  {"format": {}}\n')

    monkeypatch.setattr(mp, "safe_subprocess_run", fake_run)

    out = await probe.probe_header("/media/a.m4a")
    assert out == '{"format": {}}'
    assert seen["timeout"] == 7.5
    assert seen["cmd"] == probe.header_command("/media/a.m4a")


@pytest.mark.asyncio
async def test_empty_output_is_no_signal(probe, monkeypatch):
    monkeypatch.setattr(
        mp, "safe_subprocess_run", lambda *a, **k: DummyResult(stdout="   ")
    )
    assert await probe.probe_packets("/media/a.mp3") is None


@pytest.mark.asyncio
@pytest.mark.parametrize("timed_out", [False, True])
async def test_subprocess_failure_is_no_signal(probe, monkeypatch, timed_out):
    def fake_run(cmd, *args, **kwargs):
        raise SubprocessError("ffprobe failed", cmd, 1, "err", timed_out=timed_out)

    monkeypatch.setattr(mp, "safe_subprocess_run", fake_run)

    assert await probe.probe_header("/media/a.mp3") is None
    assert await probe.probe_packets("/media/a.mp3") is None


def test_resolve_probe_binary_found(monkeypatch):
    monkeypatch.setattr(shutil, "which", lambda name: f"/opt/bin/{name}")
    assert resolve_probe_binary("ffprobe") == "/opt/bin/ffprobe"


def test_resolve_probe_binary_missing(monkeypatch):
    monkeypatch.setattr(shutil, "which", lambda name: None)
    with pytest.raises(ConfigurationError) as ei:
        resolve_probe_binary("ffprobe-missing")
    assert ei.value.config_key == "ffprobe_binary_path"
    assert "ffprobe-missing" in ei.value.message
