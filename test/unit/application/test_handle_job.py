"""Job handler: payload/file validation, acknowledgement and the end-to-end scenarios."""

import json
import logging
import os

import pytest

from media_duration.application.models import FailureKind
from conftest import RecordingJob, header_output, job_body, packets_output


class TestPayloadValidation:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            b"",
            b"not json",
            b"\xff\xfe\x00",
            b"[]",
            b'"clip.mp3"',
            b"null",
            b"{}",
            b'{"file": "/media/a.mp3"}',
            b'{"filename": ""}',
            b'{"filename": "   "}',
            b'{"filename": 42}',
            b'{"filename": null}',
        ],
    )
    async def test_malformed_job(self, handler, fake_probe, body):
        job = RecordingJob(body)
        ack = await handler.handle(job)

        assert ack.success is False
        assert ack.kind is FailureKind.MALFORMED_JOB
        assert job.failures == ["Job was not formatted properly."]
        assert job.successes == []
        assert fake_probe.calls == []

    @pytest.mark.asyncio
    async def test_extra_keys_are_ignored(self, handler, fake_probe, media_file):
        fake_probe.header = header_output("flac", "3.2")
        body = json.dumps({"filename": str(media_file), "priority": 5}).encode()
        ack = await handler.handle(RecordingJob(body))
        assert ack.success is True


class TestFileValidation:
    @pytest.mark.asyncio
    async def test_missing_file(self, handler, fake_probe, tmp_path):
        job = RecordingJob(job_body(tmp_path / "missing.mp3"))
        ack = await handler.handle(job)

        assert ack.kind is FailureKind.FILE_NOT_FOUND
        assert job.failures == ["Media file was not found."]
        assert fake_probe.calls == []

    @pytest.mark.asyncio
    async def test_directory_is_unreadable(self, handler, fake_probe, tmp_path):
        job = RecordingJob(job_body(tmp_path))
        ack = await handler.handle(job)

        assert ack.kind is FailureKind.FILE_UNREADABLE
        assert job.failures == ["Media file could not be opened."]
        assert fake_probe.calls == []

    @pytest.mark.asyncio
    async def test_unreadable_regular_file(
        self, handler, fake_probe, media_file, monkeypatch
    ):
        monkeypatch.setattr(os, "access", lambda p, mode: False)
        job = RecordingJob(job_body(media_file))
        ack = await handler.handle(job)

        assert ack.kind is FailureKind.FILE_UNREADABLE
        assert fake_probe.calls == []

    @pytest.mark.asyncio
    async def test_trailing_space_is_part_of_the_path(
        self, handler, fake_probe, tmp_path
    ):
        path = tmp_path / "clip.m4a "
        path.write_bytes(b"\x00" * 16)
        fake_probe.header = header_output("mov,mp4,m4a,3gp,3g2,mj2", "7.5")
        job = RecordingJob(job_body(path))

        ack = await handler.handle(job)

        assert ack.success is True
        assert [json.loads(p) for p in job.successes] == [{"duration": 8}]
        assert fake_probe.calls == [("header", str(path))]

    @pytest.mark.asyncio
    async def test_spaced_name_does_not_fall_back_to_trimmed_sibling(
        self, handler, fake_probe, tmp_path
    ):
        (tmp_path / "clip.m4a").write_bytes(b"\x00" * 16)
        job = RecordingJob(job_body(tmp_path / "clip.m4a "))

        ack = await handler.handle(job)

        assert ack.kind is FailureKind.FILE_NOT_FOUND
        assert fake_probe.calls == []


class TestAcknowledgement:
    @pytest.mark.asyncio
    async def test_success_payload_and_done_log(
        self, handler, fake_probe, media_file, caplog
    ):
        fake_probe.header = header_output("ogg", "59.5")
        job = RecordingJob(job_body(media_file))

        with caplog.at_level(logging.INFO):
            ack = await handler.handle(job)

        assert ack.success is True
        assert json.loads(ack.payload) == {"duration": 60}
        assert job.successes == [ack.payload]
        assert job.failures == []
        assert any(r.getMessage().endswith("done") for r in caplog.records)
        assert not [r for r in caplog.records if r.levelno >= logging.ERROR]

    @pytest.mark.asyncio
    async def test_failure_is_logged_as_error(
        self, handler, fake_probe, media_file, caplog
    ):
        fake_probe.header = None
        job = RecordingJob(job_body(media_file))

        with caplog.at_level(logging.INFO):
            ack = await handler.handle(job)

        assert ack.kind is FailureKind.PROBE_UNAVAILABLE
        errors = [r.getMessage() for r in caplog.records if r.levelno == logging.ERROR]
        assert any("Media file could not be probed." in m for m in errors)
        assert not any(r.getMessage().endswith("done") for r in caplog.records)
        assert job.ack_count == 1

    @pytest.mark.asyncio
    async def test_packet_scan_failure_propagates(self, handler, fake_probe, media_file):
        fake_probe.header = header_output("mp3", "100.0")
        fake_probe.packets = packets_output()
        job = RecordingJob(job_body(media_file))
        ack = await handler.handle(job)

        assert ack.kind is FailureKind.PACKET_SCAN_FAILED
        assert job.failures == ["Media packets could not be scanned."]


class TestScenarios:
    @pytest.mark.asyncio
    async def test_scenario_a_m4a_trusts_header(self, handler, fake_probe, tmp_path):
        path = tmp_path / "clip.m4a"
        path.write_bytes(b"m4a")
        fake_probe.header = header_output("mp4,m4a,mov", "125.3")

        job = RecordingJob(job_body(path))
        await handler.handle(job)

        assert [json.loads(p) for p in job.successes] == [{"duration": 125}]
        assert fake_probe.modes == ["header"]

    @pytest.mark.asyncio
    async def test_scenario_b_mp3_scans_packets(self, handler, fake_probe, tmp_path):
        path = tmp_path / "song.mp3"
        path.write_bytes(b"ID3")
        fake_probe.header = header_output("mp3", "0.000000")
        fake_probe.packets = packets_output("210.674000", "210.700000")

        job = RecordingJob(job_body(path))
        await handler.handle(job)

        assert [json.loads(p) for p in job.successes] == [{"duration": 211}]
        assert fake_probe.calls == [("header", str(path)), ("packets", str(path))]

    @pytest.mark.asyncio
    async def test_scenario_c_missing_file(self, handler, fake_probe):
        job = RecordingJob(b'{"filename":"/missing.mp3"}')
        await handler.handle(job)

        assert job.failures == ["Media file was not found."]
        assert job.successes == []
        assert fake_probe.calls == []
