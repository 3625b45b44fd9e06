"""
Line-oriented duration worker.

Consumes one JSON job per line from a file or stdin and writes one
acknowledgement line per job:

    success\t{"duration": 125}
    failure\tMedia file was not found.

Usage:
    media-duration-worker [--input jobs.ndjson]
    media-duration-worker --filename /path/to/media.mp3
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import IO, Iterable, List, Optional

from media_duration.application.models import Acknowledgement
from media_duration.application.use_cases.handle_job import JobHandler
from media_duration.core.config import settings
from media_duration.core.exceptions import ConfigurationError
from media_duration.core.logging_config import configure_logging
from media_duration.presentation.api.v1.dependencies.jobs import build_job_handler

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "Unexpected error while calculating duration."


class LineJob:
    """Job read from one input line; the acknowledgement is written to `out`."""

    def __init__(self, body: bytes, out: IO[str]) -> None:
        self._body = body
        self._out = out
        self.acknowledged = False

    @property
    def body(self) -> bytes:
        return self._body

    def send_success(self, payload: bytes) -> None:
        self._write(f"success\t{payload.decode('utf-8')}")

    def send_fail(self, message: str) -> None:
        self._write(f"failure\t{message}")

    def _write(self, line: str) -> None:
        if self.acknowledged:
            raise RuntimeError("Job was already acknowledged")
        self.acknowledged = True
        self._out.write(line + "\n")
        self._out.flush()


class DurationWorker:
    """Feeds jobs to the handler one at a time."""

    def __init__(self, handler: JobHandler, out: IO[str]) -> None:
        self._handler = handler
        self._out = out

    async def process(self, body: bytes) -> Acknowledgement:
        job = LineJob(body, self._out)
        try:
            return await self._handler.handle(job)
        except Exception:
            logger.exception("Duration job crashed")
            if not job.acknowledged:
                job.send_fail(UNEXPECTED_ERROR_MESSAGE)
            return Acknowledgement(success=False, message=UNEXPECTED_ERROR_MESSAGE)

    async def run(self, lines: Iterable[bytes]) -> List[Acknowledgement]:
        """Process raw job lines; bodies are decoded by the handler, not here."""
        acks = []
        for line in lines:
            line = line.strip()
            if not line:
                continue
            acks.append(await self.process(line))
        return acks


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="media-duration-worker",
        description="Calculate media durations with ffprobe",
    )
    parser.add_argument(
        "--input",
        default=settings.worker_input,
        help="File with one JSON job per line, '-' for stdin (default: %(default)s)",
    )
    parser.add_argument(
        "--filename",
        help="Run a single job for this media file and exit",
    )
    parser.add_argument(
        "--ffprobe",
        default=settings.ffprobe_binary_path,
        help="ffprobe binary name or path (default: %(default)s)",
    )
    parser.add_argument("--log-level", default=settings.log_level)
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    cfg = settings.model_copy(
        update={"log_level": args.log_level, "ffprobe_binary_path": args.ffprobe}
    )
    configure_logging(cfg)

    try:
        handler = build_job_handler(app_settings=cfg)
    except ConfigurationError as e:
        logger.error("%s", e.message)
        return 2

    worker = DurationWorker(handler, sys.stdout)

    if args.filename:
        body = json.dumps({"filename": args.filename}).encode("utf-8")
        ack = asyncio.run(worker.process(body))
        return 0 if ack.success else 1

    if args.input == "-":
        asyncio.run(worker.run(sys.stdin.buffer))
    else:
        with open(args.input, "rb") as f:
            asyncio.run(worker.run(f))
    return 0


if __name__ == "__main__":
    sys.exit(main())
