from __future__ import annotations

import asyncio
import logging
import shutil
from typing import List, Optional

from media_duration.application.interfaces.media_probe import IMediaProbe
from media_duration.core.exceptions import ConfigurationError
from media_duration.utils.subprocess_utils import SubprocessError, safe_subprocess_run

logger = logging.getLogger(__name__)


def resolve_probe_binary(binary_path: str = "ffprobe") -> str:
    """Resolve the ffprobe executable once at startup.

    Raises:
        ConfigurationError: If the binary cannot be found or is not executable
    """
    resolved = shutil.which(binary_path)
    if not resolved:
        raise ConfigurationError(
            f"FFprobe binary not found or not executable: {binary_path}",
            config_key="ffprobe_binary_path",
        )
    return resolved


class FFprobeMediaProbe(IMediaProbe):
    """Runs ffprobe in a subprocess, one process per call.

    Output is returned verbatim; parsing is left to the extractors. Any failure
    of the process (bad exit status, timeout, empty stdout) yields None.
    """

    def __init__(
        self, binary_path: str, *, timeout: float = 60.0, packet_offset: int = 432000
    ) -> None:
        self.binary_path = binary_path
        self.timeout = timeout
        self.packet_offset = packet_offset

    def header_command(self, input_path: str) -> List[str]:
        return [
            self.binary_path,
            "-v",
            "quiet",
            "-print_format",
            "json",
            "-select_streams",
            "a",
            "-show_entries",
            "format=format_name,duration",
            input_path,
        ]

    def packets_command(self, input_path: str) -> List[str]:
        # "<offset>%" reads from the offset to the end of the stream
        return [
            self.binary_path,
            "-v",
            "quiet",
            "-print_format",
            "json",
            "-read_intervals",
            f"{self.packet_offset}%",
            "-select_streams",
            "a",
            "-show_packets",
            "-show_entries",
            "packet=pts_time",
            input_path,
        ]

    async def probe_header(self, input_path: str) -> Optional[str]:
        return await asyncio.to_thread(
            self._run, self.header_command(input_path), f"Probe header for {input_path}"
        )

    async def probe_packets(self, input_path: str) -> Optional[str]:
        return await asyncio.to_thread(
            self._run,
            self.packets_command(input_path),
            f"Scan packets for {input_path}",
        )

    def _run(self, cmd: List[str], operation_name: str) -> Optional[str]:
        try:
            result = safe_subprocess_run(
                cmd, operation_name, logger, timeout=self.timeout
            )
        except SubprocessError as e:
            logger.warning("%s produced no signal: %s", operation_name, e.message)
            return None

        output = (result.stdout or "").strip()
        if not output:
            logger.warning("%s produced empty output", operation_name)
            return None
        return output
