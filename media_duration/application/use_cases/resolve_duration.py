from __future__ import annotations

import logging
from typing import Iterable

from media_duration.application.interfaces.media_probe import IMediaProbe
from media_duration.application.models import (
    DurationFailure,
    DurationSuccess,
    FailureKind,
    ProbeHeaderResult,
    Resolution,
)
from media_duration.application.probe_output import (
    extract_header,
    extract_last_packet_timestamp,
    round_seconds,
)

logger = logging.getLogger(__name__)

DEFAULT_UNTRUSTED_FORMATS = frozenset({"mp3"})


class DurationResolver:
    """Decide which duration signal to trust for one media file.

    Header metadata is used unless the container reports a format whose header
    duration is unreliable (MP3 by default: VBR streams and missing Xing/Info
    headers routinely yield wrong or zero durations). For those the packet
    stream is scanned and the last audio packet's timestamp wins, whatever the
    header said.

    Probe problems are reported as DurationFailure values, never raised.
    """

    def __init__(
        self,
        media_probe: IMediaProbe,
        *,
        untrusted_formats: Iterable[str] = DEFAULT_UNTRUSTED_FORMATS,
    ) -> None:
        self._probe = media_probe
        self.untrusted_formats = frozenset(f.lower() for f in untrusted_formats)

    def requires_packet_scan(self, header: ProbeHeaderResult) -> bool:
        return header.has_format(self.untrusted_formats)

    async def resolve(self, input_path: str) -> Resolution:
        raw_header = await self._probe.probe_header(input_path)
        header = extract_header(raw_header)
        if header is None:
            logger.debug("No usable header metadata for %s", input_path)
            return DurationFailure.of(FailureKind.PROBE_UNAVAILABLE)

        if not self.requires_packet_scan(header):
            logger.debug(
                "Trusting header duration %.3fs (%s) for %s",
                header.duration_seconds,
                ",".join(header.format_names),
                input_path,
            )
            return DurationSuccess(round_seconds(header.duration_seconds))

        logger.debug(
            "Header duration untrusted for format %s, scanning packets of %s",
            ",".join(header.format_names),
            input_path,
        )
        raw_packets = await self._probe.probe_packets(input_path)
        packet = extract_last_packet_timestamp(raw_packets)
        if packet is None:
            return DurationFailure.of(FailureKind.PACKET_SCAN_FAILED)

        return DurationSuccess(round_seconds(packet.last_packet_timestamp))
