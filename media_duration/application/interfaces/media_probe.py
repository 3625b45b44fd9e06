from __future__ import annotations

from typing import Optional, Protocol


class IMediaProbe(Protocol):
    async def probe_header(self, input_path: str) -> Optional[str]:
        """Return raw probe output with the container format name and duration.

        Returns None when the tool produced no usable output.
        """
        ...

    async def probe_packets(self, input_path: str) -> Optional[str]:
        """Return raw probe output listing audio packet timestamps near the end
        of the stream, or None when the tool produced no usable output.
        """
        ...
