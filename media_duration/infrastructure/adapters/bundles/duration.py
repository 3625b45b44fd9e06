from __future__ import annotations

from types import SimpleNamespace

from media_duration.core.config import Settings, settings as default_settings
from media_duration.infrastructure.adapters import (
    FFprobeMediaProbe,
    resolve_probe_binary,
)


def get_duration_adapter_bundle(
    *, app_settings: Settings | None = None, binary_path: str | None = None
) -> SimpleNamespace:
    """Provide the adapters used by the duration job.

    The ffprobe binary is resolved here, once per process; a missing binary
    raises ConfigurationError before any job is accepted.
    """
    cfg = app_settings or default_settings
    resolved = binary_path or resolve_probe_binary(cfg.ffprobe_binary_path)

    return SimpleNamespace(
        media_probe=FFprobeMediaProbe(
            resolved,
            timeout=cfg.probe_timeout,
            packet_offset=cfg.packet_scan_offset,
        ),
    )
