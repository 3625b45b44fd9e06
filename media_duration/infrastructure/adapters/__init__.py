from .media_probe_ffprobe import FFprobeMediaProbe, resolve_probe_binary

__all__ = [
    "FFprobeMediaProbe",
    "resolve_probe_binary",
]
