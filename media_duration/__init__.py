"""Queue-driven worker that reports the playback duration of media files."""

__version__ = "1.0.0"
