"""
Application configuration using Pydantic Settings
"""

from typing import List, Union
from pydantic_settings import BaseSettings
from pydantic import field_validator


class Settings(BaseSettings):
    """Worker settings with environment variable support"""

    # API Settings
    api_title: str = "Media Duration API"
    api_description: str = "Calculates the playback duration of media files"
    api_version: str = "1.0.0"

    # Server Settings
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False

    # Logging Settings
    log_level: str = "INFO"
    log_format: str = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
    log_date_format: str = "%Y-%m-%d %H:%M:%S"
    log_file: str = "data/media_duration.log"  # empty string disables file logging
    log_file_max_bytes: int = 5 * 1024 * 1024  # 5MB
    log_file_backup_count: int = 2

    # FFprobe Settings
    ffprobe_binary_path: str = "ffprobe"
    probe_timeout: float = 60.0  # seconds per ffprobe call
    # Seek target for packet scans; only the tail of long streams is read
    packet_scan_offset: int = 432000
    # Container formats whose header duration is not trusted
    untrusted_header_formats: Union[List[str], str] = ["mp3"]

    # Worker Settings
    worker_input: str = "-"

    @field_validator("untrusted_header_formats")
    @classmethod
    def parse_untrusted_header_formats(cls, v):
        """Parse untrusted formats into lowercase tokens.

        Args:
            v: Either a list of format names or a comma-separated string.

        Returns:
            List[str]: Lowercase format tokens, duplicates removed

        Example:
            >>> parse_untrusted_header_formats("MP3, wav")
            ['mp3', 'wav']
        """
        if isinstance(v, str):
            v = v.split(",")
        tokens: List[str] = []
        for item in v:
            token = str(item).strip().lower()
            if token and token not in tokens:
                tokens.append(token)
        return tokens

    @field_validator("probe_timeout")
    @classmethod
    def check_probe_timeout(cls, v):
        if v <= 0:
            raise ValueError("probe_timeout must be positive")
        return v

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @property
    def untrusted_formats_set(self) -> frozenset:
        """Untrusted header formats as a set for membership checks."""
        return frozenset(self.untrusted_header_formats)


# Global settings instance
settings = Settings()
