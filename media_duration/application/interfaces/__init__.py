from .media_probe import IMediaProbe
from .job import IJob

__all__ = [
    "IMediaProbe",
    "IJob",
]
