from __future__ import annotations

from typing import Protocol


class IJob(Protocol):
    """A job delivered by the queue layer.

    Exactly one of send_success / send_fail is called per job.
    """

    @property
    def body(self) -> bytes:
        ...

    def send_success(self, payload: bytes) -> None:
        ...

    def send_fail(self, message: str) -> None:
        ...
