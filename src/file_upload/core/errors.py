from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class APIError(Exception):
    status_code: int
    code: str
    message: str
    details: dict[str, Any] | None = None


class UploadFixtureError(Exception):
    """The environment could not produce an upload fixture from a file on disk."""

    def __init__(self, path: str) -> None:
        super().__init__(path)
        self.path = path


class UploadSourceNotFoundError(UploadFixtureError):
    pass


class MimeTypeDetectionError(UploadFixtureError):
    pass


class TempFileError(UploadFixtureError):
    pass
