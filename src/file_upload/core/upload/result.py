from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from file_upload.core.upload.codes import message_for_code
from file_upload.core.upload.model import UploadRecord, ValidationOptions
from file_upload.core.upload.move import FileMover


@dataclass(frozen=True)
class ValidUpload:
    """An upload that passed every rule of the options it was validated against."""

    record: UploadRecord
    options: ValidationOptions = field(default_factory=ValidationOptions)
    kind: Literal["valid"] = field(default="valid", init=False)

    def is_image(self) -> bool:
        # Based on the client-declared type only; file content is never inspected.
        return self.record.declared_type.startswith("image/")

    def move(self, destination: str, mover: FileMover) -> bool:
        return mover.move(self.record.temp_location, destination)

    def to_dict(self) -> dict[str, Any]:
        return self.record.to_dict()


@dataclass(frozen=True)
class ErrorUpload:
    """A rejected upload.

    When no message is given, the record's error code is looked up in the
    canonical message table. Unknown codes leave ``message`` as None so the
    caller can supply its own fallback text.
    """

    record: UploadRecord
    message: str | None = None
    kind: Literal["error"] = field(default="error", init=False)

    def __post_init__(self) -> None:
        if self.message is None:
            object.__setattr__(self, "message", message_for_code(self.record.error_code))

    @property
    def error_code(self) -> int:
        return self.record.error_code

    def to_dict(self) -> dict[str, Any]:
        return self.record.to_dict()


UploadResult = ValidUpload | ErrorUpload
