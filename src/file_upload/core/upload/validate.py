from __future__ import annotations

import logging
from typing import Any, Mapping

from file_upload.core.upload.codes import UploadErrorCode
from file_upload.core.upload.model import REQUIRED_FIELDS, UploadRecord, ValidationOptions, derive_extension
from file_upload.core.upload.result import ErrorUpload, UploadResult, ValidUpload

logger = logging.getLogger(__name__)

INVALID_STRUCTURE_MESSAGE = "Invalid file data structure"


def _is_complete(raw: Mapping[str, Any]) -> bool:
    if any(raw.get(name) is None for name in REQUIRED_FIELDS):
        return False
    return isinstance(raw["name"], str) and isinstance(raw["declared_type"], str)


def _reject(record: UploadRecord, rule: str, message: str | None = None) -> ErrorUpload:
    upload = ErrorUpload(record, message)
    logger.info(
        "Upload rejected",
        extra={"rule": rule, "upload_name": record.name, "error_code": record.error_code},
    )
    return upload


def validate(raw: Mapping[str, Any], options: ValidationOptions | None = None) -> UploadResult:
    """Classify a raw upload entry as a ValidUpload or an ErrorUpload.

    Rules run in order and stop at the first failure: structure, transport
    error code, maximum size, declared type, extension. Rejections are
    returned, never raised.
    """
    options = options or ValidationOptions()

    if not _is_complete(raw):
        name = raw.get("name")
        record = UploadRecord(
            name=name if isinstance(name, str) else "",
            declared_type="",
            size=0,
            temp_location="",
            error_code=int(UploadErrorCode.NO_FILE),
        )
        return _reject(record, "structure", INVALID_STRUCTURE_MESSAGE)

    record = UploadRecord.from_mapping(raw)

    if record.error_code != UploadErrorCode.OK:
        return _reject(record, "error_code")

    if options.max_size is not None and record.size > options.max_size:
        return _reject(
            record,
            "max_size",
            f"File size exceeds maximum allowed size of {options.max_size} bytes",
        )

    if options.allowed_types is not None and record.declared_type not in options.allowed_types:
        return _reject(record, "allowed_types", f"File type {record.declared_type} is not allowed")

    extension = derive_extension(record.name)
    if options.allowed_extensions is not None and extension not in options.allowed_extensions:
        return _reject(
            record,
            "allowed_extensions",
            f"File extension {extension or ''} is not allowed",
        )

    return ValidUpload(record, options)
