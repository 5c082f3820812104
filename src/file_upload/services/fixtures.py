from __future__ import annotations

import logging
import os
import shutil
import tempfile
from typing import Callable

from file_upload.core.errors import MimeTypeDetectionError, TempFileError, UploadSourceNotFoundError
from file_upload.core.upload.codes import UploadErrorCode
from file_upload.core.upload.model import ValidationOptions
from file_upload.core.upload.result import UploadResult
from file_upload.core.upload.validate import validate

logger = logging.getLogger(__name__)

MimeDetector = Callable[[str], str]


def detect_mime_type(path: str) -> str:
    import magic

    return magic.from_file(path, mime=True)


def _copy_to_temp(path: str, temp_dir: str | None) -> str:
    try:
        fd, temp_path = tempfile.mkstemp(prefix="upload_test", dir=temp_dir)
    except OSError as exc:
        raise TempFileError(path) from exc
    os.close(fd)
    try:
        shutil.copyfile(path, temp_path)
    except OSError as exc:
        os.unlink(temp_path)
        raise TempFileError(path) from exc
    return temp_path


def upload_from_file(
    path: str,
    options: ValidationOptions | None = None,
    *,
    detect_mime: MimeDetector | None = None,
    temp_dir: str | None = None,
) -> UploadResult:
    """Build an upload from a real file, as if it had just arrived in a request.

    The file is copied into a fresh temp file so that moving the resulting
    upload never consumes the source. Raises UploadSourceNotFoundError,
    MimeTypeDetectionError or TempFileError when the environment cannot
    provide the fixture.
    """
    if not os.path.exists(path):
        raise UploadSourceNotFoundError(path)

    detector = detect_mime or detect_mime_type
    try:
        mime_type = detector(path)
    except Exception as exc:
        raise MimeTypeDetectionError(path) from exc
    if not mime_type:
        raise MimeTypeDetectionError(path)

    size = os.path.getsize(path)
    temp_path = _copy_to_temp(path, temp_dir)
    logger.debug("Upload fixture created", extra={"source": path, "temp_location": temp_path})

    return validate(
        {
            "name": os.path.basename(path),
            "declared_type": mime_type,
            "size": size,
            "temp_location": temp_path,
            "error_code": int(UploadErrorCode.OK),
        },
        options,
    )
