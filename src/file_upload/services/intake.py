from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Any, BinaryIO

from file_upload.core.upload.codes import UploadErrorCode

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


def _raw_entry(
    name: str,
    declared_type: str,
    size: int,
    temp_location: str,
    error_code: UploadErrorCode,
) -> dict[str, Any]:
    return {
        "name": name,
        "declared_type": declared_type,
        "size": size,
        "temp_location": temp_location,
        "error_code": int(error_code),
    }


def discard_spooled(temp_location: str) -> None:
    if not temp_location:
        return
    try:
        os.unlink(temp_location)
    except FileNotFoundError:
        pass


def spool_upload(
    filename: str | None,
    content_type: str | None,
    stream: BinaryIO,
    temp_dir: str,
    form_max_bytes: int | None = None,
) -> dict[str, Any]:
    """Write one multipart part into the upload temp dir and describe it as a raw entry.

    Transport problems are reported through ``error_code`` rather than raised,
    so the entry can go straight to ``validate``.
    """
    declared_type = content_type or ""
    if not filename:
        return _raw_entry("", declared_type, 0, "", UploadErrorCode.NO_FILE)

    try:
        Path(temp_dir).mkdir(parents=True, exist_ok=True)
        fd, temp_path = tempfile.mkstemp(prefix="upload_", dir=temp_dir)
    except OSError as exc:
        logger.warning("Upload temp dir unavailable", extra={"temp_dir": temp_dir, "error": str(exc)})
        return _raw_entry(filename, declared_type, 0, "", UploadErrorCode.NO_TMP_DIR)

    size = 0
    try:
        with os.fdopen(fd, "wb") as handle:
            while True:
                chunk = stream.read(CHUNK_SIZE)
                if not chunk:
                    break
                size += len(chunk)
                if form_max_bytes is not None and size > form_max_bytes:
                    discard_spooled(temp_path)
                    return _raw_entry(filename, declared_type, size, "", UploadErrorCode.FORM_SIZE)
                handle.write(chunk)
    except OSError as exc:
        logger.warning("Upload spool failed", extra={"upload_name": filename, "error": str(exc)})
        discard_spooled(temp_path)
        return _raw_entry(filename, declared_type, size, "", UploadErrorCode.CANT_WRITE)

    return _raw_entry(filename, declared_type, size, temp_path, UploadErrorCode.OK)
