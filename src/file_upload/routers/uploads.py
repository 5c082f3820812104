from __future__ import annotations

import logging
from pathlib import Path
from uuid import uuid4

from fastapi import APIRouter, File, UploadFile

from file_upload.core.errors import APIError
from file_upload.core.upload.move import UploadedFileMover
from file_upload.core.upload.result import ErrorUpload, ValidUpload
from file_upload.core.upload.validate import validate
from file_upload.schemas.api import ErrorResponse, UploadResponse
from file_upload.services.intake import discard_spooled, spool_upload
from file_upload.settings import get_settings

router = APIRouter(prefix="/v1/uploads", tags=["uploads"])
logger = logging.getLogger(__name__)


def _stored_name(upload: ValidUpload) -> str:
    extension = upload.record.extension
    return f"{uuid4()}.{extension}" if extension else str(uuid4())


def _store(upload: ValidUpload, dest_dir: str, stored_as: str, temp_dir: str) -> bool:
    destination = Path(dest_dir)
    try:
        destination.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.warning("Upload destination unavailable", extra={"dest_dir": dest_dir, "error": str(exc)})
        return False
    return upload.move(str(destination / stored_as), UploadedFileMover(Path(temp_dir)))


@router.post(
    "",
    response_model=UploadResponse,
    responses={422: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def create_upload(file: UploadFile = File(...)) -> UploadResponse:
    settings = get_settings()
    raw = spool_upload(
        file.filename,
        file.content_type,
        file.file,
        settings.UPLOAD_TEMP_DIR,
        settings.UPLOAD_FORM_MAX_BYTES,
    )
    result = validate(raw, settings.validation_options())

    match result:
        case ErrorUpload(record=record, message=message):
            discard_spooled(record.temp_location)
            raise APIError(
                status_code=422,
                code="upload_rejected",
                message=message or "Upload failed",
                details={"error_code": record.error_code, "name": record.name},
            )
        case ValidUpload(record=record):
            stored_as = _stored_name(result)
            if not _store(result, settings.UPLOAD_DEST_DIR, stored_as, settings.UPLOAD_TEMP_DIR):
                discard_spooled(record.temp_location)
                raise APIError(
                    status_code=500,
                    code="upload_move_failed",
                    message="Failed to store uploaded file",
                    details={"name": record.name},
                )
            logger.info("Upload stored", extra={"upload_name": record.name, "stored_as": stored_as})
            return UploadResponse(
                name=record.name,
                declared_type=record.declared_type,
                size=record.size,
                extension=record.extension,
                is_image=result.is_image(),
                stored_as=stored_as,
            )
