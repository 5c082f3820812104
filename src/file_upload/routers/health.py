from __future__ import annotations

from fastapi import APIRouter

from file_upload.settings import get_settings

router = APIRouter()


@router.get("/health")
def health() -> dict[str, str | int | list[str] | None]:
    settings = get_settings()
    return {
        "status": "ok",
        "build_version": settings.UPLOAD_BUILD_VERSION or "dev",
        "max_bytes": settings.UPLOAD_MAX_BYTES,
        "allowed_types": settings.allowed_types(),
        "allowed_extensions": settings.allowed_extensions(),
    }
