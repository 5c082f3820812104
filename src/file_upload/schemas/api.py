from __future__ import annotations

from pydantic import BaseModel, Field


class UploadResponse(BaseModel):
    name: str
    declared_type: str
    size: int = Field(..., ge=0)
    extension: str | None = None
    is_image: bool
    stored_as: str


class ErrorResponse(BaseModel):
    error: str
    message: str
    details: dict | None = None
    request_id: str
