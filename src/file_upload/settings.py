from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from file_upload.core.upload.model import ValidationOptions


def _split_csv(value: Optional[str]) -> list[str] | None:
    if value is None:
        return None
    items = [item.strip() for item in value.split(",") if item.strip()]
    return items or None


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="", case_sensitive=False)

    UPLOAD_ENV: str = "development"
    UPLOAD_TEMP_DIR: str = ".data/tmp"
    UPLOAD_DEST_DIR: str = ".data/uploads"
    UPLOAD_MAX_BYTES: Optional[int] = None
    UPLOAD_FORM_MAX_BYTES: Optional[int] = None
    UPLOAD_ALLOWED_TYPES: Optional[str] = None
    UPLOAD_ALLOWED_EXTENSIONS: Optional[str] = None
    UPLOAD_BUILD_VERSION: Optional[str] = None
    WEB_ORIGIN: Optional[str] = None
    LOG_LEVEL: str = "INFO"

    @model_validator(mode="after")
    def _validate_limits(self) -> "Settings":
        invalid = [
            name
            for name, value in {
                "UPLOAD_MAX_BYTES": self.UPLOAD_MAX_BYTES,
                "UPLOAD_FORM_MAX_BYTES": self.UPLOAD_FORM_MAX_BYTES,
            }.items()
            if value is not None and value <= 0
        ]
        if invalid:
            raise ValueError(f"Size limits must be positive: {', '.join(invalid)}")
        return self

    def allowed_types(self) -> list[str] | None:
        return _split_csv(self.UPLOAD_ALLOWED_TYPES)

    def allowed_extensions(self) -> list[str] | None:
        return _split_csv(self.UPLOAD_ALLOWED_EXTENSIONS)

    def validation_options(self) -> ValidationOptions:
        return ValidationOptions(
            max_size=self.UPLOAD_MAX_BYTES,
            allowed_types=self.allowed_types(),
            allowed_extensions=self.allowed_extensions(),
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
