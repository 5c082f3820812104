from __future__ import annotations

import pytest
from pydantic import ValidationError

from file_upload.core.upload.model import ValidationOptions
from file_upload.settings import Settings, get_settings


def test_settings_reject_non_positive_limits() -> None:
    with pytest.raises(ValidationError):
        Settings(UPLOAD_MAX_BYTES=0)


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("upload_allowed_types", "image/png,image/gif")
    get_settings.cache_clear()
    try:
        assert get_settings().allowed_types() == ["image/png", "image/gif"]
    finally:
        get_settings.cache_clear()


def test_settings_lists_absent_by_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("UPLOAD_ALLOWED_TYPES", raising=False)
    monkeypatch.delenv("UPLOAD_ALLOWED_EXTENSIONS", raising=False)

    settings = Settings()

    assert settings.allowed_types() is None
    assert settings.allowed_extensions() is None


@pytest.mark.parametrize("value", ["", "  ", ",", " , "])
def test_blank_lists_apply_no_constraint(value: str) -> None:
    settings = Settings(UPLOAD_ALLOWED_TYPES=value, UPLOAD_ALLOWED_EXTENSIONS=value)

    assert settings.allowed_types() is None
    assert settings.allowed_extensions() is None
    assert settings.validation_options() == ValidationOptions()


def test_validation_options_from_settings() -> None:
    settings = Settings(
        UPLOAD_MAX_BYTES=2048,
        UPLOAD_ALLOWED_TYPES="image/png, image/jpeg",
        UPLOAD_ALLOWED_EXTENSIONS="png,jpg,",
    )

    options = settings.validation_options()

    assert options.max_size == 2048
    assert options.allowed_types == frozenset({"image/png", "image/jpeg"})
    assert options.allowed_extensions == frozenset({"png", "jpg"})


def test_default_settings_are_unconstrained(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("UPLOAD_MAX_BYTES", "UPLOAD_ALLOWED_TYPES", "UPLOAD_ALLOWED_EXTENSIONS"):
        monkeypatch.delenv(name, raising=False)

    assert Settings().validation_options() == ValidationOptions()
