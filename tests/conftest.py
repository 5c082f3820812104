from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from file_upload.main import app
from file_upload.settings import get_settings


@pytest.fixture()
def upload_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[dict[str, Path]]:
    temp_dir = tmp_path / "tmp"
    dest_dir = tmp_path / "uploads"
    monkeypatch.setenv("UPLOAD_TEMP_DIR", str(temp_dir))
    monkeypatch.setenv("UPLOAD_DEST_DIR", str(dest_dir))
    get_settings.cache_clear()
    yield {"temp": temp_dir, "dest": dest_dir}
    get_settings.cache_clear()


@pytest.fixture()
def client(upload_dirs: dict[str, Path]) -> TestClient:
    return TestClient(app)


@pytest.fixture()
def raw_upload() -> dict:
    return {
        "name": "a.jpg",
        "declared_type": "image/jpeg",
        "size": 1024,
        "temp_location": "/tmp/x",
        "error_code": 0,
    }
