from __future__ import annotations

import base64
import json
import os
import sys
import tempfile
from pathlib import Path

import httpx

from file_upload.core.upload.move import RenameMover
from file_upload.core.upload.result import ErrorUpload, ValidUpload
from file_upload.services.fixtures import upload_from_file

# 1x1 transparent PNG
_PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


def _check_api(base_url: str) -> dict:
    client = httpx.Client(base_url=base_url, timeout=30)
    health = client.get("/health")
    health.raise_for_status()
    upload = client.post("/v1/uploads", files={"file": ("smoke.png", _PNG_BYTES, "image/png")})
    upload.raise_for_status()
    payload = upload.json()
    if not payload["is_image"]:
        raise RuntimeError("Uploaded PNG was not reported as an image")
    return payload


def _check_local(workdir: Path) -> str:
    source = workdir / "smoke.png"
    source.write_bytes(_PNG_BYTES)
    result = upload_from_file(str(source))
    match result:
        case ErrorUpload(message=message):
            raise RuntimeError(f"Local upload rejected: {message}")
        case ValidUpload():
            destination = workdir / "stored.png"
            if not result.move(str(destination), RenameMover()):
                raise RuntimeError("Local upload move failed")
            return str(destination)


def main() -> int:
    base_url = os.getenv("FILE_UPLOAD_SMOKE_API_BASE_URL", "http://localhost:8000").rstrip("/")
    with tempfile.TemporaryDirectory() as workdir:
        stored = _check_local(Path(workdir))
    api_payload = _check_api(base_url)
    print(json.dumps({"status": "ok", "local": stored, "api": api_payload["stored_as"]}))
    return 0


if __name__ == "__main__":
    sys.exit(main())
