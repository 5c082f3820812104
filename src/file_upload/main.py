from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from file_upload.core.errors import APIError
from file_upload.core.request_context import get_request_id
from file_upload.routers.health import router as health_router
from file_upload.routers.uploads import router as uploads_router
from file_upload.settings import get_settings


# -----------------------------------------------------------------------------
# Logging
# -----------------------------------------------------------------------------
logging.basicConfig(level=get_settings().LOG_LEVEL.upper())
logger = logging.getLogger("file_upload")


# -----------------------------------------------------------------------------
# CORS
# -----------------------------------------------------------------------------
def _cors_origins() -> list[str]:
    settings = get_settings()
    if settings.WEB_ORIGIN:
        return [origin.strip() for origin in settings.WEB_ORIGIN.split(",") if origin.strip()]
    if settings.UPLOAD_ENV.lower() == "production":
        return []
    return ["http://localhost:3000", "http://127.0.0.1:3000"]


# -----------------------------------------------------------------------------
# App
# -----------------------------------------------------------------------------
app = FastAPI(title="File Upload API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_response(request: Request, status_code: int, code: str, message: str, details=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": code,
            "message": message,
            "details": details,
            "request_id": get_request_id(request),
        },
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return _error_response(request, 500, "internal_error", "Internal server error")


@app.exception_handler(APIError)
async def api_error_handler(request: Request, exc: APIError):
    logger.warning("Upload API error code=%s path=%s", exc.code, request.url.path, extra={"details": exc.details})
    return _error_response(request, exc.status_code, exc.code, exc.message, exc.details)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = [{"loc": list(error.get("loc", ())), "msg": error.get("msg", "")} for error in exc.errors()]
    logger.info("Invalid upload request on %s", request.url.path)
    return _error_response(request, 422, "validation_error", "Invalid request payload", errors)


@app.on_event("startup")
async def startup_event():
    settings = get_settings()
    logger.info("File upload API starting")
    logger.info("UPLOAD_ENV=%s", settings.UPLOAD_ENV)
    logger.info("UPLOAD_TEMP_DIR=%s", settings.UPLOAD_TEMP_DIR)
    logger.info("UPLOAD_DEST_DIR=%s", settings.UPLOAD_DEST_DIR)


app.include_router(health_router)
app.include_router(uploads_router)
