from __future__ import annotations

from enum import IntEnum


class UploadErrorCode(IntEnum):
    OK = 0
    INI_SIZE = 1
    FORM_SIZE = 2
    PARTIAL = 3
    NO_FILE = 4
    NO_TMP_DIR = 6
    CANT_WRITE = 7
    EXTENSION = 8


ERROR_MESSAGES: dict[int, str] = {
    UploadErrorCode.INI_SIZE: "The uploaded file exceeds the upload_max_filesize directive in php.ini",
    UploadErrorCode.FORM_SIZE: "The uploaded file exceeds the MAX_FILE_SIZE directive in the HTML form",
    UploadErrorCode.PARTIAL: "The uploaded file was only partially uploaded",
    UploadErrorCode.NO_FILE: "No file was uploaded",
    UploadErrorCode.NO_TMP_DIR: "Missing a temporary folder",
    UploadErrorCode.CANT_WRITE: "Failed to write file to disk",
    UploadErrorCode.EXTENSION: "A PHP extension stopped the file upload",
}


def message_for_code(code: int) -> str | None:
    return ERROR_MESSAGES.get(code)
