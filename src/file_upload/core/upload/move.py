from __future__ import annotations

import errno
import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class FileMover(Protocol):
    def move(self, source: str, destination: str) -> bool:
        ...


def _rename(source: str, destination: str) -> bool:
    try:
        os.rename(source, destination)
        return True
    except OSError as exc:
        if exc.errno == errno.EXDEV:
            return _copy_across_devices(source, destination)
        logger.warning(
            "Upload move failed",
            extra={"source": source, "destination": destination, "error": str(exc)},
        )
        return False


def _copy_across_devices(source: str, destination: str) -> bool:
    try:
        shutil.copy2(source, destination)
        os.unlink(source)
        return True
    except OSError as exc:
        logger.warning(
            "Upload move across devices failed",
            extra={"source": source, "destination": destination, "error": str(exc)},
        )
        return False


@dataclass(frozen=True)
class RenameMover:
    """Plain rename, for CLI tooling and tests where no request produced the file."""

    def move(self, source: str, destination: str) -> bool:
        return _rename(source, destination)


@dataclass(frozen=True)
class UploadedFileMover:
    """Request-context mover that only accepts files spooled into ``upload_dir``.

    A source path that resolves outside the upload temp directory is refused,
    so a forged ``temp_location`` cannot be used to relocate arbitrary files.
    """

    upload_dir: Path

    def is_uploaded_file(self, source: str) -> bool:
        root = Path(self.upload_dir).resolve()
        candidate = Path(source).resolve()
        if root not in candidate.parents:
            return False
        return candidate.is_file()

    def move(self, source: str, destination: str) -> bool:
        if not self.is_uploaded_file(source):
            logger.warning(
                "Refusing to move file that did not originate from an upload",
                extra={"source": source, "upload_dir": str(self.upload_dir)},
            )
            return False
        return _rename(source, destination)
