from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Protocol

from werkzeug.utils import secure_filename

from ..core.exceptions import StorageError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadedFile:
    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


class FileStorage(Protocol):
    def upload(self, path: str, file: UploadedFile) -> str:
        """Store the blob at `path` and return a stable download reference."""

        raise NotImplementedError


def safe_name(filename: str) -> str:
    return secure_filename(filename) or "upload"


class LocalFileStorage(FileStorage):
    """Stores uploads below a root directory; references are URLs under base_url."""

    def __init__(self, root: str | Path, *, base_url: str = "/uploads"):
        self._root = Path(root).resolve()
        self._base_url = base_url.rstrip("/")

    @property
    def root(self) -> Path:
        return self._root

    def _target(self, path: str) -> Path:
        parts = [p for p in PurePosixPath(path).parts if p not in ("", "/", ".", "..")]
        if not parts:
            raise StorageError("Ungültiger Speicherpfad")
        return self._root.joinpath(*parts)

    def upload(self, path: str, file: UploadedFile) -> str:
        target = self._target(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(file.content)
        except OSError as e:
            logger.exception("upload failed", extra={"path": path})
            raise StorageError("Datei konnte nicht gespeichert werden") from e

        return f"{self._base_url}/{target.relative_to(self._root).as_posix()}"
