"""Filesystem access for the make layer.

Every operation here wraps :class:`OSError` into one of the tagged
:class:`MakeError` subclasses, each carrying the offending path.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
import shutil

from .core import Timestamp


class MakeError(Exception):
    """Base class for filesystem failures raised by the make layer."""

    action = "access"

    def __init__(self, path, detail=None):
        self.path = Path(path)
        self.detail = detail
        message = f"Cannot {self.action} {self.path}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class CannotReadFile(MakeError):
    action = "read file"


class CannotWriteFile(MakeError):
    action = "write file"

    def __init__(self, path, detail=None):
        super().__init__(path, detail)
        self.errors: list[CannotWriteFile] = [self]


class CannotGetFileInfo(MakeError):
    action = "get file info for"


def get_timestamp(path) -> Timestamp:
    """Modification time of ``path`` or ``None`` when it does not exist."""

    path = Path(path)
    try:
        if not path.is_file():
            return None
        mtime = path.stat().st_mtime
    except OSError as exc:
        raise CannotGetFileInfo(path, exc.strerror) from exc
    return datetime.fromtimestamp(mtime, tz=timezone.utc)


def file_exists(path) -> bool:
    path = Path(path)
    try:
        return path.is_file()
    except OSError as exc:
        raise CannotReadFile(path, exc.strerror) from exc


def dir_exists(path) -> bool:
    path = Path(path)
    try:
        return path.is_dir()
    except OSError as exc:
        raise CannotReadFile(path, exc.strerror) from exc


def read_text_file(path) -> str:
    path = Path(path)
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CannotReadFile(path, exc.strerror) from exc


def write_file(path, content) -> Path:
    """Write ``content`` (text or bytes) to ``path``, creating parent dirs."""

    path = Path(path)
    if isinstance(content, str):
        data = content.encode("utf-8")
    elif isinstance(content, (bytes, bytearray)):
        data = bytes(content)
    else:
        raise TypeError(f"Cannot write {type(content).__name__} to {path}")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    except OSError as exc:
        raise CannotWriteFile(path, exc.strerror) from exc
    return path


def copy_file(src, dst) -> Path:
    """Copy ``src`` to ``dst`` byte for byte, creating parent dirs."""

    src, dst = Path(src), Path(dst)
    try:
        dst.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(src, dst)
    except OSError as exc:
        raise CannotWriteFile(dst, exc.strerror) from exc
    return dst


__all__ = [
    "CannotGetFileInfo",
    "CannotReadFile",
    "CannotWriteFile",
    "MakeError",
    "copy_file",
    "dir_exists",
    "file_exists",
    "get_timestamp",
    "read_text_file",
    "write_file",
]
