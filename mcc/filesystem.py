from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import Protocol

from .errors import FilesystemError


log = logging.getLogger(__name__)


class Filesystem(Protocol):
    def canonicalize(self, path: Path) -> Path: ...

    def directory_exists(self, path: Path) -> bool: ...

    def create_directory(self, path: Path) -> None: ...

    def list_directory(self, path: Path) -> list[Path]: ...

    def file_exists(self, path: Path) -> bool: ...

    def read_text(self, path: Path) -> str: ...

    def write_text(self, path: Path, contents: str) -> None: ...

    def copy_file(self, src: Path, dest: Path) -> None: ...

    def delete_file(self, path: Path) -> None: ...


def _fail(action: str, path: Path, exc: OSError) -> FilesystemError:
    log.debug("Unable to %s %s: %s", action, path, exc)
    return FilesystemError(f"unable to {action} {path}: {exc.strerror or exc}")


class LocalFilesystem:
    """Filesystem backed by the local disk."""

    def canonicalize(self, path: Path) -> Path:
        try:
            return Path(path).resolve(strict=True)
        except OSError as e:
            raise _fail("resolve", path, e) from e

    def directory_exists(self, path: Path) -> bool:
        return Path(path).is_dir()

    def create_directory(self, path: Path) -> None:
        try:
            os.makedirs(path, exist_ok=True)
        except OSError as e:
            raise _fail("create directory", path, e) from e

    def list_directory(self, path: Path) -> list[Path]:
        """Regular files directly inside `path`, sorted by name."""
        try:
            return sorted(p for p in Path(path).iterdir() if p.is_file())
        except OSError as e:
            raise _fail("list", path, e) from e

    def file_exists(self, path: Path) -> bool:
        return Path(path).is_file()

    def read_text(self, path: Path) -> str:
        try:
            return Path(path).read_text(encoding="utf-8")
        except OSError as e:
            raise _fail("read", path, e) from e

    def write_text(self, path: Path, contents: str) -> None:
        try:
            Path(path).write_text(contents, encoding="utf-8")
        except OSError as e:
            raise _fail("write", path, e) from e

    def copy_file(self, src: Path, dest: Path) -> None:
        try:
            shutil.copyfile(src, dest)
        except OSError as e:
            raise _fail("copy to", dest, e) from e

    def delete_file(self, path: Path) -> None:
        try:
            os.remove(path)
        except OSError as e:
            raise _fail("delete", path, e) from e
