from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from .config import Config
from .errors import FilesystemError, ResolutionError
from .filesystem import Filesystem


log = logging.getLogger(__name__)

DATAPACK_DIR = "datapacks"
DATAPACK_SUFFIX = ".zip"


@dataclass
class SyncResult:
    installed: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


class DatapackReconciler:
    """Makes `<data>/<world>/datapacks` hold exactly the datapacks named in the config.

    Sources are resolved against `source_root`. A source that cannot be found
    is skipped with a warning; every other entry is still installed.
    """

    def __init__(self, fs: Filesystem, data_dir: Path, source_root: Path):
        self.fs = fs
        self.data_dir = Path(data_dir)
        self.source_root = Path(source_root)

    def installed_dir(self, config: Config) -> Path:
        return self.data_dir / config.world.name / DATAPACK_DIR

    def resolve_source(self, source: str) -> Path:
        try:
            return self.fs.canonicalize(self.source_root / source)
        except FilesystemError as e:
            raise ResolutionError(f"datapack source {source!r} not found under {self.source_root}") from e

    def sync(self, config: Config) -> SyncResult:
        desired = dict(config.datapacks or {})
        result = SyncResult()

        target = self.installed_dir(config)
        if not self.fs.directory_exists(target):
            self.fs.create_directory(target)
        target = self.fs.canonicalize(target)

        # Uninstall first so the listing reflects only what we did not install.
        for path in self.fs.list_directory(target):
            if path.stem in desired:
                continue
            log.debug('Uninstalling datapack "%s"', path)
            self.fs.delete_file(path)
            result.removed.append(path.name)

        for name, source in desired.items():
            try:
                src = self.resolve_source(source)
            except ResolutionError:
                log.warning('Unable to find the source for the datapack "%s", skipping', name)
                result.skipped.append(name)
                continue

            dest = target / f"{name}{DATAPACK_SUFFIX}"
            log.debug('Installing "%s" from "%s" to "%s"', name, src, dest)
            self.fs.copy_file(src, dest)
            result.installed.append(name)

        return result
