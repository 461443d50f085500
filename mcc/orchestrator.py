from __future__ import annotations

import logging
from pathlib import Path

from .config import Config
from .console import ConsoleSession
from .containers import ContainerReconciler
from .datapacks import DatapackReconciler, SyncResult
from .docker_ops import DockerBackend
from .errors import StateConflictError
from .filesystem import Filesystem, LocalFilesystem
from .line_input import TerminalInput
from .properties import write_server_properties
from .rcon import RconConsole
from .settings import Settings, settings as default_settings
from .state import ContainerState, NotFound, Running, Stopped, describe


log = logging.getLogger(__name__)


class Orchestrator:
    """Sequences the reconcilers for each CLI operation.

    State is read from Docker before every transition; nothing is carried
    over between invocations, so a half-finished `up` is picked up by the
    next one.
    """

    def __init__(
        self,
        containers: ContainerReconciler,
        fs: Filesystem,
        datapacks: DatapackReconciler,
        console: ConsoleSession,
        data_dir: Path,
    ):
        self.containers = containers
        self.fs = fs
        self.datapacks = datapacks
        self.console = console
        self.data_dir = Path(data_dir)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> Orchestrator:
        settings = settings or default_settings
        fs = LocalFilesystem()
        data_dir = Path(settings.data_dir)
        return cls(
            containers=ContainerReconciler(DockerBackend(base_url=settings.docker_base_url), settings),
            fs=fs,
            datapacks=DatapackReconciler(fs, data_dir, Path(settings.datapack_source_dir)),
            console=ConsoleSession(RconConsole(settings.rcon_timeout_s), TerminalInput()),
            data_dir=data_dir,
        )

    def _require(self, operation: str, config: Config, *allowed: type[ContainerState]) -> ContainerState:
        state = self.containers.status(config)
        if not isinstance(state, allowed):
            raise StateConflictError(operation, state)
        return state

    def ensure_data_dir(self) -> Path:
        if not self.fs.directory_exists(self.data_dir):
            self.fs.create_directory(self.data_dir)
        return self.fs.canonicalize(self.data_dir)

    # --- single steps ---

    def create(self, config: Config) -> None:
        self._require("create", config, NotFound)
        data_path = self.ensure_data_dir()
        log.info("Creating the server container %s", config.name)
        self.containers.create(config, data_path)

    def start(self, config: Config) -> None:
        self._require("start", config, Stopped)
        self.ensure_data_dir()
        write_server_properties(self.fs, config, self.data_dir)
        self.datapacks.sync(config)
        log.info("Starting the server container %s", config.name)
        self.containers.start(config)

    def stop(self, config: Config) -> None:
        self._require("stop", config, Running)
        log.info("Stopping the server container %s", config.name)
        self.containers.stop(config)

    def destroy(self, config: Config) -> None:
        state = self._require("destroy", config, Stopped, NotFound)
        if isinstance(state, NotFound):
            log.info("The server container %s does not exist, nothing to destroy", config.name)
            return
        log.info("Destroying the server container %s", config.name)
        self.containers.delete(config)

    # --- composites ---

    def up(self, config: Config) -> None:
        state = self._require("up", config, NotFound, Stopped)
        if isinstance(state, NotFound):
            self.create(config)
        self.start(config)

    def down(self, config: Config) -> None:
        state = self._require("down", config, Running, Stopped, NotFound)
        if isinstance(state, Running):
            self.stop(config)
        self.destroy(config)

    # --- queries and sessions ---

    def status(self, config: Config) -> ContainerState:
        state = self.containers.status(config)
        log.info(describe(state))
        return state

    def console_session(self, config: Config) -> None:
        state = self.containers.status(config)
        if not (isinstance(state, Running) and state.accepting_connections):
            raise StateConflictError("open a console", state)
        host, port = self.containers.console_address(config)
        self.console.run_interactive(config.name, host, port)

    def sync_datapacks(self, config: Config) -> SyncResult:
        result = self.datapacks.sync(config)
        log.info(
            "Datapacks synced: %d installed, %d removed, %d skipped",
            len(result.installed),
            len(result.removed),
            len(result.skipped),
        )

        state = self.containers.status(config)
        if isinstance(state, Running) and state.accepting_connections:
            host, port = self.containers.console_address(config)
            for response in self.console.run_commands(host, port, ["reload"]):
                if response:
                    log.info(response)
        elif isinstance(state, Running):
            log.warning("The server is still starting; datapacks load once it is up")
        return result
