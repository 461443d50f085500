from __future__ import annotations

import logging
from pathlib import Path

from .config import Config, ServerType
from .docker_ops import ContainerBackend, ContainerInspection, ContainerSpec, PortBinding
from .errors import ContainerRuntimeError
from .settings import Settings, settings as default_settings
from .state import ContainerState, GameState, NotFound, Running, Stopped, Unknown


log = logging.getLogger(__name__)

GAME_PORT = "25565/tcp"
RCON_PORT = "25575/tcp"
SERVER_DATA_PATH = "/data"

STOPPED_PHASES = frozenset({"created", "empty", "exited", "dead", "paused"})


def state_from_inspection(inspection: ContainerInspection | None) -> ContainerState:
    """Map a docker inspection onto ContainerState.

    A container being removed is reported as already gone so that a repeated
    destroy is a no-op instead of a conflict.
    """
    if inspection is None:
        return NotFound()
    phase = inspection.status
    if phase is None:
        return Unknown()
    if phase in STOPPED_PHASES:
        return Stopped()
    if phase == "removing":
        return NotFound()
    if phase == "restarting":
        return Running(GameState.UNKNOWN)
    if phase == "running":
        if inspection.health == "healthy":
            return Running(GameState.RUNNING)
        if inspection.health == "starting":
            return Running(GameState.STARTING)
        # no healthcheck, "none" or "unhealthy"
        return Running(GameState.UNKNOWN)
    raise ContainerRuntimeError(f"docker reported an unrecognized container status {phase!r}")


def server_env(config: Config) -> list[str]:
    env = ["EULA=true", f"VERSION={config.server.version}"]
    if config.server.memory:
        env.append(f"MEMORY={config.server.memory}")
    if config.server.type is ServerType.VANILLA:
        env.append("TYPE=VANILLA")
    return env


class ContainerReconciler:
    """Runs lifecycle commands for the config's container and reports its state.

    No transition is guarded here; the orchestrator checks `status()` first.
    """

    def __init__(self, backend: ContainerBackend, settings: Settings | None = None):
        self.backend = backend
        self.settings = settings or default_settings

    @property
    def image(self) -> str:
        return f"{self.settings.image}:{self.settings.image_tag}"

    def status(self, config: Config) -> ContainerState:
        return state_from_inspection(self.backend.inspect(config.name))

    def build_spec(self, config: Config, data_directory: Path) -> ContainerSpec:
        return ContainerSpec(
            name=config.name,
            image=self.image,
            env=server_env(config),
            binds=[f"{data_directory}:{SERVER_DATA_PATH}"],
            port_bindings={
                GAME_PORT: [PortBinding(host_ip=config.host, host_port=str(config.port))],
                # RCON stays on loopback with a daemon-chosen host port.
                RCON_PORT: [PortBinding(host_ip="127.0.0.1", host_port=None)],
            },
            restart_policy="always",
        )

    def create(self, config: Config, data_directory: Path) -> None:
        spec = self.build_spec(config, data_directory)
        self.backend.pull(self.settings.image, self.settings.image_tag)
        self.backend.create(spec)
        log.debug("Created container %s (%s)", spec.name, spec.image)

    def start(self, config: Config) -> None:
        self.backend.start(config.name)

    def stop(self, config: Config) -> None:
        self.backend.stop(config.name)

    def delete(self, config: Config) -> None:
        self.backend.delete(config.name)

    def console_address(self, config: Config) -> tuple[str, int]:
        inspection = self.backend.inspect(config.name)
        if inspection is None:
            raise ContainerRuntimeError(f"container {config.name} does not exist")

        bindings = inspection.ports.get(RCON_PORT) or []
        if len(bindings) != 1:
            raise ContainerRuntimeError(
                f"expected exactly one published binding for {RCON_PORT}, found {len(bindings)}"
            )
        binding = bindings[0]
        if not binding.host_ip or not binding.host_port:
            raise ContainerRuntimeError(f"the binding for {RCON_PORT} has no host address")
        try:
            port = int(binding.host_port)
        except ValueError as e:
            raise ContainerRuntimeError(f"invalid host port {binding.host_port!r} for {RCON_PORT}") from e
        return binding.host_ip, port
