from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

import docker
from docker.errors import DockerException, NotFound

from .errors import ContainerRuntimeError


log = logging.getLogger(__name__)


@dataclass(frozen=True)
class PortBinding:
    host_ip: str | None
    host_port: str | None = None


@dataclass(frozen=True)
class ContainerInspection:
    """The parts of `docker inspect` the reconciler looks at."""

    status: str | None
    health: str | None = None
    ports: dict[str, list[PortBinding]] = field(default_factory=dict)


@dataclass(frozen=True)
class ContainerSpec:
    name: str
    image: str
    env: list[str]
    binds: list[str]
    port_bindings: dict[str, list[PortBinding]]
    restart_policy: str = "always"


class ContainerBackend(Protocol):
    def pull(self, image: str, tag: str) -> None: ...

    def create(self, spec: ContainerSpec) -> None: ...

    def start(self, name: str) -> None: ...

    def stop(self, name: str) -> None: ...

    def delete(self, name: str) -> None: ...

    def inspect(self, name: str) -> ContainerInspection | None:
        """Return None when no container has that name."""
        ...


def parse_inspection(attrs: dict[str, Any]) -> ContainerInspection:
    state = attrs.get("State")
    if not isinstance(state, dict):
        state = {}
    health = state.get("Health")
    health_status = health.get("Status") if isinstance(health, dict) else None

    ports: dict[str, list[PortBinding]] = {}
    raw_ports = (attrs.get("NetworkSettings") or {}).get("Ports") or {}
    for container_port, bindings in raw_ports.items():
        # Docker reports exposed-but-unpublished ports as null.
        ports[container_port] = [
            PortBinding(host_ip=b.get("HostIp") or None, host_port=b.get("HostPort") or None)
            for b in (bindings or [])
        ]

    return ContainerInspection(
        status=state.get("Status") or None,
        health=health_status or None,
        ports=ports,
    )


def _binding_arg(binding: PortBinding) -> tuple:
    # docker-py: (ip, port) publishes a fixed port, (ip,) lets the daemon pick one.
    if binding.host_port is None:
        return (binding.host_ip or "0.0.0.0",)
    return (binding.host_ip or "0.0.0.0", int(binding.host_port))


class DockerBackend:
    """ContainerBackend on top of the docker SDK. Every call blocks until the daemon answers."""

    def __init__(self, client: docker.DockerClient | None = None, base_url: str | None = None):
        self._client = client
        self._base_url = base_url

    def _docker(self) -> docker.DockerClient:
        if self._client is None:
            try:
                if self._base_url:
                    self._client = docker.DockerClient(base_url=self._base_url)
                else:
                    self._client = docker.from_env()
            except DockerException as e:
                raise ContainerRuntimeError(f"unable to connect to docker: {e}") from e
        return self._client

    def pull(self, image: str, tag: str) -> None:
        log.debug("Pulling image %s:%s", image, tag)
        try:
            self._docker().images.pull(image, tag=tag)
        except DockerException as e:
            raise ContainerRuntimeError(f"unable to pull {image}:{tag}: {e}") from e

    def create(self, spec: ContainerSpec) -> None:
        ports = {port: [_binding_arg(b) for b in bindings] for port, bindings in spec.port_bindings.items()}
        log.debug("Creating container %s from %s", spec.name, spec.image)
        try:
            self._docker().containers.create(
                spec.image,
                name=spec.name,
                environment=list(spec.env),
                volumes=list(spec.binds),
                ports=ports,
                restart_policy={"Name": spec.restart_policy},
            )
        except DockerException as e:
            raise ContainerRuntimeError(f"unable to create container {spec.name}: {e}") from e

    def start(self, name: str) -> None:
        self._container_call(name, "start")

    def stop(self, name: str) -> None:
        self._container_call(name, "stop")

    def delete(self, name: str) -> None:
        self._container_call(name, "remove")

    def inspect(self, name: str) -> ContainerInspection | None:
        try:
            container = self._docker().containers.get(name)
        except NotFound:
            return None
        except DockerException as e:
            raise ContainerRuntimeError(f"unable to inspect container {name}: {e}") from e
        return parse_inspection(container.attrs or {})

    def _container_call(self, name: str, action: str) -> None:
        log.debug("Container %s: %s", name, action)
        try:
            container = self._docker().containers.get(name)
            getattr(container, action)()
        except DockerException as e:
            raise ContainerRuntimeError(f"unable to {action} container {name}: {e}") from e
