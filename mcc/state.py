"""Container and game states as reported by Docker.

`ContainerState` is a closed set of variants; callers branch with
``isinstance``. `Running` carries the game process's own readiness, which
comes from the image's health check rather than the container lifecycle.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class GameState(str, Enum):
    UNKNOWN = "unknown"
    STARTING = "starting"
    RUNNING = "running"


@dataclass(frozen=True)
class ContainerState:
    def __str__(self) -> str:
        return type(self).__name__.lower()


@dataclass(frozen=True)
class Unknown(ContainerState):
    pass


@dataclass(frozen=True)
class NotFound(ContainerState):
    def __str__(self) -> str:
        return "not found"


@dataclass(frozen=True)
class Stopped(ContainerState):
    pass


@dataclass(frozen=True)
class Running(ContainerState):
    game: GameState = GameState.UNKNOWN

    def __str__(self) -> str:
        return f"running (game: {self.game.value})"

    @property
    def accepting_connections(self) -> bool:
        return self.game is GameState.RUNNING


def describe(state: ContainerState) -> str:
    if isinstance(state, NotFound):
        return "The server container does not exist"
    if isinstance(state, Stopped):
        return "The server container is stopped"
    if isinstance(state, Running):
        if state.game is GameState.RUNNING:
            return "The server is running"
        if state.game is GameState.STARTING:
            return "The server container is running and the server is starting"
        return "The server container is running but the server state is unknown"
    return "The server container state is unknown"
