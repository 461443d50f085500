from __future__ import annotations

import tomllib
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError


DEFAULT_CONFIG_FILE = "./minecraft-compose.toml"


class ServerType(str, Enum):
    VANILLA = "vanilla"


class Server(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: ServerType = Field(ServerType.VANILLA, description="Server flavor")
    version: str = Field(..., min_length=1, description="Minecraft version, e.g. 1.20.4 or LATEST")
    memory: str | None = Field(None, description="JVM heap size passed to the image, e.g. 2G")

    @field_validator("type", mode="before")
    @classmethod
    def _lower_type(cls, value: object) -> object:
        return value.lower() if isinstance(value, str) else value


class World(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field("world", min_length=1)
    seed: str | None = None
    gamemode: str = "survival"
    difficulty: str = "easy"
    allow_flight: bool = False

    @field_validator("seed", mode="before")
    @classmethod
    def _seed_as_text(cls, value: object) -> object:
        # TOML allows `seed = 1234`; the properties file wants text.
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class Config(BaseModel):
    """One server instance, loaded once per invocation."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Container name and console prompt")
    host: str = "0.0.0.0"
    port: int = Field(25565, ge=1, le=65535)
    server: Server
    world: World = Field(default_factory=World)
    datapacks: dict[str, str] | None = None


def load_config(path: str | Path) -> Config:
    p = Path(path)
    try:
        raw = p.read_bytes()
    except OSError as exc:
        raise ConfigError(f"unable to read {p}: {exc.strerror or exc}") from exc
    try:
        data = tomllib.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"{p} is not valid TOML: {exc}") from exc
    try:
        return Config.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"{p} is invalid: {exc}") from exc
