from __future__ import annotations

import os
from dataclasses import dataclass


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    # Docker
    docker_base_url: str | None = os.getenv("MCC_DOCKER_BASE_URL") or None
    image: str = os.getenv("MCC_IMAGE", "itzg/minecraft-server")
    image_tag: str = os.getenv("MCC_IMAGE_TAG", "latest")

    # Layout, relative to the config file's directory
    data_dir: str = os.getenv("MCC_DATA_DIR", "data")
    datapack_source_dir: str = os.getenv("MCC_DATAPACK_SOURCE_DIR", "datapacks")

    # RCON read deadline in seconds; 0 disables it. A closed socket fails regardless.
    rcon_timeout_s: int = _env_int("MCC_RCON_TIMEOUT_S", 0)


settings = Settings()
