"""server.properties upkeep.

The file is rewritten in a single forward pass so that comments, blank lines
and keys we do not manage keep their text and position. Managed keys are
rewritten in place; managed keys missing from the file are appended.
"""
from __future__ import annotations

import logging
from pathlib import Path

from .config import Config
from .filesystem import Filesystem


log = logging.getLogger(__name__)

SERVER_PROPERTIES = "server.properties"
RCON_PASSWORD = "minecraft"

DEFAULT_PROPERTIES: dict[str, str] = {
    "server-port": "25565",
    "enable-rcon": "true",
    "rcon.port": "25575",
    "rcon.password": RCON_PASSWORD,
    "broadcast-rcon-to-ops": "true",
}


def desired_properties(config: Config) -> tuple[dict[str, str], set[str]]:
    """Return (keys to set, keys to remove) for `config`."""
    to_set = dict(DEFAULT_PROPERTIES)
    to_remove: set[str] = set()

    world = config.world
    to_set["level-name"] = world.name
    to_set["gamemode"] = world.gamemode
    to_set["difficulty"] = world.difficulty
    to_set["allow-flight"] = "true" if world.allow_flight else "false"
    if world.seed is not None:
        to_set["level-seed"] = world.seed
    else:
        to_remove.add("level-seed")
    return to_set, to_remove


def merge_properties(text: str, to_set: dict[str, str], to_remove: set[str] | frozenset[str] = frozenset()) -> str:
    pending = dict(to_set)
    lines: list[str] = []
    for line in text.splitlines():
        key, sep, _ = line.partition("=")
        if not sep:
            lines.append(line)
        elif key in to_set:
            # a managed key keeps only its first line
            if key in pending:
                del pending[key]
                lines.append(f"{key}={to_set[key]}")
        elif key in to_remove:
            continue
        else:
            lines.append(line)

    lines.extend(f"{key}={value}" for key, value in pending.items())
    return "\n".join(lines)


def write_server_properties(fs: Filesystem, config: Config, data_dir: Path) -> Path:
    path = Path(data_dir) / SERVER_PROPERTIES
    prior = fs.read_text(path) if fs.file_exists(path) else ""
    to_set, to_remove = desired_properties(config)
    fs.write_text(path, merge_properties(prior, to_set, to_remove))
    log.debug("Wrote %s", path)
    return path
