"""minecraft-compose (mcc).

Manages one named, containerized Minecraft server described by a TOML file:
 - container lifecycle (create / start / stop / destroy) against Docker
 - server.properties upkeep that keeps hand-edited keys intact
 - datapack installation from a local source folder
 - an interactive RCON console

Every run re-derives state from Docker and the filesystem; nothing is cached
between invocations.
"""

__version__ = "0.3.0"
