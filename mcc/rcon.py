from __future__ import annotations

import logging
import signal
import struct
from typing import Protocol

from mcrcon import MCRcon, MCRconException

from .errors import ProtocolError
from .properties import RCON_PASSWORD


log = logging.getLogger(__name__)

# What mcrcon raises on a dead or misbehaving endpoint.
RCON_ERRORS = (MCRconException, OSError, ValueError, struct.error)


class ConsoleSessionBackend(Protocol):
    def execute(self, command: str) -> str: ...

    def close(self) -> None: ...


class ConsoleBackend(Protocol):
    def connect(self, host: str, port: int, password: str) -> ConsoleSessionBackend: ...


class RconClient(MCRcon):
    """MCRcon that fails on end-of-stream instead of polling a closed socket forever."""

    def _read(self, length):
        alarm = getattr(signal, "alarm", None)
        if alarm is not None:
            alarm(self.timeout)
        try:
            data = b""
            while len(data) < length:
                chunk = self.socket.recv(length - len(data))
                if not chunk:
                    raise MCRconException("Connection closed by the server")
                data += chunk
            return data
        finally:
            if alarm is not None:
                alarm(0)


class RconSession:
    def __init__(self, client: MCRcon):
        self._client = client

    def execute(self, command: str) -> str:
        try:
            return self._client.command(command) or ""
        except RCON_ERRORS as e:
            log.debug("Failed to execute rcon command: %s", e)
            raise ProtocolError(f"rcon command failed: {e}") from e

    def close(self) -> None:
        try:
            self._client.disconnect()
        except OSError as e:
            log.debug("Error while closing rcon connection: %s", e)


class RconConsole:
    """ConsoleBackend speaking the Minecraft RCON protocol via mcrcon."""

    def __init__(self, timeout_s: int = 0):
        self.timeout_s = timeout_s

    def connect(self, host: str, port: int, password: str = RCON_PASSWORD) -> RconSession:
        log.debug("Establishing rcon connection to %s:%s", host, port)
        client = None
        try:
            client = RconClient(host, password, port=port, timeout=self.timeout_s)
            client.connect()
        except RCON_ERRORS as e:
            if client is not None:
                client.disconnect()
            log.debug("Unable to connect to %s:%s: %s", host, port, e)
            raise ProtocolError(f"unable to connect to rcon at {host}:{port}: {e}") from e
        return RconSession(client)
