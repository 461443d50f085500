from __future__ import annotations

import logging
from typing import Callable, Iterable

from .line_input import LineInput
from .properties import RCON_PASSWORD
from .rcon import ConsoleBackend


log = logging.getLogger(__name__)


def prompt_for(name: str) -> str:
    return f"[{name}] > "


class ConsoleSession:
    """Read / execute / print loop against a server's RCON endpoint.

    There is no deadline on a command round-trip unless the backend imposes
    one; the only way out of the loop is end-of-input or an error.
    """

    def __init__(
        self,
        backend: ConsoleBackend,
        line_input: LineInput | None = None,
        output: Callable[[str], None] = print,
    ):
        self.backend = backend
        self.line_input = line_input
        self.output = output

    def run_interactive(self, name: str, host: str, port: int) -> int:
        """Run until end-of-input. Returns the number of commands sent."""
        if self.line_input is None:
            raise ValueError("an interactive session needs a line input")

        session = self.backend.connect(host, port, RCON_PASSWORD)
        sent = 0
        try:
            while True:
                line = self.line_input.get_line(prompt_for(name))
                if line is None:
                    break
                response = session.execute(line)
                sent += 1
                if response:
                    self.output(response)
        finally:
            session.close()
        log.debug("Console session for %s closed after %d command(s)", name, sent)
        return sent

    def run_commands(self, host: str, port: int, commands: Iterable[str]) -> list[str]:
        session = self.backend.connect(host, port, RCON_PASSWORD)
        try:
            return [session.execute(command) for command in commands]
        finally:
            session.close()
