from __future__ import annotations

import logging
from typing import Protocol

from .errors import InputError


log = logging.getLogger(__name__)


class LineInput(Protocol):
    def get_line(self, prompt: str) -> str | None:
        """Return the next line, or None once the user is done (EOF / Ctrl-C)."""
        ...


class TerminalInput:
    """Reads from the terminal; history is kept for the session when readline is available."""

    def __init__(self) -> None:
        try:
            import readline  # noqa: F401  (hooks line editing and history into input())
        except ImportError:
            log.debug("readline unavailable, console history disabled")

    def get_line(self, prompt: str) -> str | None:
        try:
            return input(prompt)
        except (EOFError, KeyboardInterrupt):
            # leave the cursor on a fresh line after ^D / ^C
            print()
            return None
        except (OSError, ValueError) as e:
            # ValueError covers undecodable bytes on stdin
            log.debug("Encountered a readline error: %s", e)
            raise InputError(f"unable to read input: {e}") from e
