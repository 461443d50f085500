from __future__ import annotations


class MccError(Exception):
    """Base class for failures reported to the user."""


class ConfigError(MccError):
    pass


class ContainerRuntimeError(MccError):
    """A Docker call failed or returned data we cannot interpret."""


class StateConflictError(MccError):
    def __init__(self, operation: str, state: object) -> None:
        super().__init__(f"cannot {operation} while the container is {state}")
        self.operation = operation
        self.state = state


class FilesystemError(MccError):
    pass


class ProtocolError(MccError):
    """RCON connect or command failure."""


class ResolutionError(MccError):
    """A datapack source path does not exist."""


class InputError(MccError):
    pass
