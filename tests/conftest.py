import os as _os
import sys

import pytest

# Ensure project root is importable (so `import cli` works without installing the package)
_project_root = _os.path.dirname(_os.path.dirname(__file__))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

_tests_dir = _os.path.dirname(__file__)
if _tests_dir not in sys.path:
    sys.path.insert(0, _tests_dir)

from mcc.config import Config  # noqa: E402


def make_config(**overrides) -> Config:
    data = {
        "name": "name",
        "host": "0.0.0.0",
        "port": 25565,
        "server": {"version": "1.17.1"},
        "world": {"name": "world", "gamemode": "survival", "difficulty": "easy", "allow_flight": False},
    }
    world = overrides.pop("world", None)
    if world:
        data["world"] = {**data["world"], **world}
    server = overrides.pop("server", None)
    if server:
        data["server"] = {**data["server"], **server}
    data.update(overrides)
    return Config.model_validate(data)


@pytest.fixture
def config() -> Config:
    return make_config()


@pytest.fixture(autouse=True)
def restore_logging():
    """init_logging() replaces the root handlers; put pytest's back afterwards."""
    import logging

    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
