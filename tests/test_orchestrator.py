from pathlib import Path

import pytest
from conftest import make_config
from fakes import FakeConsole, FakeContainerBackend, FakeFilesystem, FakeInput

from mcc.console import ConsoleSession
from mcc.containers import ContainerReconciler
from mcc.datapacks import DatapackReconciler
from mcc.errors import ContainerRuntimeError, StateConflictError
from mcc.orchestrator import Orchestrator
from mcc.state import GameState, NotFound, Running, Stopped


class Rig:
    def __init__(self, lines=(), health_on_start="healthy", files=None):
        self.backend = FakeContainerBackend(health_on_start=health_on_start)
        self.fs = FakeFilesystem(files=files)
        self.console = FakeConsole(responses={"reload": "Reloading!"})
        self.out = []
        self.orch = Orchestrator(
            containers=ContainerReconciler(self.backend),
            fs=self.fs,
            datapacks=DatapackReconciler(self.fs, Path("data"), Path("datapacks")),
            console=ConsoleSession(self.console, FakeInput(list(lines)), output=self.out.append),
            data_dir=Path("data"),
        )

    def ops(self):
        return [op for op, _ in self.backend.calls if op != "inspect"]


def test_up_from_nothing_creates_then_starts(config):
    rig = Rig()
    rig.orch.up(config)
    assert rig.ops() == ["pull", "create", "start"]
    assert rig.backend.specs["name"].binds == ["/fs/data:/data"]
    assert rig.fs.file_exists(Path("data/server.properties"))
    assert rig.fs.directory_exists(Path("data/world/datapacks"))
    assert rig.orch.status(config) == Running(GameState.RUNNING)


def test_up_resumes_a_created_container(config):
    rig = Rig()
    rig.backend.set_status("name", "created")
    rig.orch.up(config)
    assert rig.ops() == ["start"]


def test_up_while_running_conflicts(config):
    rig = Rig()
    rig.backend.set_status("name", "running", "healthy")
    with pytest.raises(StateConflictError):
        rig.orch.up(config)
    assert rig.ops() == []


def test_create_requires_not_found(config):
    rig = Rig()
    rig.backend.set_status("name", "exited")
    with pytest.raises(StateConflictError) as exc:
        rig.orch.create(config)
    assert exc.value.operation == "create"
    assert exc.value.state == Stopped()


def test_start_writes_properties_and_syncs_datapacks_before_starting():
    config = make_config(datapacks={"a": "a.zip"})
    rig = Rig(files={"datapacks/a.zip": "a", "data/server.properties": "motd=mine"})
    rig.backend.set_status("name", "exited")
    rig.orch.start(config)

    assert rig.ops() == ["start"]
    props = rig.fs.read_text(Path("data/server.properties")).splitlines()
    assert props[0] == "motd=mine"
    assert "enable-rcon=true" in props
    assert rig.fs.names_in("data/world/datapacks") == {"a.zip"}


def test_start_failure_is_reported(config):
    rig = Rig()
    rig.backend.set_status("name", "exited")
    rig.backend.fail_on.add("start")
    with pytest.raises(ContainerRuntimeError):
        rig.orch.start(config)


@pytest.mark.parametrize("status,health", [("running", "healthy"), ("running", "starting"), ("restarting", None)])
def test_stop_from_any_running_state(config, status, health):
    rig = Rig()
    rig.backend.set_status("name", status, health)
    rig.orch.stop(config)
    assert rig.ops() == ["stop"]


def test_stop_when_stopped_conflicts(config):
    rig = Rig()
    rig.backend.set_status("name", "exited")
    with pytest.raises(StateConflictError):
        rig.orch.stop(config)


def test_destroy_while_running_conflicts(config):
    rig = Rig()
    rig.backend.set_status("name", "running", "healthy")
    with pytest.raises(StateConflictError):
        rig.orch.destroy(config)
    assert rig.ops() == []


def test_destroy_with_unknown_state_conflicts(config):
    rig = Rig()
    rig.backend.set_status("name", None)
    with pytest.raises(StateConflictError):
        rig.orch.destroy(config)


def test_down_stops_then_destroys(config):
    rig = Rig()
    rig.backend.set_status("name", "running", "healthy")
    rig.orch.down(config)
    assert rig.ops() == ["stop", "delete"]
    assert rig.orch.status(config) == NotFound()


def test_down_on_stopped_container_only_destroys(config):
    rig = Rig()
    rig.backend.set_status("name", "exited")
    rig.orch.down(config)
    assert rig.ops() == ["delete"]


def test_down_stop_failure_aborts_destroy(config):
    rig = Rig()
    rig.backend.set_status("name", "running", "healthy")
    rig.backend.fail_on.add("stop")
    with pytest.raises(ContainerRuntimeError):
        rig.orch.down(config)
    assert "delete" not in rig.ops()


def test_down_when_missing_is_a_no_op(config):
    rig = Rig()
    rig.orch.down(config)
    assert rig.ops() == []


def test_destroy_while_being_removed_is_a_no_op(config):
    rig = Rig()
    rig.backend.set_status("name", "removing")
    rig.orch.destroy(config)
    assert rig.ops() == []


def test_console_runs_session_against_published_port(config):
    rig = Rig(lines=["say hi", None])
    rig.orch.up(config)
    rig.orch.console_session(config)
    assert rig.console.connections == [("127.0.0.1", 49153, "minecraft")]
    assert rig.console.commands == ["say hi"]


def test_console_refused_while_server_is_starting(config):
    rig = Rig(lines=["list", None], health_on_start="starting")
    rig.orch.up(config)
    with pytest.raises(StateConflictError):
        rig.orch.console_session(config)
    assert rig.console.connections == []


def test_datapack_sync_reloads_a_running_server():
    config = make_config(datapacks={"a": "a.zip"})
    rig = Rig(files={"datapacks/a.zip": "a"})
    rig.orch.up(config)
    result = rig.orch.sync_datapacks(config)
    assert result.installed == ["a"]
    assert rig.console.commands == ["reload"]


def test_datapack_sync_on_stopped_server_does_not_connect():
    config = make_config(datapacks={"a": "a.zip"})
    rig = Rig(files={"datapacks/a.zip": "a"})
    rig.orch.sync_datapacks(config)
    assert rig.fs.names_in("data/world/datapacks") == {"a.zip"}
    assert rig.console.connections == []
