from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from mcc import __version__
from mcc.config import DEFAULT_CONFIG_FILE, Config, load_config
from mcc.errors import ConfigError, MccError
from mcc.logs import init_logging
from mcc.orchestrator import Orchestrator


log = logging.getLogger("mcc.cli")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="mcc", description="Manage a containerized Minecraft server")
    p.add_argument("-f", "--file", default=DEFAULT_CONFIG_FILE, metavar="FILE", help="Config file to use")
    p.add_argument("-q", "--quiet", action="store_true", help="Silence all output except errors")
    p.add_argument("-v", "--verbose", action="count", default=0, help="Print additional output")
    p.add_argument("--debug", action="store_true", help=argparse.SUPPRESS)
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("up", help="Create and start the server container")
    sub.add_parser("down", help="Stop and destroy the server container")
    sub.add_parser("create", help="Create the server container")
    sub.add_parser("destroy", help="Destroy the server container")
    sub.add_parser("start", help="Start the server container")
    sub.add_parser("stop", help="Stop the server container")
    sub.add_parser("status", help="Display the container status")
    sub.add_parser("console", help="Connect a console to the server")

    s_dp = sub.add_parser("datapacks", help="Manage datapacks for the server")
    dp_sub = s_dp.add_subparsers(dest="datapacks_cmd", required=True)
    dp_sub.add_parser("sync", help="Sync datapacks to the server")

    return p


def operation_name(args: argparse.Namespace) -> str:
    if args.cmd == "datapacks":
        return f"datapacks {args.datapacks_cmd}"
    return args.cmd


def dispatch(orch: Orchestrator, args: argparse.Namespace, config: Config) -> None:
    op = operation_name(args)
    handlers = {
        "up": orch.up,
        "down": orch.down,
        "create": orch.create,
        "destroy": orch.destroy,
        "start": orch.start,
        "stop": orch.stop,
        "status": orch.status,
        "console": orch.console_session,
        "datapacks sync": orch.sync_datapacks,
    }
    handlers[op](config)


def main(argv: list[str] | None = None, orchestrator: Orchestrator | None = None) -> int:
    args = build_parser().parse_args(argv)
    init_logging(debug=args.debug, quiet=args.quiet, verbosity=args.verbose)

    op = operation_name(args)
    config_path = Path(args.file)
    try:
        config = load_config(config_path)
    except ConfigError as e:
        log.error("Unable to load config file: %s", e)
        return 1

    # data/ and datapacks/ live next to the config file
    parent = config_path.parent
    if str(parent) not in ("", "."):
        log.debug("Changing to config file directory: %s", parent)
        try:
            os.chdir(parent)
        except OSError as e:
            log.error("Unable to change to config file directory: %s", e)
            return 1
    log.debug("Running from the directory %s", os.getcwd())

    try:
        orch = orchestrator or Orchestrator.from_settings()
        dispatch(orch, args, config)
    except MccError as e:
        log.error("%s failed: %s", op, e)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
