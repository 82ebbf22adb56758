"""Command-line entry point: ``debugpy-inspect [options] <target> [args...]``."""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys

from .config import load_config
from .errors import ChildProcessFailed, InspectError
from .launcher import inspect

logger = logging.getLogger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="debugpy-inspect",
        description="Run a Python script with the debugpy listener on a free port",
    )
    parser.add_argument(
        "-p",
        "--path",
        action="append",
        default=[],
        metavar="DIR",
        help="Directory searched before PATH for bare target names (repeatable)",
    )
    parser.add_argument("--host", help="Address debugpy listens on")
    parser.add_argument("--port", type=int, help="First port to probe")
    parser.add_argument("--max-attempts", type=int, help="Number of ports to probe")
    parser.add_argument("--wait", action="store_true", help="Wait for a debugger to attach")
    parser.add_argument("-c", "--config", help="YAML config file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log launcher activity to stderr")
    parser.add_argument("target", help="Script path, or a name found on the search path")
    parser.add_argument("args", nargs=argparse.REMAINDER, help="Arguments forwarded to the target")
    return parser


def main(argv=None):
    parsed = build_parser().parse_args(argv)
    if parsed.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr, format="%(name)s: %(message)s")

    try:
        config = load_config(parsed.config)
        overrides = {
            key: value
            for key, value in (
                ("host", parsed.host),
                ("port", parsed.port),
                ("max_attempts", parsed.max_attempts),
            )
            if value is not None
        }
        if parsed.path:
            overrides["search_path"] = (*parsed.path, *config.search_path)
        if parsed.wait:
            overrides["wait_for_client"] = True
        config = dataclasses.replace(config, **overrides)

        inspect(parsed.target, *parsed.args, config=config)
    except ChildProcessFailed as e:
        logger.debug("%s", e)
        # a signal-terminated child reports a negative code
        return e.returncode if e.returncode > 0 else 1
    except InspectError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0
