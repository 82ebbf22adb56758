"""Launch a Python target under debugpy and relay its output."""

import logging
import os
import shutil
import subprocess
import sys
from concurrent.futures import Future
from pathlib import Path

from .bootstrap import BANNER
from .config import LaunchConfig
from .errors import ChildProcessFailed, InspectError, LaunchError, TargetNotFoundError
from .ports import claim_open_port, release_port
from .streams import BannerFilter, relay_chunks, relay_lines, start_daemon

logger = logging.getLogger(__name__)

BOOTSTRAP = str(Path(__file__).with_name("bootstrap.py"))

# Seconds to let the relays drain after the child exits. A grandchild that
# inherited the pipes can keep them open long after that.
DRAIN_TIMEOUT = 5.0


def resolve_target(target, search_path=None):
    """Return the absolute path of ``target``.

    A bare name is looked up on ``search_path`` (defaults to ``PATH``); the
    file only has to exist since the interpreter runs it, not the OS.
    """
    target = os.fspath(target)
    if not os.path.dirname(target):
        found = shutil.which(target, mode=os.F_OK, path=search_path)
        if found is None:
            raise TargetNotFoundError(target)
        logger.debug("Resolved %s to %s", target, found)
        return os.path.abspath(found)

    if not os.path.isfile(target):
        raise TargetNotFoundError(target)
    return os.path.abspath(target)


def build_command(script, port, args, config):
    command = [
        config.python,
        "-u",
        "-Xfrozen_modules=off",
        BOOTSTRAP,
        "--host",
        config.host,
        "--port",
        str(port),
    ]
    if config.wait_for_client:
        command.append("--wait-for-client")
    command.append(script)
    command.extend(args)
    return command


def child_env():
    env = dict(os.environ)
    env["PYTHONIOENCODING"] = "utf-8"
    env["PYDEVD_DISABLE_FILE_VALIDATION"] = "1"
    return env


def _supervise(proc, port, relays, future):
    try:
        returncode = proc.wait()
    finally:
        release_port(port)
    for relay in relays:
        relay.join(DRAIN_TIMEOUT)
        if relay.is_alive():
            logger.debug("%s still open after child %d exited", relay.name, proc.pid)
    logger.debug("Child %d exited with %d", proc.pid, returncode)
    if returncode == 0:
        future.set_result(None)
    else:
        future.set_exception(ChildProcessFailed(returncode))


def launch(target, *args, config=None, stdout=None, stderr=None):
    """Start ``target`` under debugpy and return a future for its exit.

    The future resolves to ``None`` when the child exits 0 and fails with
    :class:`ChildProcessFailed` otherwise. Resolution and port errors fail
    the future before anything is spawned.
    """
    config = config or LaunchConfig()
    stdout = stdout if stdout is not None else sys.stdout
    stderr = stderr if stderr is not None else sys.stderr
    future = Future()
    future.set_running_or_notify_cancel()

    try:
        script = resolve_target(target, config.search_dirs())
        port = claim_open_port(config.port, config.host, config.max_attempts)
    except InspectError as e:
        future.set_exception(e)
        return future

    command = build_command(script, port, [str(a) for a in args], config)
    logger.debug("Spawning %s", command)
    try:
        proc = subprocess.Popen(
            command,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            env=child_env(),
        )
    except OSError as e:
        release_port(port)
        future.set_exception(LaunchError(f"Failed to spawn {command[0]}: {e}"))
        return future

    keep = BannerFilter(BANNER.format(host=config.host, port=port))
    relays = [
        start_daemon(relay_chunks, proc.stdout, stdout, name=f"stdout-{proc.pid}"),
        start_daemon(relay_lines, proc.stderr, stderr, keep, name=f"stderr-{proc.pid}"),
    ]
    start_daemon(_supervise, proc, port, relays, future, name=f"supervise-{proc.pid}")
    return future


def inspect(target, *args, config=None, stdout=None, stderr=None):
    """Run ``target`` under debugpy and block until it exits.

    Raises :class:`ChildProcessFailed` on a non-zero exit.
    """
    launch(target, *args, config=config, stdout=stdout, stderr=stderr).result()
