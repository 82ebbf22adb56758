"""Child-side entry point: start the debugpy listener, then run the target.

Run as a plain script by the launcher, so it must not import the package.
"""

import argparse
import contextlib
import os
import runpy
import sys

import debugpy

BANNER = "Debugger listening on {host}:{port}"


@contextlib.contextmanager
def detached_stdio():
    """Point fds 1 and 2 at devnull while the debugpy adapter is spawned.

    The adapter inherits our stdio and may outlive us; if it kept the
    launcher's pipes open the relay would never see EOF.
    """
    sys.stdout.flush()
    sys.stderr.flush()
    saved = [os.dup(1), os.dup(2)]
    devnull = os.open(os.devnull, os.O_WRONLY)
    try:
        os.dup2(devnull, 1)
        os.dup2(devnull, 2)
        yield
    finally:
        os.dup2(saved[0], 1)
        os.dup2(saved[1], 2)
        for fd in (devnull, *saved):
            os.close(fd)


def build_parser():
    parser = argparse.ArgumentParser(description="Run a Python target under debugpy")
    parser.add_argument("--host", default="127.0.0.1", help="Address debugpy listens on")
    parser.add_argument("--port", type=int, required=True, help="Port debugpy listens on")
    parser.add_argument(
        "--wait-for-client",
        action="store_true",
        help="Block until a debugger attaches before running the target",
    )
    parser.add_argument("target", help="Python file to execute as __main__")
    parser.add_argument("args", nargs=argparse.REMAINDER, help="Arguments forwarded to the target")
    return parser


def main(argv=None):
    parsed = build_parser().parse_args(argv)

    try:
        with detached_stdio():
            debugpy.listen((parsed.host, parsed.port))
    except (RuntimeError, OSError) as e:
        print(f"Failed to listen on {parsed.host}:{parsed.port}: {e}", file=sys.stderr, flush=True)
        sys.exit(1)

    # The launcher drops exactly this line from the relayed stderr.
    print(BANNER.format(host=parsed.host, port=parsed.port), file=sys.stderr, flush=True)

    if parsed.wait_for_client:
        debugpy.wait_for_client()

    target = os.path.abspath(parsed.target)
    sys.argv = [target, *parsed.args]
    sys.path[0] = os.path.dirname(target)
    runpy.run_path(target, run_name="__main__")


if __name__ == "__main__":
    main()
