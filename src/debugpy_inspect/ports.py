"""Pick a port for the debugpy listener by probing upward from a start port."""

from __future__ import annotations

import logging
import socket
import threading

from .errors import InvalidPortError, PortExhaustedError

logger = logging.getLogger(__name__)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 5678
DEFAULT_MAX_ATTEMPTS = 256
MAX_PORT = 65535

# Ports handed to children of this process that have not exited yet. The
# probe socket is released before the child binds, so a bind check alone
# would hand the same port to launches started close together.
_claimed = set()
_claimed_lock = threading.Lock()


def is_port_open(port: int, host: str = DEFAULT_HOST) -> bool:
    """Return True if a TCP socket can bind ``(host, port)`` right now."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        try:
            s.bind((host, port))
        except OSError as exc:
            logger.debug("Port %s:%d unavailable: %s", host, port, exc)
            return False
    return True


def _scan(start, max_attempts):
    if not 1 <= start <= MAX_PORT:
        raise InvalidPortError(f"start port out of range: {start}")
    if max_attempts < 1:
        raise InvalidPortError(f"max_attempts must be positive: {max_attempts}")
    return range(start, min(start + max_attempts, MAX_PORT + 1))


def find_open_port(
    start: int = DEFAULT_PORT,
    host: str = DEFAULT_HOST,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> int:
    """Return the first port at or above ``start`` that binds on ``host``.

    The probe socket is closed before returning so the child can bind the
    port itself; another process may take it in between.
    """
    candidates = _scan(start, max_attempts)
    for port in candidates:
        if is_port_open(port, host):
            logger.debug("Selected port %s:%d", host, port)
            return port
    raise PortExhaustedError(start, len(candidates))


def claim_open_port(
    start: int = DEFAULT_PORT,
    host: str = DEFAULT_HOST,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> int:
    """Like :func:`find_open_port`, but skip and record ports already claimed.

    Pair every call with :func:`release_port` once the child has exited.
    """
    candidates = _scan(start, max_attempts)
    with _claimed_lock:
        for port in candidates:
            if port not in _claimed and is_port_open(port, host):
                _claimed.add(port)
                logger.debug("Claimed port %s:%d", host, port)
                return port
    raise PortExhaustedError(start, len(candidates))


def release_port(port: int) -> None:
    with _claimed_lock:
        _claimed.discard(port)
