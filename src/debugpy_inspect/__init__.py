"""Run Python scripts under the debugpy listener on a free port."""

from .config import LaunchConfig, load_config
from .errors import (
    ChildProcessFailed,
    ConfigError,
    InspectError,
    InvalidPortError,
    LaunchError,
    PortExhaustedError,
    TargetNotFoundError,
)
from .launcher import inspect, launch, resolve_target
from .ports import claim_open_port, find_open_port, release_port

__all__ = [
    "ChildProcessFailed",
    "ConfigError",
    "InspectError",
    "LaunchConfig",
    "InvalidPortError",
    "LaunchError",
    "PortExhaustedError",
    "TargetNotFoundError",
    "claim_open_port",
    "find_open_port",
    "inspect",
    "launch",
    "load_config",
    "release_port",
    "resolve_target",
]
