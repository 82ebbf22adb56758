"""Exceptions raised while launching a target under debugpy."""


class InspectError(Exception):
    """Base class for every launcher failure."""


class ConfigError(InspectError):
    pass


class TargetNotFoundError(InspectError):
    def __init__(self, target):
        super().__init__(f"Target not found: {target}")
        self.target = target


class PortExhaustedError(InspectError):
    def __init__(self, start, attempts):
        super().__init__(f"No open port found in {attempts} attempts starting at {start}")
        self.start = start
        self.attempts = attempts


class LaunchError(InspectError):
    pass


class ChildProcessFailed(InspectError):
    def __init__(self, returncode):
        super().__init__(f"Child process exited with {returncode}")
        self.returncode = returncode


class InvalidPortError(InspectError, ValueError):
    pass
