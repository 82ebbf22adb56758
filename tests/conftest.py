import socket
from pathlib import Path

import pytest

from debugpy_inspect import LaunchConfig

TESTS_DIR = Path(__file__).parent
FIXTURES = TESTS_DIR / "fixtures"
SRC_DIR = TESTS_DIR.parent / "src"

SUCCESS = str(FIXTURES / "success")
ERROR = str(FIXTURES / "error")


@pytest.fixture
def fixtures_config() -> LaunchConfig:
    """Config whose search path finds the fixture scripts by bare name."""
    return LaunchConfig(search_path=(str(FIXTURES),))


@pytest.fixture
def held_port():
    """A localhost port with a listener bound to it for the whole test."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        s.listen()
        yield s.getsockname()[1]
