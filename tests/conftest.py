"""Pytest configuration and fixtures for InstGraph tests."""

import shutil
import tempfile
from pathlib import Path
from typing import Generator, List

import pytest

MSVC_ENTER = (
    "{} : warning C4150: deletion of pointer to incomplete type "
    "'template_profiler::incomplete_enter'; no destructor called"
)
MSVC_EXIT = (
    "{} : warning C4150: deletion of pointer to incomplete type "
    "'template_profiler::incomplete_exit'; no destructor called"
)
GCC_ENTER = "{}: warning: division by zero in 'int template_profiler::enter(int)'"
GCC_EXIT = "{}: warning: division by zero in 'int template_profiler::exit(int)'"


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path_factory, monkeypatch):
    """Point the config file at a throwaway directory for every test."""
    home = tmp_path_factory.mktemp("instgraph_home")
    monkeypatch.setattr("instgraph_cli.config.BASE_DIR", home)
    monkeypatch.setattr("instgraph_cli.config.CONFIG_FILE", home / "config.toml")
    monkeypatch.setattr("instgraph_cli.config.DEFAULT_DIALECT", "msvc")


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    tmp = Path(tempfile.mkdtemp())
    yield tmp
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def logs_path() -> Path:
    """Get path to the sample compiler logs."""
    return Path(__file__).parent / "fixtures" / "logs"


@pytest.fixture
def msvc_log(logs_path: Path) -> Path:
    return logs_path / "msvc_build.log"


@pytest.fixture
def gcc_log(logs_path: Path) -> Path:
    return logs_path / "gcc_build.log"


@pytest.fixture
def msvc_lines(msvc_log: Path) -> List[str]:
    return msvc_log.read_text(encoding="utf-8").splitlines()


@pytest.fixture
def gcc_lines(gcc_log: Path) -> List[str]:
    return gcc_log.read_text(encoding="utf-8").splitlines()


@pytest.fixture
def msvc_enter():
    """Build an msvc enter warning for a ``file(line)`` location."""
    return MSVC_ENTER.format


@pytest.fixture
def msvc_exit():
    return MSVC_EXIT.format


@pytest.fixture
def gcc_enter():
    """Build a gcc enter warning for a ``file:line`` location."""
    return GCC_ENTER.format


@pytest.fixture
def gcc_exit():
    return GCC_EXIT.format
