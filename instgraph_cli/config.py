"""Configuration paths and defaults for InstGraph."""

from __future__ import annotations

import os
from pathlib import Path

BASE_DIR = Path(os.environ.get("INSTGRAPH_HOME", str(Path.home() / ".instgraph"))).expanduser()
CONFIG_FILE = BASE_DIR / "config.toml"
COUNT_COLUMN_WIDTH = 10
REPORT_SUFFIX = ".profile.txt"

# Load configuration from TOML file (if available)
try:
    from .config_manager import load_config
    _profile_config = load_config()
except ImportError:
    _profile_config = {}

# Compiler dialect — set via `ig set-dialect`, or INSTGRAPH_DIALECT for one-off runs
DEFAULT_DIALECT = os.environ.get("INSTGRAPH_DIALECT") or _profile_config.get("dialect", "msvc")
DEFAULT_CALL_GRAPH = bool(_profile_config.get("call_graph", True))
DEFAULT_TOP = int(_profile_config.get("top", 20))


def ensure_base_dirs() -> None:
    """Create the configuration directory if needed."""
    BASE_DIR.mkdir(parents=True, exist_ok=True)
