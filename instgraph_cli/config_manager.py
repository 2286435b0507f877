"""Configuration manager for InstGraph using TOML files."""

from __future__ import annotations

from typing import Any, Dict

try:
    import toml
except ImportError:
    toml = None  # type: ignore

from . import config


DEFAULT_PROFILE: Dict[str, Any] = {
    "dialect": "msvc",
    "call_graph": True,
    "top": 20,
}


def load_full_config() -> Dict[str, Any]:
    """Load the entire TOML config (all sections)."""
    if not config.CONFIG_FILE.exists() or toml is None:
        return {}
    try:
        with open(config.CONFIG_FILE, "r") as f:
            return toml.load(f)
    except (OSError, toml.TomlDecodeError):
        return {}


def load_config() -> Dict[str, Any]:
    """Load the ``[profile]`` section merged over the defaults.

    Returns:
        Profile settings. Falls back to :data:`DEFAULT_PROFILE` if the file
        is missing, unreadable, or ``toml`` is not installed.
    """
    profile = DEFAULT_PROFILE.copy()
    section = load_full_config().get("profile", {})
    if isinstance(section, dict):
        profile.update({k: v for k, v in section.items() if k in DEFAULT_PROFILE})
    return profile


def save_config(**values: Any) -> bool:
    """Update the ``[profile]`` section, preserving other sections.

    Args:
        **values: Profile keys to set (``dialect``, ``call_graph``, ``top``).

    Returns:
        True if saved successfully, False otherwise.
    """
    if toml is None:
        return False

    unknown = set(values) - set(DEFAULT_PROFILE)
    if unknown:
        raise KeyError(f"Unknown profile setting(s): {', '.join(sorted(unknown))}")

    full = load_full_config()
    profile = full.get("profile", {})
    profile.update(values)
    full["profile"] = profile

    config.ensure_base_dirs()
    try:
        with open(config.CONFIG_FILE, "w") as f:
            toml.dump(full, f)
        return True
    except OSError:
        return False
