"""Optional user configuration for the session monitor.

Settings are read from ~/.claude/session-monitor-config.json when it exists.
Every key is optional; anything missing or malformed falls back to the
defaults in ``constants``.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field

from .constants import APP_LAUNCHERS, CLAUDE_COMMAND, CONFIG_PATH, NAMES_PATH
from .models import AppIdentity

logger = logging.getLogger(__name__)


@dataclass
class MonitorConfig:
    """Resolved settings used by the session actions and the API."""

    claude_command: str = CLAUDE_COMMAND
    names_path: str = NAMES_PATH
    launchers: dict[AppIdentity, str] = field(default_factory=lambda: dict(APP_LAUNCHERS))


# Loaded once on first call to get_config()
_config: MonitorConfig | None = None


def _parse_launchers(raw) -> dict[AppIdentity, str]:
    launchers = dict(APP_LAUNCHERS)
    if not isinstance(raw, dict):
        return launchers
    for app_name, launcher in raw.items():
        try:
            identity = AppIdentity(app_name)
        except ValueError:
            logger.warning("Ignoring launcher for unknown application %r", app_name)
            continue
        if launcher:
            launchers[identity] = str(launcher)
        else:
            # An empty value disables the launcher for that application
            launchers.pop(identity, None)
    return launchers


def load_config(path: str | None = None) -> MonitorConfig:
    """Load settings from ``path`` (default: ~/.claude/session-monitor-config.json).

    Expected format:
    {
        "claude_command": "/opt/homebrew/bin/claude",
        "names_path": "~/.claude/session-monitor-names.json",
        "launchers": {
            "Zed": "/Applications/Zed.app/Contents/MacOS/cli"
        }
    }
    """
    path = path or CONFIG_PATH
    data: dict = {}
    if os.path.exists(path):
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable config %s: %s", path, e)
            data = {}
    if not isinstance(data, dict):
        data = {}

    config = MonitorConfig()
    if data.get("claude_command"):
        config.claude_command = str(data["claude_command"])
    if data.get("names_path"):
        config.names_path = os.path.expanduser(str(data["names_path"]))
    config.launchers = _parse_launchers(data.get("launchers"))
    return config


def get_config() -> MonitorConfig:
    """Process-wide settings, loaded lazily from the default path."""
    global _config
    if _config is None:
        _config = load_config()
    return _config
