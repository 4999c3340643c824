"""
Map a raw process command string to the GUI application it belongs to.

Matching is table-driven (see ``constants.APP_BUNDLE_FRAGMENTS`` and
``constants.APP_BASE_NAMES``): bundle-path fragments first, then the exact
executable base name. No I/O, no state.
"""

from __future__ import annotations

from .constants import APP_BASE_NAMES, APP_BUNDLE_FRAGMENTS
from .models import AppIdentity


def _base_name(command: str) -> str:
    """Final ``/``-separated segment of a command path."""
    return command.rsplit("/", 1)[-1]


def match_bundle(command: str) -> AppIdentity | None:
    """Return the identity whose ``.app`` bundle fragment appears in ``command``."""
    lowered = command.lower()
    for fragment, identity in APP_BUNDLE_FRAGMENTS:
        if fragment in lowered:
            return identity
    return None


def match_base_name(command: str) -> AppIdentity | None:
    """Return the identity whose executable name equals the command's base name."""
    return APP_BASE_NAMES.get(_base_name(command).lower())


def classify(command: str | None) -> AppIdentity | None:
    """
    Classify a command string, e.g. ``/Applications/Zed.app/Contents/MacOS/cli``.
    Returns None when the command belongs to no known application.
    """
    if not command or not command.strip():
        return None
    return match_bundle(command) or match_base_name(command)
