"""
Centralised constants for the Claude session monitor.

All magic numbers, timeouts, file-system paths, and application lookup tables
live here so they are easy to find, tune, and test.
"""

from __future__ import annotations

import os

from .models import AppIdentity

# ── Network & server ──────────────────────────────────────────────────────────

DEFAULT_PORT = 5112
"""Default HTTP port for the monitor API."""

LOCALHOST = "127.0.0.1"
"""Bind address — the API is local-only."""

# ── File-system paths ─────────────────────────────────────────────────────────

CLAUDE_DIR = os.path.join(os.path.expanduser("~"), ".claude")
NAMES_PATH = os.path.join(CLAUDE_DIR, "session-monitor-names.json")
CONFIG_PATH = os.path.join(CLAUDE_DIR, "session-monitor-config.json")

# ── Supervised CLI ───────────────────────────────────────────────────────────

CLAUDE_COMMAND = "claude"
"""Executable spawned to continue a session."""

RESUME_FLAGS: tuple[str, ...] = ("--continue", "--session-id")
"""Flags placed before the session id when continuing a session."""

# ── Subprocess timeouts (seconds) ────────────────────────────────────────────

PS_TIMEOUT = 5
"""Timeout for a single ``ps`` introspection query."""

LAUNCHER_TIMEOUT = 10
"""Timeout for an application-specific CLI launcher (e.g. the Zed CLI)."""

OSASCRIPT_TIMEOUT = 5
"""Timeout for macOS AppleScript activation commands."""

ABANDON_WAIT_TIMEOUT = 5
"""Timeout for reaping a resumed CLI process that was killed after a failed write."""

# ── Process tree traversal limits ────────────────────────────────────────────

MAX_OWNER_HOPS = 20
"""How many ancestors to inspect before giving up on classification."""

MAX_DIAGNOSTICS_CHAIN = 12
"""Max depth for the diagnostics ancestry chain."""

ROOT_PID = 1
"""Parent ids at or below this value mean the walk reached the tree root."""

DEFAULT_APP = AppIdentity.TERMINAL
"""Identity returned when no ancestor can be classified."""

# ── Application classification ───────────────────────────────────────────────
# Bundle fragments are checked first, in order, as substrings of the lowered
# command. Helper processes often keep only the bundle path.

APP_BUNDLE_FRAGMENTS: tuple[tuple[str, AppIdentity], ...] = (
    ("zed.app", AppIdentity.ZED),
    ("visual studio code.app", AppIdentity.VSCODE),
    ("code.app", AppIdentity.VSCODE),
    ("cursor.app", AppIdentity.CURSOR),
    ("windsurf.app", AppIdentity.WINDSURF),
    ("iterm.app", AppIdentity.ITERM),
    ("iterm2.app", AppIdentity.ITERM),
    ("terminal.app", AppIdentity.TERMINAL),
    ("alacritty.app", AppIdentity.ALACRITTY),
    ("kitty.app", AppIdentity.KITTY),
    ("warp.app", AppIdentity.WARP),
    ("hyper.app", AppIdentity.HYPER),
    ("sublime text.app", AppIdentity.SUBLIME_TEXT),
)

APP_BASE_NAMES: dict[str, AppIdentity] = {
    # Terminals
    "terminal": AppIdentity.TERMINAL,
    "iterm2": AppIdentity.ITERM,
    "iterm": AppIdentity.ITERM,
    "alacritty": AppIdentity.ALACRITTY,
    "kitty": AppIdentity.KITTY,
    "warp": AppIdentity.WARP,
    "hyper": AppIdentity.HYPER,
    # IDEs
    "zed": AppIdentity.ZED,
    "zed-editor": AppIdentity.ZED,
    "code": AppIdentity.VSCODE,
    "code helper": AppIdentity.VSCODE,
    "electron": AppIdentity.VSCODE,
    "cursor": AppIdentity.CURSOR,
    "windsurf": AppIdentity.WINDSURF,
    # Other editors
    "sublime_text": AppIdentity.SUBLIME_TEXT,
    "subl": AppIdentity.SUBLIME_TEXT,
    "atom": AppIdentity.ATOM,
}
"""Exact (lower-cased) executable base names."""

# ── Application launchers ────────────────────────────────────────────────────

APP_LAUNCHERS: dict[AppIdentity, str] = {
    AppIdentity.ZED: "/Applications/Zed.app/Contents/MacOS/cli",
}
"""Identities with a CLI that opens/focuses a project path directly."""
