"""Typed data models for the Claude session monitor."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class AppIdentity(StrEnum):
    """A GUI application that can host a CLI session.

    The value is the name AppleScript knows the application by.
    """

    TERMINAL = "Terminal"
    ITERM = "iTerm"
    ALACRITTY = "Alacritty"
    KITTY = "kitty"
    WARP = "Warp"
    HYPER = "Hyper"
    ZED = "Zed"
    VSCODE = "Visual Studio Code"
    CURSOR = "Cursor"
    WINDSURF = "Windsurf"
    SUBLIME_TEXT = "Sublime Text"
    ATOM = "Atom"


@dataclass(frozen=True)
class ProcessRecord:
    """Command and parent of one process, captured at a single instant."""

    pid: int
    command: str = ""
    parent_pid: int = 0


@dataclass(frozen=True)
class OpenSession:
    """Bring the window hosting ``pid`` to the foreground."""

    pid: int
    project_path: str = ""


@dataclass(frozen=True)
class StopSession:
    """Interrupt the session process, like Ctrl-C."""

    pid: int


@dataclass(frozen=True)
class ResumeSession:
    """Continue ``session_id`` in a fresh CLI process fed with ``prompt``."""

    session_id: str
    prompt: str


SessionAction = OpenSession | StopSession | ResumeSession

