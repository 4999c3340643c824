"""
Session actions: focus the window hosting a session, interrupt it, or
continue it with a new prompt.

Each action is a single side effect with no state kept between calls.
Focusing is best-effort and never fails the caller; interrupting and
resuming raise a SessionActionError when the side effect did not happen.
"""

from __future__ import annotations

import logging
import os
import signal
import subprocess
from pathlib import PurePath

from .config import MonitorConfig, get_config
from .constants import ABANDON_WAIT_TIMEOUT, LAUNCHER_TIMEOUT, OSASCRIPT_TIMEOUT, RESUME_FLAGS
from .errors import ActivationFailure, SignalFailure, SpawnFailure
from .models import AppIdentity, OpenSession, ResumeSession, SessionAction, StopSession
from .process_tree import resolve_owner

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Open / focus
# ---------------------------------------------------------------------------


def _run_launcher(launcher: str, project_path: str) -> None:
    """Open ``project_path`` with an application's own CLI. Raises ActivationFailure."""
    try:
        result = subprocess.run(
            [launcher, project_path],
            capture_output=True,
            text=True,
            timeout=LAUNCHER_TIMEOUT,
            check=False,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        raise ActivationFailure(f"Failed to run {launcher}: {e}") from e
    if result.returncode != 0:
        raise ActivationFailure(
            f"{launcher} exited with status {result.returncode}: {result.stderr.strip()}"
        )


def activate_app(app: AppIdentity) -> None:
    """Bring ``app`` to the foreground via AppleScript. Raises ActivationFailure."""
    # Only AppIdentity values reach the script, so the name is never user input
    script = f'tell application "{AppIdentity(app)}" to activate'
    try:
        result = subprocess.run(
            ["osascript", "-e", script],
            capture_output=True,
            text=True,
            timeout=OSASCRIPT_TIMEOUT,
            check=False,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        raise ActivationFailure(f"Failed to execute osascript: {e}") from e
    if result.returncode != 0:
        raise ActivationFailure(f"osascript failed: {result.stderr.strip()}")


def open_session(
    pid: int, project_path: str = "", config: MonitorConfig | None = None
) -> AppIdentity:
    """
    Focus the terminal or IDE window hosting ``pid``.

    Applications with a launcher CLI (Zed) are asked to open ``project_path``
    directly; if that fails, or for every other application, the app is
    simply activated. Activation errors are logged, never raised.
    Returns the application that was targeted.
    """
    config = config or get_config()
    app = resolve_owner(pid)
    project_name = PurePath(project_path).name if project_path else ""
    logger.info(
        "Opening session PID %d: app=%s project=%s path=%s", pid, app, project_name, project_path
    )

    launcher = config.launchers.get(app)
    if launcher and project_path:
        try:
            _run_launcher(launcher, project_path)
            logger.info("%s launcher opened %s", app, project_path)
            return app
        except ActivationFailure as e:
            logger.warning("%s launcher failed, activating app instead: %s", app, e)

    try:
        activate_app(app)
    except ActivationFailure as e:
        logger.warning("Could not activate %s: %s", app, e)
    return app


# ---------------------------------------------------------------------------
# Stop
# ---------------------------------------------------------------------------


def stop_session(pid: int) -> None:
    """Send SIGINT (Ctrl-C) to ``pid``. Raises SignalFailure if it cannot be delivered."""
    if pid <= 0:
        # 0 and negative ids address whole process groups
        raise SignalFailure(pid, "invalid process id", invalid=True)
    try:
        os.kill(pid, signal.SIGINT)
    except ProcessLookupError as e:
        raise SignalFailure(pid, e.strerror or str(e), not_found=True) from e
    except OverflowError as e:
        raise SignalFailure(pid, str(e), not_found=True) from e
    except OSError as e:
        raise SignalFailure(pid, e.strerror or str(e)) from e
    logger.info("Sent SIGINT to PID %d", pid)


# ---------------------------------------------------------------------------
# Resume
# ---------------------------------------------------------------------------


def _abandon(proc: subprocess.Popen) -> None:
    """Kill and reap a child whose prompt could not be delivered."""
    if proc.stdin is not None:
        try:
            proc.stdin.close()
        except OSError as e:
            logger.debug("Could not close stdin of PID %d: %s", proc.pid, e)
    try:
        proc.kill()
        proc.wait(timeout=ABANDON_WAIT_TIMEOUT)
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.debug("Could not reap PID %d: %s", proc.pid, e)


def resume_session(session_id: str, prompt: str, config: MonitorConfig | None = None) -> int:
    """
    Continue ``session_id`` in a new, detached CLI process and feed it ``prompt``.

    The prompt is followed by a newline and stdin is closed; the child is not
    waited on. Returns the new process's PID.
    """
    config = config or get_config()
    try:
        data = prompt.encode("utf-8")
    except UnicodeEncodeError as e:
        raise SpawnFailure(f"Prompt is not valid UTF-8: {e}") from e

    cmd = [config.claude_command, *RESUME_FLAGS, session_id]
    try:
        proc = subprocess.Popen(  # pylint: disable=consider-using-with
            cmd,
            stdin=subprocess.PIPE,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except OSError as e:
        raise SpawnFailure(f"Failed to spawn {config.claude_command} command: {e}") from e

    if proc.stdin is None:
        _abandon(proc)
        raise SpawnFailure(f"Failed to open stdin for {config.claude_command} process")

    try:
        proc.stdin.write(data)
        proc.stdin.flush()
        proc.stdin.write(b"\n")
        proc.stdin.close()
    except OSError as e:
        _abandon(proc)
        raise SpawnFailure(f"Failed to write prompt to stdin: {e}") from e

    logger.info("Resumed session %s in PID %d", session_id, proc.pid)
    return proc.pid


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------


def dispatch(action: SessionAction, config: MonitorConfig | None = None):
    """Run a SessionAction value and return the underlying action's result."""
    if isinstance(action, OpenSession):
        return open_session(action.pid, action.project_path, config)
    if isinstance(action, StopSession):
        return stop_session(action.pid)
    if isinstance(action, ResumeSession):
        return resume_session(action.session_id, action.prompt, config)
    raise TypeError(f"Unknown session action: {action!r}")
