"""
Process ancestry walker.

Resolves which GUI application (terminal emulator or IDE) owns a process by
walking up the live process tree with ``ps`` and classifying each ancestor's
command. The tree can change between queries; every hop is treated as an
independent snapshot and the walk is bounded by ``MAX_OWNER_HOPS``.
"""

from __future__ import annotations

import logging
import subprocess

from .classifier import classify
from .constants import DEFAULT_APP, MAX_DIAGNOSTICS_CHAIN, MAX_OWNER_HOPS, PS_TIMEOUT, ROOT_PID
from .errors import QueryFailure
from .models import AppIdentity, ProcessRecord

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Introspection primitives
# ---------------------------------------------------------------------------


def _ps_query(pid: int, field: str) -> tuple[bool, str]:
    """Run ``ps`` for one column of ``pid``. Returns (process found, stripped output)."""
    try:
        result = subprocess.run(
            ["ps", "-o", f"{field}=", "-p", str(pid)],
            capture_output=True,
            text=True,
            timeout=PS_TIMEOUT,
            check=False,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        raise QueryFailure(f"Failed to execute ps for PID {pid}: {e}") from e
    if result.returncode != 0:
        logger.debug("ps -o %s= -p %d exited %d", field, pid, result.returncode)
    return result.returncode == 0, result.stdout.strip()


def _ps_field(pid: int, field: str) -> str:
    """Return a single ``ps`` output column for ``pid`` ("" if the process is gone)."""
    return _ps_query(pid, field)[1]


def get_process_command(pid: int) -> str:
    """Command name (possibly a full bundle path) of ``pid``."""
    return _ps_field(pid, "comm")


def get_parent_pid(pid: int) -> int:
    """Parent PID of ``pid``. Unreadable output is reported as the tree root."""
    raw = _ps_field(pid, "ppid")
    try:
        return int(raw)
    except ValueError:
        return ROOT_PID


def read_process(pid: int) -> ProcessRecord:
    """Snapshot the command and parent of ``pid``."""
    return ProcessRecord(pid=pid, command=get_process_command(pid), parent_pid=get_parent_pid(pid))


# ---------------------------------------------------------------------------
# Owner resolution
# ---------------------------------------------------------------------------


def _walk_to_owner(pid: int) -> AppIdentity | None:
    """Walk ancestors of ``pid`` until one classifies. Raises QueryFailure."""
    current = pid
    for hop in range(MAX_OWNER_HOPS):
        command = get_process_command(current)
        logger.debug("Step %d: PID %d -> comm: %s", hop, current, command)

        app = classify(command)
        if app is not None:
            logger.debug("Found app: %s", app)
            return app

        parent = get_parent_pid(current)
        logger.debug("Parent PID: %d", parent)
        if parent <= ROOT_PID:
            # The root's own command may still be the GUI host
            app = classify(command)
            if app is not None:
                logger.debug("Found app at root: %s", app)
            return app
        current = parent

    logger.debug("Gave up after %d hops from PID %d", MAX_OWNER_HOPS, pid)
    return None


def resolve_owner(pid: int) -> AppIdentity:
    """
    Return the GUI application hosting ``pid``.

    Never fails: when no ancestor is recognised, the hop limit is reached, or
    ``ps`` cannot be run, the default identity (Terminal) is returned.
    """
    try:
        app = _walk_to_owner(pid)
    except QueryFailure as e:
        logger.warning("Could not inspect process tree of PID %d: %s", pid, e)
        app = None
    if app is None:
        logger.debug("Falling back to %s for PID %d", DEFAULT_APP, pid)
        return DEFAULT_APP
    return app


def describe_ancestry(pid: int, max_depth: int = MAX_DIAGNOSTICS_CHAIN) -> list[ProcessRecord]:
    """Ancestry chain of ``pid`` (itself first) for diagnostics."""
    chain: list[ProcessRecord] = []
    visited: set[int] = set()
    current = pid
    for _ in range(max_depth):
        if current in visited:
            break
        visited.add(current)
        try:
            found, command = _ps_query(current, "comm")
            if not found and not command:
                logger.debug("PID %d no longer exists, ending ancestry chain", current)
                break
            record = ProcessRecord(pid=current, command=command, parent_pid=get_parent_pid(current))
        except QueryFailure as e:
            logger.debug("Ancestry lookup failed at PID %d: %s", current, e)
            break
        chain.append(record)
        if record.parent_pid <= ROOT_PID:
            break
        current = record.parent_pid
    return chain
