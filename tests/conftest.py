"""Shared pytest fixtures for the test suite."""

import os
import sys
from unittest.mock import MagicMock, patch

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from session_monitor.config import MonitorConfig  # noqa: E402


@pytest.fixture(autouse=True)
def monitor_config(tmp_path):
    """Isolate every test from the user's ~/.claude config and name store."""
    config = MonitorConfig(names_path=str(tmp_path / "names.json"))
    with patch("session_monitor.config._config", config):
        yield config


def make_ps(tree):
    """Build a fake ``subprocess.run`` answering ``ps -o <field>= -p <pid>``.

    ``tree`` maps pid -> (comm, ppid). Unknown PIDs behave like a vanished
    process: non-zero exit and empty output. Every query is recorded in
    ``.calls`` as (field, pid).
    """
    calls = []

    def _run(cmd, **_kwargs):
        field = cmd[2].rstrip("=")
        pid = int(cmd[4])
        calls.append((field, pid))
        if pid not in tree:
            return MagicMock(returncode=1, stdout="", stderr="")
        comm, ppid = tree[pid]
        out = comm if field == "comm" else f"{ppid:>5}"
        return MagicMock(returncode=0, stdout=out + "\n", stderr="")

    _run.calls = calls
    return _run


@pytest.fixture
def fake_ps():
    """Fixture that returns the fake ``ps`` builder."""
    return make_ps
