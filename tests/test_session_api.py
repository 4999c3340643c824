"""Tests for session_api.py — FastAPI routes."""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from session_monitor.errors import SignalFailure, SpawnFailure
from session_monitor.models import AppIdentity, ProcessRecord
from session_monitor.session_api import app


@pytest.fixture
def client():
    return TestClient(app)


# ---------------------------------------------------------------------------
# Process tree
# ---------------------------------------------------------------------------


class TestOwner:
    def test_returns_application_name(self, client):
        with patch("session_monitor.session_api.resolve_owner", return_value=AppIdentity.VSCODE):
            resp = client.get("/api/owner/4242")
        assert resp.status_code == 200
        assert resp.json() == {"pid": 4242, "application": "Visual Studio Code"}

    def test_non_numeric_pid_rejected(self, client):
        resp = client.get("/api/owner/abc")
        assert resp.status_code == 422


class TestAncestry:
    def test_returns_chain(self, client):
        chain = [
            ProcessRecord(pid=3, command="node", parent_pid=2),
            ProcessRecord(pid=2, command="-zsh", parent_pid=1),
        ]
        with patch("session_monitor.session_api.describe_ancestry", return_value=chain):
            resp = client.get("/api/ancestry/3")
        assert resp.json() == [
            {"pid": 3, "command": "node", "parent_pid": 2},
            {"pid": 2, "command": "-zsh", "parent_pid": 1},
        ]


# ---------------------------------------------------------------------------
# Session actions
# ---------------------------------------------------------------------------


class TestOpen:
    def test_open_reports_application(self, client, monitor_config):
        with patch(
            "session_monitor.session_api.open_session", return_value=AppIdentity.ZED
        ) as mock_open:
            resp = client.post("/api/open", json={"pid": 42, "project_path": "/p/widget"})
        assert resp.status_code == 200
        data = resp.json()
        assert data["success"] is True
        assert data["application"] == "Zed"
        mock_open.assert_called_once_with(42, "/p/widget", monitor_config)

    def test_project_path_optional(self, client):
        with patch(
            "session_monitor.session_api.open_session", return_value=AppIdentity.TERMINAL
        ) as mock_open:
            resp = client.post("/api/open", json={"pid": 42})
        assert resp.status_code == 200
        assert mock_open.call_args[0][1] == ""


class TestStop:
    def test_success(self, client):
        with patch("session_monitor.session_api.stop_session") as mock_stop:
            resp = client.post("/api/stop/4242")
        assert resp.status_code == 200
        assert resp.json()["success"] is True
        mock_stop.assert_called_once_with(4242)

    def test_not_found(self, client):
        err = SignalFailure(4242, "No such process", not_found=True)
        with patch("session_monitor.session_api.stop_session", side_effect=err):
            resp = client.post("/api/stop/4242")
        assert resp.status_code == 404
        data = resp.json()
        assert data["success"] is False
        assert "4242" in data["message"]

    def test_permission_denied(self, client):
        err = SignalFailure(1, "Operation not permitted")
        with patch("session_monitor.session_api.stop_session", side_effect=err):
            resp = client.post("/api/stop/1")
        assert resp.status_code == 500
        assert "Operation not permitted" in resp.json()["message"]

    @pytest.mark.parametrize("pid", [0, -1])
    def test_group_ids_are_client_errors(self, client, pid):
        with patch("session_monitor.actions.os.kill") as mock_kill:
            resp = client.post(f"/api/stop/{pid}")
        assert resp.status_code == 400
        assert resp.json()["success"] is False
        mock_kill.assert_not_called()


class TestResume:
    def test_success(self, client, monitor_config):
        with patch(
            "session_monitor.session_api.resume_session", return_value=5150
        ) as mock_resume:
            resp = client.post("/api/resume", json={"session_id": "sess-1", "prompt": "Hello"})
        assert resp.status_code == 200
        assert resp.json()["pid"] == 5150
        mock_resume.assert_called_once_with("sess-1", "Hello", monitor_config)

    def test_spawn_failure(self, client):
        with patch(
            "session_monitor.session_api.resume_session",
            side_effect=SpawnFailure("Failed to spawn claude command"),
        ):
            resp = client.post("/api/resume", json={"session_id": "sess-1", "prompt": "Hello"})
        assert resp.status_code == 500
        assert resp.json() == {"success": False, "message": "Failed to spawn claude command"}

    def test_missing_prompt_rejected(self, client):
        resp = client.post("/api/resume", json={"session_id": "sess-1"})
        assert resp.status_code == 422


# ---------------------------------------------------------------------------
# Custom names
# ---------------------------------------------------------------------------


class TestNames:
    def test_empty(self, client):
        assert client.get("/api/names").json() == {}

    def test_rename_then_list(self, client):
        resp = client.put("/api/names/sess-1", json={"name": "  Widget  "})
        assert resp.json()["success"] is True
        assert client.get("/api/names").json() == {"sess-1": "Widget"}

    def test_clear_name(self, client):
        client.put("/api/names/sess-1", json={"name": "Widget"})
        resp = client.put("/api/names/sess-1", json={"name": ""})
        assert "Cleared" in resp.json()["message"]
        assert client.get("/api/names").json() == {}

    def test_save_failure(self, client):
        with patch("session_monitor.session_api.CustomNames.save", side_effect=OSError("ro fs")):
            resp = client.put("/api/names/sess-1", json={"name": "Widget"})
        assert resp.status_code == 500
        assert resp.json()["success"] is False


# ---------------------------------------------------------------------------
# Server metadata
# ---------------------------------------------------------------------------


class TestServerInfo:
    def test_server_info(self, client):
        resp = client.get("/api/server-info")
        data = resp.json()
        assert isinstance(data["pid"], int)
        assert data["port"]

    def test_version(self, client):
        from session_monitor.__version__ import __version__

        assert client.get("/api/version").json() == {"current": __version__}
