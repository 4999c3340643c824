"""
Claude Session Monitor — FastAPI web application.

Local HTTP surface for acting on externally-spawned Claude CLI sessions:
  - Resolve which terminal / IDE hosts a session process
  - Click-to-focus the hosting window
  - Interrupt a session (Ctrl-C)
  - Continue a session with a new prompt
  - Custom session display names
  - Auto-generated OpenAPI docs at /docs
"""

import os
from dataclasses import asdict

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .__version__ import __version__
from .actions import open_session, resume_session, stop_session
from .config import get_config
from .errors import SignalFailure, SpawnFailure
from .names import CustomNames
from .process_tree import describe_ancestry, resolve_owner
from .schemas import (
    ActionResponse,
    OpenRequest,
    OwnerResponse,
    ProcessRecordResponse,
    RenameRequest,
    ResumeRequest,
    ServerInfoResponse,
    VersionResponse,
)

# ── App setup ────────────────────────────────────────────────────────────────

app = FastAPI(
    title="Claude Session Monitor",
    version=__version__,
    description="Focus, interrupt, and resume Claude CLI sessions running in your terminals.",
)


# ── Process tree ─────────────────────────────────────────────────────────────


@app.get("/api/owner/{pid}", response_model=OwnerResponse)
def api_owner(pid: int):
    """Return the GUI application hosting a process."""
    return {"pid": pid, "application": str(resolve_owner(pid))}


@app.get("/api/ancestry/{pid}", response_model=list[ProcessRecordResponse])
def api_ancestry(pid: int):
    """Return the process chain from ``pid`` up to the root, for diagnostics."""
    return [asdict(record) for record in describe_ancestry(pid)]


# ── Session actions ──────────────────────────────────────────────────────────


@app.post("/api/open", response_model=ActionResponse)
def api_open(body: OpenRequest):
    """Focus the window hosting a running session."""
    application = open_session(body.pid, body.project_path, get_config())
    return {
        "success": True,
        "message": f"Focused: {application}",
        "application": str(application),
    }


@app.post("/api/stop/{pid}", response_model=ActionResponse)
def api_stop(pid: int):
    """Interrupt a running session process."""
    try:
        stop_session(pid)
    except SignalFailure as e:
        if e.invalid:
            status = 400
        else:
            status = 404 if e.not_found else 500
        return JSONResponse({"success": False, "message": str(e), "pid": pid}, status_code=status)
    return {"success": True, "message": f"Interrupted PID {pid}", "pid": pid}


@app.post("/api/resume", response_model=ActionResponse)
def api_resume(body: ResumeRequest):
    """Continue a session in a new CLI process with a prompt."""
    try:
        pid = resume_session(body.session_id, body.prompt, get_config())
    except SpawnFailure as e:
        return JSONResponse({"success": False, "message": str(e)}, status_code=500)
    return {"success": True, "message": f"Prompt sent to {body.session_id}", "pid": pid}


# ── Custom names ─────────────────────────────────────────────────────────────


@app.get("/api/names", response_model=dict[str, str])
def api_names():
    """Return all custom session display names."""
    return CustomNames.load(get_config().names_path).names


@app.put("/api/names/{session_id}", response_model=ActionResponse)
def api_rename(session_id: str, body: RenameRequest):
    """Set (or clear, with an empty name) a session's display name."""
    names = CustomNames.load(get_config().names_path)
    names.set(session_id, body.name.strip())
    try:
        names.save()
    except OSError as e:
        return JSONResponse({"success": False, "message": str(e)}, status_code=500)
    message = f"Renamed {session_id}" if body.name.strip() else f"Cleared name for {session_id}"
    return {"success": True, "message": message}


# ── Server metadata ──────────────────────────────────────────────────────────


@app.get("/api/server-info", response_model=ServerInfoResponse)
def server_info(request: Request):
    """Return server metadata including PID."""
    host = request.headers.get("host", "localhost:5112")
    return {"pid": os.getpid(), "port": host.split(":")[-1]}


@app.get("/api/version", response_model=VersionResponse)
def api_version():
    """Return the running version."""
    return {"current": __version__}
