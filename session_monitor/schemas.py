"""
Pydantic request/response models for the FastAPI session monitor API.

These define the JSON shapes for all API endpoints and give us
automatic OpenAPI schema generation + Swagger UI.
"""

from __future__ import annotations

from pydantic import BaseModel

# ── Requests ────────────────────────────────────────────────────────────────


class OpenRequest(BaseModel):
    """Body of POST /api/open."""

    pid: int
    project_path: str = ""


class ResumeRequest(BaseModel):
    """Body of POST /api/resume."""

    session_id: str
    prompt: str


class RenameRequest(BaseModel):
    """Body of PUT /api/names/{session_id}. An empty name clears the override."""

    name: str = ""


# ── Process tree (/api/owner, /api/ancestry) ─────────────────────────────────


class OwnerResponse(BaseModel):
    """The GUI application hosting a process."""

    pid: int
    application: str


class ProcessRecordResponse(BaseModel):
    pid: int
    command: str = ""
    parent_pid: int = 0


# ── Generic ─────────────────────────────────────────────────────────────────


class ActionResponse(BaseModel):
    """Generic success/failure response for POST actions."""

    success: bool
    message: str = ""
    application: str | None = None
    pid: int | None = None


class VersionResponse(BaseModel):
    current: str


class ServerInfoResponse(BaseModel):
    pid: int
    port: str
