"""User-assigned display names for sessions, persisted as a small JSON file."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass
class CustomNames:
    """Session id → display name overrides backed by ``path``."""

    path: str
    names: dict[str, str] = field(default_factory=dict)

    @classmethod
    def load(cls, path: str) -> CustomNames:
        """Read the store at ``path``; a missing or corrupt file yields an empty store."""
        store = cls(path=path)
        if not os.path.exists(path):
            return store
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.debug("Error reading custom names from %s: %s", path, e)
            return store
        names = data.get("names", {}) if isinstance(data, dict) else {}
        if isinstance(names, dict):
            store.names = {str(k): str(v) for k, v in names.items()}
        return store

    def save(self) -> None:
        """Write the store back to disk, creating the parent directory."""
        parent = os.path.dirname(self.path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump({"names": self.names}, f, indent=2)

    def get(self, session_id: str) -> str | None:
        return self.names.get(session_id)

    def set(self, session_id: str, name: str) -> None:
        """Assign a display name; an empty name removes the override."""
        if name:
            self.names[session_id] = name
        else:
            self.names.pop(session_id, None)
