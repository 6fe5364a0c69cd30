"""
Local session storage and the role context consumed by the UI.

The session file mirrors what the web front end keeps in browser storage:
an access token plus the current user object, whose ``role.name`` is the
role string used for every authorization decision in the palette.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Protocol

from servdesk.config.settings import get_session_path
from servdesk.exceptions import SessionError

logger = logging.getLogger(__name__)


class RoleContext(Protocol):
    """Anything that can answer "who is using the console right now"."""

    def get_current_role(self) -> str | None: ...

    def is_authenticated(self) -> bool: ...


class StaticRoleContext:
    """A fixed role, for tests and ``--role`` overrides."""

    def __init__(self, role: str | None, authenticated: bool | None = None):
        self.role = role
        self._authenticated = authenticated

    def get_current_role(self) -> str | None:
        return self.role

    def is_authenticated(self) -> bool:
        if self._authenticated is not None:
            return self._authenticated
        return self.role is not None


class SessionStore:
    """File-backed session: ``{"access_token": ..., "current_user": {...}}``.

    Every read goes back to disk so a login from another shell is picked up
    the next time the palette asks for the role.
    """

    def __init__(self, path: Path | None = None):
        self.path = path or get_session_path()

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text())
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Ignoring unreadable session file {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def get_access_token(self) -> str | None:
        token = self._read().get("access_token")
        return token or None

    def get_current_user(self) -> dict[str, Any] | None:
        user = self._read().get("current_user")
        return user if isinstance(user, dict) else None

    def get_current_role(self) -> str | None:
        user = self.get_current_user()
        if not user:
            return None
        role = user.get("role")
        if not isinstance(role, dict) or not role.get("name"):
            return None
        return str(role["name"])

    def is_authenticated(self) -> bool:
        return self.get_access_token() is not None

    def save(self, access_token: str, user: dict[str, Any]) -> None:
        """Persist a new session, replacing any existing one."""
        payload = {"access_token": access_token, "current_user": user}
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(payload, indent=2) + "\n")
        except OSError as e:
            raise SessionError("Could not write session file", path=str(self.path)) from e

    def clear(self) -> bool:
        """Remove the session file. Returns True if there was one."""
        if not self.path.exists():
            return False
        try:
            self.path.unlink()
        except OSError as e:
            raise SessionError("Could not remove session file", path=str(self.path)) from e
        return True
