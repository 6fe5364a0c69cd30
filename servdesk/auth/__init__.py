"""Authentication state for servdesk."""

from .session import RoleContext, SessionStore, StaticRoleContext

__all__ = ["RoleContext", "SessionStore", "StaticRoleContext"]
