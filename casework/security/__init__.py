"""Security: role-based access control for case actions."""

from casework.security.rbac import RBACService

__all__ = ["RBACService"]
