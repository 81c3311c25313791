from .logging import configure_logging, logger
from .rbac import (
    ADMIN_ROLES,
    MEMBER_ROLES,
    CurrentOrganization,
    OrganizationRole,
    PermissionContext,
    SessionProvider,
    SessionSnapshot,
    build_permission_context,
    normalize_role,
    snapshot_from_headers,
)
from .settings import settings

__all__ = [
    "configure_logging",
    "logger",
    "ADMIN_ROLES",
    "MEMBER_ROLES",
    "CurrentOrganization",
    "OrganizationRole",
    "PermissionContext",
    "SessionProvider",
    "SessionSnapshot",
    "build_permission_context",
    "normalize_role",
    "snapshot_from_headers",
    "settings",
]
