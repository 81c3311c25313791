from __future__ import annotations

from typing import Callable

from fastapi import Depends, HTTPException, Request, status

from equipops.core.rbac import OrganizationRole, SessionProvider, SessionSnapshot, coerce_roles, snapshot_from_headers
from equipops.core.settings import settings
from equipops.services.legacy import LegacyPermissions
from equipops.services.permissions import UnifiedPermissions

forbidden_error = HTTPException(
    status_code=status.HTTP_403_FORBIDDEN,
    detail={"code": "error_forbidden"},
)

org_context_error = HTTPException(
    status_code=status.HTTP_400_BAD_REQUEST,
    detail={"code": "error_org_context_required"},
)


def get_session_provider(request: Request) -> SessionProvider:
    """Resolve the session provider for the current request.

    An upstream authenticator may place a provider on ``request.state``.
    Otherwise trusted session headers are read when enabled, and anything
    else gets an empty session, which denies every permission.
    """

    provider = getattr(request.state, "session_provider", None)
    if provider is not None:
        return provider
    if settings.trust_session_headers:
        return snapshot_from_headers(request.headers)
    return SessionSnapshot.empty()


def get_permissions(provider: SessionProvider = Depends(get_session_provider)) -> UnifiedPermissions:
    return UnifiedPermissions(provider, user_id=getattr(provider, "user_id", None))


def get_legacy_permissions(permissions: UnifiedPermissions = Depends(get_permissions)) -> LegacyPermissions:
    return LegacyPermissions(permissions)


def require_permission(check: Callable[[UnifiedPermissions], bool]):
    async def dependency(permissions: UnifiedPermissions = Depends(get_permissions)) -> UnifiedPermissions:
        if not check(permissions):
            raise forbidden_error
        return permissions

    return dependency


def require_org_role(*roles: OrganizationRole | str):
    required = coerce_roles(roles)
    if not required:
        raise ValueError("require_org_role needs at least one of owner, admin, member or viewer")

    async def dependency(permissions: UnifiedPermissions = Depends(get_permissions)) -> UnifiedPermissions:
        if permissions.context is None:
            raise org_context_error
        if not permissions.has_role(required):
            raise forbidden_error
        return permissions

    return dependency
