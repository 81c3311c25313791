from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Iterable, Mapping, Optional, Protocol, Union

from .logging import logger
from .settings import settings


class OrganizationRole(str, Enum):
    OWNER = "owner"
    ADMIN = "admin"
    MEMBER = "member"
    VIEWER = "viewer"


ADMIN_ROLES: FrozenSet[OrganizationRole] = frozenset({OrganizationRole.OWNER, OrganizationRole.ADMIN})
MEMBER_ROLES: FrozenSet[OrganizationRole] = ADMIN_ROLES | {OrganizationRole.MEMBER}

RoleSpec = Union[OrganizationRole, str, Iterable[Union[OrganizationRole, str]]]


@dataclass(frozen=True)
class CurrentOrganization:
    """The organization selected in the active session."""

    id: str
    user_role: Optional[str] = None


@dataclass(frozen=True)
class PermissionContext:
    """Snapshot of who is asking, rebuilt for every evaluation."""

    organization_id: str
    user_role: OrganizationRole
    user_id: Optional[str] = None
    user_team_ids: FrozenSet[str] = frozenset()


class SessionProvider(Protocol):
    """Session and team-membership data owned by the host application."""

    def get_current_organization(self) -> Optional[CurrentOrganization]:
        ...

    def get_user_team_ids(self) -> Iterable[str]:
        ...

    def has_team_access(self, team_id: str) -> bool:
        ...

    def can_manage_team(self, team_id: str) -> bool:
        ...


@dataclass(frozen=True)
class SessionSnapshot:
    """In-memory session provider.

    ``managed_team_ids`` lists the teams the user manages; managing a team
    implies access to it, so those ids need not be repeated in ``team_ids``.
    """

    organization: Optional[CurrentOrganization] = None
    team_ids: FrozenSet[str] = field(default_factory=frozenset)
    managed_team_ids: FrozenSet[str] = field(default_factory=frozenset)
    user_id: Optional[str] = None

    @classmethod
    def empty(cls) -> "SessionSnapshot":
        return cls()

    @classmethod
    def build(
        cls,
        *,
        organization_id: str | None = None,
        role: OrganizationRole | str | None = None,
        team_ids: Iterable[str] | None = None,
        managed_team_ids: Iterable[str] | None = None,
        user_id: str | None = None,
    ) -> "SessionSnapshot":
        organization = None
        if organization_id:
            raw_role = role.value if isinstance(role, OrganizationRole) else role
            organization = CurrentOrganization(id=str(organization_id), user_role=raw_role)
        return cls(
            organization=organization,
            team_ids=frozenset(str(team_id) for team_id in (team_ids or [])),
            managed_team_ids=frozenset(str(team_id) for team_id in (managed_team_ids or [])),
            user_id=user_id,
        )

    def get_current_organization(self) -> Optional[CurrentOrganization]:
        return self.organization

    def get_user_team_ids(self) -> FrozenSet[str]:
        return self.team_ids | self.managed_team_ids

    def has_team_access(self, team_id: str) -> bool:
        return str(team_id) in self.get_user_team_ids()

    def can_manage_team(self, team_id: str) -> bool:
        return str(team_id) in self.managed_team_ids


def normalize_role(raw: OrganizationRole | str | None, default: str | None = None) -> OrganizationRole:
    """Coerce a session role into an ``OrganizationRole``.

    Missing roles fall back to ``default`` (``settings.default_role``) and
    unknown values to ``viewer``; neither case raises.
    """

    if isinstance(raw, OrganizationRole):
        return raw
    candidate = (raw or default or settings.default_role or "").strip().lower()
    try:
        return OrganizationRole(candidate)
    except ValueError:
        logger.warning("permissions.unknown_role", role=raw)
        return OrganizationRole.VIEWER


def coerce_roles(roles: RoleSpec) -> FrozenSet[OrganizationRole]:
    """Turn one role or a collection of roles into a set of known roles."""

    if isinstance(roles, (OrganizationRole, str)):
        roles = [roles]
    parsed = set()
    for role in roles:
        if isinstance(role, OrganizationRole):
            parsed.add(role)
            continue
        try:
            parsed.add(OrganizationRole(str(role).strip().lower()))
        except ValueError:
            continue
    return frozenset(parsed)


def build_permission_context(
    provider: SessionProvider, *, user_id: str | None = None
) -> Optional[PermissionContext]:
    organization = provider.get_current_organization()
    if organization is None:
        logger.debug("permissions.context_missing")
        return None
    return PermissionContext(
        organization_id=str(organization.id),
        user_role=normalize_role(organization.user_role),
        user_id=user_id,
        user_team_ids=frozenset(str(team_id) for team_id in provider.get_user_team_ids()),
    )


def _split_ids(raw: str | None) -> FrozenSet[str]:
    if not raw:
        return frozenset()
    return frozenset(part.strip() for part in raw.split(",") if part.strip())


def snapshot_from_headers(
    headers: Mapping[str, str], prefix: str | None = None
) -> SessionSnapshot:
    """Read a session snapshot forwarded by a trusted upstream gateway.

    Headers (with the default ``x-session`` prefix): ``x-session-organization-id``,
    ``x-session-role``, ``x-session-user-id``, ``x-session-team-ids`` and
    ``x-session-managed-team-ids``; id lists are comma separated.
    """

    prefix = (prefix or settings.session_header_prefix).lower()
    organization_id = (headers.get(f"{prefix}-organization-id") or "").strip()
    return SessionSnapshot.build(
        organization_id=organization_id or None,
        role=headers.get(f"{prefix}-role"),
        team_ids=_split_ids(headers.get(f"{prefix}-team-ids")),
        managed_team_ids=_split_ids(headers.get(f"{prefix}-managed-team-ids")),
        user_id=(headers.get(f"{prefix}-user-id") or "").strip() or None,
    )


__all__ = [
    "ADMIN_ROLES",
    "MEMBER_ROLES",
    "CurrentOrganization",
    "OrganizationRole",
    "PermissionContext",
    "SessionProvider",
    "SessionSnapshot",
    "build_permission_context",
    "coerce_roles",
    "normalize_role",
    "snapshot_from_headers",
]
