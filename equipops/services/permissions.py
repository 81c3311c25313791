"""Permission engine for equipment, work orders, teams and the organization.

Every flag is derived from the current organization role and the team
membership reported by the session provider at the time of the call.
Without an active organization every flag is ``False``.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from equipops.core.logging import logger
from equipops.core.rbac import (
    ADMIN_ROLES,
    MEMBER_ROLES,
    OrganizationRole,
    PermissionContext,
    RoleSpec,
    SessionProvider,
    build_permission_context,
    coerce_roles,
    normalize_role,
)
from equipops.schemas.permissions import (
    EntityPermissions,
    EquipmentAggregates,
    OrganizationPermissions,
    PermissionContextRead,
    PermissionSummary,
    TeamAggregates,
    WorkOrderAggregates,
    WorkOrderDetailedPermissions,
)


def team_of(work_order: Any) -> Optional[str]:
    """Return the owning team id of a work order-like object, if any."""

    if work_order is None:
        return None
    if isinstance(work_order, Mapping):
        team_id = work_order.get("team_id")
    else:
        team_id = getattr(work_order, "team_id", None)
    return str(team_id) if team_id else None


class _Policy:
    def __init__(self, permissions: "UnifiedPermissions") -> None:
        self._permissions = permissions

    @property
    def _active(self) -> bool:
        return self._permissions.context is not None

    def _member_of(self, team_id: Optional[str]) -> bool:
        return bool(team_id) and self._permissions.is_team_member(team_id)

    def _manager_of(self, team_id: Optional[str]) -> bool:
        return bool(team_id) and self._permissions.is_team_manager(team_id)


class OrganizationPolicy(_Policy):
    @property
    def can_manage(self) -> bool:
        return self._permissions.is_org_admin()

    @property
    def can_invite_members(self) -> bool:
        return self._permissions.is_org_admin()

    @property
    def can_create_teams(self) -> bool:
        return self._permissions.is_org_admin()

    @property
    def can_view_billing(self) -> bool:
        # Kept apart from is_org_admin so billing can get its own role set.
        return self._permissions.has_role([OrganizationRole.OWNER, OrganizationRole.ADMIN])

    def as_schema(self) -> OrganizationPermissions:
        return OrganizationPermissions(
            can_manage=self.can_manage,
            can_invite_members=self.can_invite_members,
            can_create_teams=self.can_create_teams,
            can_view_billing=self.can_view_billing,
        )


class EquipmentPolicy(_Policy):
    _DENIED = EntityPermissions(can_add_notes=False, can_add_images=False)

    @property
    def can_view_all(self) -> bool:
        return self._permissions.is_org_member()

    @property
    def can_create_any(self) -> bool:
        return self._permissions.is_org_admin()

    def class_permissions(self) -> EntityPermissions:
        """Permissions on equipment in general, without a specific item."""

        return self.instance_permissions(None)

    def instance_permissions(self, equipment_team_id: Optional[str]) -> EntityPermissions:
        if not self._active:
            return self._DENIED
        is_admin = self._permissions.is_org_admin()
        return EntityPermissions(
            can_view=self._permissions.is_org_member() or self._member_of(equipment_team_id),
            can_create=is_admin,
            can_edit=is_admin or self._manager_of(equipment_team_id),
            can_delete=is_admin,
        )

    def get_permissions(self, equipment_team_id: Optional[str] = None) -> EntityPermissions:
        if equipment_team_id is None:
            return self.class_permissions()
        return self.instance_permissions(equipment_team_id)

    def as_schema(self) -> EquipmentAggregates:
        return EquipmentAggregates(can_view_all=self.can_view_all, can_create_any=self.can_create_any)


class WorkOrderPolicy(_Policy):
    _DENIED = EntityPermissions(
        can_assign=False,
        can_change_status=False,
        can_add_notes=False,
        can_add_images=False,
    )

    @property
    def can_view_all(self) -> bool:
        # Admin-only, unlike equipment where any member may list everything.
        return self._permissions.is_org_admin()

    @property
    def can_create_any(self) -> bool:
        return self._permissions.is_org_member()

    @property
    def can_assign_any(self) -> bool:
        return self._permissions.is_org_admin()

    def class_permissions(self) -> EntityPermissions:
        """Permissions on work orders in general, without a specific one."""

        return self.instance_permissions(None)

    def instance_permissions(self, work_order: Any) -> EntityPermissions:
        if not self._active:
            return self._DENIED
        team_id = team_of(work_order)
        is_admin = self._permissions.is_org_admin()
        is_member = self._permissions.is_org_member()
        team_member = self._member_of(team_id)
        team_manager = self._manager_of(team_id)
        return EntityPermissions(
            can_view=is_member or team_member,
            can_create=is_member,
            can_edit=is_admin or team_manager,
            can_delete=is_admin,
            can_assign=is_admin or team_manager,
            # Any member of the work order's team may move its status.
            can_change_status=is_admin or team_member,
            can_add_notes=is_member or team_member,
            can_add_images=is_member or team_member,
        )

    def get_permissions(self, work_order: Any = None) -> EntityPermissions:
        if work_order is None:
            return self.class_permissions()
        return self.instance_permissions(work_order)

    def get_detailed_permissions(self, work_order: Any = None) -> WorkOrderDetailedPermissions:
        """Field-level permissions, checked against the session provider directly."""

        provider = self._permissions.provider
        organization = provider.get_current_organization()
        if organization is None:
            return WorkOrderDetailedPermissions()

        team_id = team_of(work_order)
        org_admin = normalize_role(organization.user_role) in ADMIN_ROLES
        team_manager = bool(team_id) and provider.can_manage_team(team_id)
        team_access = bool(team_id) and provider.has_team_access(team_id)
        can_manage = org_admin or team_manager
        can_work = can_manage or team_access
        return WorkOrderDetailedPermissions(
            can_edit=can_manage,
            can_edit_priority=can_manage,
            can_edit_assignment=can_manage,
            can_edit_due_date=can_work,
            can_edit_description=can_work,
            can_change_status=can_work,
            can_add_notes=can_work,
            can_add_images=can_work,
        )

    def as_schema(self) -> WorkOrderAggregates:
        return WorkOrderAggregates(
            can_view_all=self.can_view_all,
            can_create_any=self.can_create_any,
            can_assign_any=self.can_assign_any,
        )


class TeamPolicy(_Policy):
    _DENIED = EntityPermissions(can_add_notes=False, can_add_images=False)

    @property
    def can_view_all(self) -> bool:
        return self._permissions.is_org_admin()

    @property
    def can_create_any(self) -> bool:
        return self._permissions.is_org_admin()

    @property
    def can_manage_any(self) -> bool:
        return self._permissions.is_org_admin()

    def class_permissions(self) -> EntityPermissions:
        """Permissions on teams in general, without a specific team."""

        return self.instance_permissions(None)

    def instance_permissions(self, team_id: Optional[str]) -> EntityPermissions:
        if not self._active:
            return self._DENIED
        is_admin = self._permissions.is_org_admin()
        return EntityPermissions(
            can_view=self._permissions.is_org_member() or self._member_of(team_id),
            can_create=is_admin,
            can_edit=is_admin or self._manager_of(team_id),
            can_delete=is_admin,
        )

    def get_permissions(self, team_id: Optional[str] = None) -> EntityPermissions:
        if team_id is None:
            return self.class_permissions()
        return self.instance_permissions(team_id)

    def as_schema(self) -> TeamAggregates:
        return TeamAggregates(
            can_view_all=self.can_view_all,
            can_create_any=self.can_create_any,
            can_manage_any=self.can_manage_any,
        )


class UnifiedPermissions:
    """All permission checks for one user in the currently selected organization."""

    def __init__(self, provider: SessionProvider, *, user_id: str | None = None) -> None:
        self.provider = provider
        self.context: Optional[PermissionContext] = build_permission_context(provider, user_id=user_id)
        self.organization = OrganizationPolicy(self)
        self.equipment = EquipmentPolicy(self)
        self.work_orders = WorkOrderPolicy(self)
        self.teams = TeamPolicy(self)
        if self.context is not None:
            logger.debug(
                "permissions.context_built",
                organization_id=self.context.organization_id,
                role=self.context.user_role.value,
                team_count=len(self.context.user_team_ids),
            )

    # ------------------------------------------------------------------
    # Role predicates
    # ------------------------------------------------------------------
    def has_role(self, roles: RoleSpec) -> bool:
        if self.context is None:
            return False
        return self.context.user_role in coerce_roles(roles)

    def is_org_admin(self) -> bool:
        return self.has_role(ADMIN_ROLES)

    def is_org_member(self) -> bool:
        return self.has_role(MEMBER_ROLES)

    # ------------------------------------------------------------------
    # Team predicates
    # ------------------------------------------------------------------
    def is_team_member(self, team_id: str) -> bool:
        return bool(self.provider.has_team_access(team_id))

    def is_team_manager(self, team_id: str) -> bool:
        return bool(self.provider.can_manage_team(team_id))

    def summary(self) -> PermissionSummary:
        context = None
        if self.context is not None:
            context = PermissionContextRead(
                organization_id=self.context.organization_id,
                user_role=self.context.user_role.value,
                user_id=self.context.user_id,
                user_team_ids=sorted(self.context.user_team_ids),
            )
        return PermissionSummary(
            context=context,
            organization=self.organization.as_schema(),
            equipment=self.equipment.as_schema(),
            work_orders=self.work_orders.as_schema(),
            teams=self.teams.as_schema(),
        )


__all__ = [
    "EquipmentPolicy",
    "OrganizationPolicy",
    "TeamPolicy",
    "UnifiedPermissions",
    "WorkOrderPolicy",
    "team_of",
]
