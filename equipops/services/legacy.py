from __future__ import annotations

from typing import Any

from equipops.core.rbac import RoleSpec
from equipops.schemas.permissions import EntityPermissions

from .permissions import UnifiedPermissions


class LegacyPermissions:
    """Flat permission checks under the names older call sites still use."""

    def __init__(self, permissions: UnifiedPermissions) -> None:
        self.permissions = permissions

    def can_manage_team(self, team_id: str) -> bool:
        return self.permissions.teams.get_permissions(team_id).can_edit

    def can_view_team(self, team_id: str) -> bool:
        return self.permissions.teams.get_permissions(team_id).can_view

    def can_create_team(self) -> bool:
        return self.permissions.teams.can_create_any

    def can_manage_equipment(self, equipment_team_id: str | None = None) -> bool:
        return self.permissions.equipment.get_permissions(equipment_team_id).can_edit

    def can_view_equipment(self, equipment_team_id: str | None = None) -> bool:
        return self.permissions.equipment.get_permissions(equipment_team_id).can_view

    def can_create_equipment(self) -> bool:
        return self.permissions.equipment.can_create_any

    def can_update_equipment_status(self, equipment_team_id: str | None = None) -> bool:
        return self.permissions.equipment.get_permissions(equipment_team_id).can_edit

    def can_manage_work_order(self, work_order: Any = None) -> bool:
        return self.permissions.work_orders.get_permissions(work_order).can_edit

    def can_view_work_order(self, work_order: Any = None) -> bool:
        return self.permissions.work_orders.get_permissions(work_order).can_view

    def can_create_work_order(self) -> bool:
        return self.permissions.work_orders.can_create_any

    def can_assign_work_order(self, work_order: Any = None) -> bool:
        return bool(self.permissions.work_orders.get_permissions(work_order).can_assign)

    def can_change_work_order_status(self, work_order: Any = None) -> bool:
        return bool(self.permissions.work_orders.get_permissions(work_order).can_change_status)

    def can_manage_organization(self) -> bool:
        return self.permissions.organization.can_manage

    def can_invite_members(self) -> bool:
        return self.permissions.organization.can_invite_members

    def has_role(self, roles: RoleSpec) -> bool:
        return self.permissions.has_role(roles)

    def is_team_member(self, team_id: str) -> bool:
        return self.permissions.is_team_member(team_id)

    def is_team_manager(self, team_id: str) -> bool:
        return self.permissions.is_team_manager(team_id)

    def work_order_permissions(self, work_order: Any = None) -> EntityPermissions:
        return self.permissions.work_orders.get_permissions(work_order)
