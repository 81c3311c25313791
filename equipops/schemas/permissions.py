from __future__ import annotations

from typing import List

from pydantic import BaseModel


class EntityPermissions(BaseModel):
    can_view: bool = False
    can_create: bool = False
    can_edit: bool = False
    can_delete: bool = False
    can_assign: bool | None = None
    can_change_status: bool | None = None
    can_add_notes: bool | None = None
    can_add_images: bool | None = None

    class Config:
        frozen = True


class WorkOrderDetailedPermissions(BaseModel):
    can_edit: bool = False
    can_edit_priority: bool = False
    can_edit_assignment: bool = False
    can_edit_due_date: bool = False
    can_edit_description: bool = False
    can_change_status: bool = False
    can_add_notes: bool = False
    can_add_images: bool = False

    class Config:
        frozen = True


class OrganizationPermissions(BaseModel):
    can_manage: bool = False
    can_invite_members: bool = False
    can_create_teams: bool = False
    can_view_billing: bool = False


class EquipmentAggregates(BaseModel):
    can_view_all: bool = False
    can_create_any: bool = False


class WorkOrderAggregates(BaseModel):
    can_view_all: bool = False
    can_create_any: bool = False
    can_assign_any: bool = False


class TeamAggregates(BaseModel):
    can_view_all: bool = False
    can_create_any: bool = False
    can_manage_any: bool = False


class PermissionContextRead(BaseModel):
    organization_id: str
    user_role: str
    user_id: str | None = None
    user_team_ids: List[str] = []

    class Config:
        from_attributes = True


class PermissionSummary(BaseModel):
    context: PermissionContextRead | None = None
    organization: OrganizationPermissions
    equipment: EquipmentAggregates
    work_orders: WorkOrderAggregates
    teams: TeamAggregates
