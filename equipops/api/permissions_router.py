from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from equipops.schemas.permissions import EntityPermissions, PermissionSummary, WorkOrderDetailedPermissions
from equipops.schemas.work_orders import WorkOrderRef
from equipops.services.permissions import UnifiedPermissions

from .deps import get_permissions

router = APIRouter(prefix="/api/permissions", tags=["permissions"])


@router.get("", response_model=PermissionSummary)
async def read_permissions(permissions: UnifiedPermissions = Depends(get_permissions)) -> PermissionSummary:
    return permissions.summary()


@router.get("/equipment", response_model=EntityPermissions, response_model_exclude_none=True)
async def equipment_permissions(
    team_id: str | None = Query(default=None),
    permissions: UnifiedPermissions = Depends(get_permissions),
) -> EntityPermissions:
    return permissions.equipment.get_permissions(team_id)


@router.get("/work-orders", response_model=EntityPermissions, response_model_exclude_none=True)
async def work_order_permissions(
    team_id: str | None = Query(default=None),
    permissions: UnifiedPermissions = Depends(get_permissions),
) -> EntityPermissions:
    work_order = WorkOrderRef(team_id=team_id) if team_id else None
    return permissions.work_orders.get_permissions(work_order)


@router.get("/work-orders/detailed", response_model=WorkOrderDetailedPermissions)
async def work_order_detailed_permissions(
    team_id: str | None = Query(default=None),
    permissions: UnifiedPermissions = Depends(get_permissions),
) -> WorkOrderDetailedPermissions:
    return permissions.work_orders.get_detailed_permissions(WorkOrderRef(team_id=team_id))


@router.get("/teams", response_model=EntityPermissions, response_model_exclude_none=True)
async def team_permissions(
    team_id: str | None = Query(default=None),
    permissions: UnifiedPermissions = Depends(get_permissions),
) -> EntityPermissions:
    return permissions.teams.get_permissions(team_id)
