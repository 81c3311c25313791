from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional, Protocol, Tuple

from equipops.core.logging import logger
from equipops.schemas.work_orders import (
    AssignmentType,
    WorkOrderCreate,
    WorkOrderInsert,
    WorkOrderRead,
)

from .permissions import UnifiedPermissions


class EquipmentDirectory(Protocol):
    async def get_equipment_team_id(self, equipment_id: str, organization_id: str) -> Optional[str]:
        """Return the owning team of an equipment item, ``None`` if unbound or unknown."""
        ...


class WorkOrderStore(Protocol):
    async def insert(self, record: WorkOrderInsert) -> WorkOrderRead:
        ...


async def resolve_assignment(
    payload: WorkOrderCreate,
    *,
    organization_id: str,
    equipment: EquipmentDirectory,
) -> Tuple[Optional[str], Optional[str]]:
    """Work out ``(team_id, assignee_id)`` for a new work order.

    A member assignment inherits the team of the equipment being worked on;
    an admin assignment is never bound to a team.
    """

    if payload.assignment_type is None or not payload.assignment_id:
        return None, None
    if payload.assignment_type == AssignmentType.TEAM:
        return payload.assignment_id, None
    if payload.assignment_type == AssignmentType.MEMBER:
        team_id = await equipment.get_equipment_team_id(payload.equipment_id, organization_id)
        return team_id or None, payload.assignment_id
    return None, payload.assignment_id


def _as_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class WorkOrderService:
    def __init__(
        self,
        store: WorkOrderStore,
        equipment: EquipmentDirectory,
        permissions: UnifiedPermissions,
    ) -> None:
        self.store = store
        self.equipment = equipment
        self.permissions = permissions

    async def create_work_order(self, payload: WorkOrderCreate, *, created_by: str | None) -> WorkOrderRead:
        context = self.permissions.context
        if context is None:
            raise ValueError("error_org_context_required")
        if not created_by:
            raise PermissionError("error_not_authenticated")
        if not self.permissions.work_orders.can_create_any:
            logger.info(
                "work_order.create_denied",
                organization_id=context.organization_id,
                role=context.user_role.value,
            )
            raise PermissionError("error_forbidden")

        team_id, assignee_id = await resolve_assignment(
            payload,
            organization_id=context.organization_id,
            equipment=self.equipment,
        )
        record = WorkOrderInsert(
            organization_id=context.organization_id,
            created_by=created_by,
            title=payload.title,
            description=payload.description,
            equipment_id=payload.equipment_id,
            priority=payload.priority,
            due_date=_as_utc(payload.due_date),
            estimated_hours=payload.estimated_hours or None,
            assignee_id=assignee_id,
            team_id=team_id,
            status="submitted",
        )
        work_order = await self.store.insert(record)
        logger.info(
            "work_order.created",
            work_order_id=work_order.id,
            organization_id=context.organization_id,
            team_id=team_id,
            assignee_id=assignee_id,
        )
        return work_order
