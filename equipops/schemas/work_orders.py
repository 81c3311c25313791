from __future__ import annotations

import enum
from datetime import datetime

from pydantic import BaseModel, Field


class WorkOrderPriority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class AssignmentType(str, enum.Enum):
    TEAM = "team"
    MEMBER = "member"
    ADMIN = "admin"


class WorkOrderRef(BaseModel):
    """The part of a work order the permission checks look at."""

    id: str | None = None
    team_id: str | None = None

    class Config:
        from_attributes = True


class WorkOrderCreate(BaseModel):
    title: str = Field(min_length=1)
    description: str
    equipment_id: str
    priority: WorkOrderPriority = WorkOrderPriority.MEDIUM
    due_date: datetime | None = None
    estimated_hours: float | None = None
    assignment_type: AssignmentType | None = None
    # Team id, member id or admin id depending on assignment_type.
    assignment_id: str | None = None


class WorkOrderInsert(BaseModel):
    organization_id: str
    created_by: str
    title: str
    description: str
    equipment_id: str
    priority: WorkOrderPriority
    due_date: datetime | None = None
    estimated_hours: float | None = None
    assignee_id: str | None = None
    team_id: str | None = None
    status: str = "submitted"


class WorkOrderRead(WorkOrderInsert):
    id: str

    class Config:
        from_attributes = True
