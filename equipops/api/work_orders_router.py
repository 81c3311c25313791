from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from equipops.core.rbac import SessionProvider
from equipops.schemas.work_orders import WorkOrderCreate, WorkOrderRead
from equipops.services.permissions import UnifiedPermissions
from equipops.services.work_orders import EquipmentDirectory, WorkOrderService, WorkOrderStore

from .deps import forbidden_error, get_permissions, get_session_provider, org_context_error

router = APIRouter(prefix="/api/work-orders", tags=["work-orders"])

store_unavailable_error = HTTPException(
    status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
    detail={"code": "error_store_unavailable"},
)


def get_work_order_store() -> WorkOrderStore:
    """Overridden by the host application with its work order backend."""

    raise store_unavailable_error


def get_equipment_directory() -> EquipmentDirectory:
    """Overridden by the host application with its equipment lookup."""

    raise store_unavailable_error


def provide_work_order_service(
    store: WorkOrderStore = Depends(get_work_order_store),
    equipment: EquipmentDirectory = Depends(get_equipment_directory),
    permissions: UnifiedPermissions = Depends(get_permissions),
) -> WorkOrderService:
    return WorkOrderService(store, equipment, permissions)


@router.post("/", response_model=WorkOrderRead, status_code=status.HTTP_201_CREATED)
async def create_work_order(
    payload: WorkOrderCreate,
    provider: SessionProvider = Depends(get_session_provider),
    service: WorkOrderService = Depends(provide_work_order_service),
) -> WorkOrderRead:
    try:
        return await service.create_work_order(payload, created_by=getattr(provider, "user_id", None))
    except ValueError as exc:
        if str(exc) == "error_org_context_required":
            raise org_context_error from None
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail={"code": str(exc)}) from None
    except PermissionError as exc:
        if str(exc) == "error_not_authenticated":
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail={"code": "error_not_authenticated"},
            ) from None
        raise forbidden_error from None
