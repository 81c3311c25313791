from .legacy import LegacyPermissions
from .permissions import UnifiedPermissions
from .work_orders import WorkOrderService

__all__ = [
    "LegacyPermissions",
    "UnifiedPermissions",
    "WorkOrderService",
]
