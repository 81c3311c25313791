from . import permissions_router, work_orders_router

__all__ = [
    "permissions_router",
    "work_orders_router",
]
