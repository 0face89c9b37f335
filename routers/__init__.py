# routers/__init__.py
from .admin import router as admin_router
from .transactions import router as transactions_router

__all__ = [
     "admin_router",
     "transactions_router",
]
