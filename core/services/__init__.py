# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .item_service import ItemService
from .user_service import UserService

__all__ = [
    "ItemService",
    "UserService",
]
