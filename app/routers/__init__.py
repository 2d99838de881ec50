# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - users.py: Current user profile endpoints (/users/me)
# - items.py: Clothing item endpoints (/items)
#
# Signup and signin live in app/auth/routes.py.
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import items
from . import users

__all__ = [
    "health",
    "items",
    "users",
]
