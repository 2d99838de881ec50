# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the business logic:
# - models/: Pydantic schemas for request validation and responses
# - services/: User and item operations on top of lib.supabase_client
#
# Services raise the classified errors from app.exceptions and otherwise
# know nothing about HTTP.
# =============================================================================
