# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the WTWR API:
# - test_security.py: Password hashing and bearer tokens
# - test_exceptions.py: Error taxonomy and the error responder
# - test_validation.py: Validation message formatting
# - test_logging.py: Request log and JSON-lines log files
# - test_config.py: Settings loading
# - test_models.py: Pydantic request/response models
# - test_services.py: User and item services (mocked database)
# - test_auth_api.py / test_users_api.py / test_items_api.py: HTTP tests
#
# Run tests with: pytest
# =============================================================================
