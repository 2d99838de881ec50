# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

import secrets
import time

# 24 hex characters: 4-byte timestamp + 8 random bytes
OBJECT_ID_PATTERN = r"^[0-9a-fA-F]{24}$"


# =============================================================================
# Identifier Utilities
# =============================================================================

def new_object_id() -> str:
    """
    Generate a new 24-character hexadecimal record identifier.

    The first 8 characters are the creation time in seconds, so ids sort
    roughly by creation order. The remaining 16 are random.

    Example:
        new_object_id()  # "6719a3f04c1e9b2d7a885f10"
    """
    return f"{int(time.time()) & 0xFFFFFFFF:08x}{secrets.token_hex(8)}"


def normalize_object_id(value: str) -> str:
    """
    Normalize an identifier to its stored (lowercase) form.

    Args:
        value: Identifier as received from a client

    Returns:
        Lowercase identifier

    Example:
        normalize_object_id("6719A3F04C1E9B2D7A885F10")  # "6719a3f04c1e9b2d7a885f10"
    """
    return value.lower()
