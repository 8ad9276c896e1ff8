"""
Short Code Helpers

Random short code generation for new mappings.
"""

import secrets
from typing import Optional


def generate_short_code(num_bytes: int = 4) -> str:
    """
    Generate a random short code.
    
    Uses the secrets module so codes are not predictable. Each byte is
    hex encoded, so the default produces 8 lowercase hex characters
    (2^32 possible codes).
    
    Args:
        num_bytes: Number of random bytes (default: 4)
    
    Returns:
        Lowercase hexadecimal short code
    """
    return secrets.token_hex(num_bytes)


def choose_short_code(requested: Optional[str], num_bytes: int = 4) -> str:
    """
    Return the client supplied code, or a generated one when it is missing or empty.
    """
    if requested:
        return requested
    return generate_short_code(num_bytes)
