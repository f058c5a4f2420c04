"""
OAuth State Tokens
Anti-CSRF state generation and comparison.
"""

import secrets
import uuid
from typing import Optional


def generate_state() -> str:
    """Generate a cryptographically random state token (uuid4, os.urandom-backed)."""
    return str(uuid.uuid4())


def states_match(received: Optional[str], stored: Optional[str]) -> bool:
    """
    Compare the state echoed by the provider with the one in our cookie.

    Both must be present; comparison is constant-time.
    """
    if not received or not stored:
        return False
    return secrets.compare_digest(received.encode("utf-8"), stored.encode("utf-8"))
