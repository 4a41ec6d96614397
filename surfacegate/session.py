"""
Session collaborators – where the dispatcher reads the current identity from.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

from surfacegate.config import SECRET_KEY, TOKEN_EXPIRY_HOURS
from surfacegate.models import Identity
from surfacegate.roles import normalize_role


class StaticSession:
    """Holds one identity in memory. Used by the CLI and in tests."""

    def __init__(self, identity: Optional[Identity] = None):
        self._identity = identity or Identity.anonymous()

    def current_identity(self) -> Identity:
        return self._identity

    def set_identity(self, identity: Optional[Identity]) -> None:
        self._identity = identity or Identity.anonymous()

    def clear(self) -> None:
        self._identity = Identity.anonymous()


# ── JWT helpers ──────────────────────────────────────────────────────

def generate_token(identity: Identity, expires_in: Optional[timedelta] = None) -> str:
    """Generate a JWT carrying the identity's id and role."""
    now = datetime.now(timezone.utc)
    payload = {
        "role": identity.role,
        "iat": now,
        "exp": now + (expires_in or timedelta(hours=TOKEN_EXPIRY_HOURS)),
    }
    if identity.id is not None:
        payload["sub"] = str(identity.id)
    return jwt.encode(payload, SECRET_KEY, algorithm="HS256")


def verify_token(token: str) -> Optional[Dict[str, Any]]:
    """Verify a JWT token and return the decoded payload (or None)."""
    try:
        return jwt.decode(token, SECRET_KEY, algorithms=["HS256"])
    except jwt.ExpiredSignatureError:
        return None
    except jwt.InvalidTokenError:
        return None


def identity_from_token(token: Optional[str]) -> Identity:
    """Decode *token* into an Identity; anything unusable is anonymous."""
    if not token:
        return Identity.anonymous()
    payload = verify_token(token)
    if not payload:
        return Identity.anonymous()
    role = normalize_role(payload.get("role"))
    if not role:
        return Identity.anonymous()
    return Identity(id=payload.get("sub"), role=role)


def bearer_token(header: Optional[str]) -> Optional[str]:
    """Pull the token out of an ``Authorization: Bearer <token>`` header."""
    if not header:
        return None
    parts = header.split(" ")
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1]:
        return None
    return parts[1]
