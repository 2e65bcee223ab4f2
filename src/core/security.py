"""
Session identity and role checks.

Sessions are issued by the external auth service as a signed cookie:

    <base64url(json payload)>.<hex hmac-sha256(payload, session_secret)>

The payload carries at least ``id`` and ``role``. This module only verifies
and decodes it. Issuing sessions (OAuth, login) is done elsewhere, and
``encode_session_token`` exists for that issuer and for tests.
"""

import base64
import hashlib
import hmac
import json
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from src.core.errors import ForbiddenError, UnauthorizedError


class Role(str, Enum):
    """User roles, lowest to highest privilege."""

    USER = "user"
    EDITOR = "editor"
    ADMIN = "admin"

    @property
    def rank(self) -> int:
        return _ROLE_RANK[self]

    def satisfies(self, required: "Role") -> bool:
        """Check if this role is at least as privileged as ``required``."""
        return self.rank >= required.rank


_ROLE_RANK = {Role.USER: 0, Role.EDITOR: 1, Role.ADMIN: 2}


def role_rank(role: str) -> int:
    """Rank of a session role; roles issued elsewhere but unknown here rank lowest."""
    try:
        return Role(role).rank
    except ValueError:
        return -1


class SessionUser(BaseModel):
    """Identity of the caller as supplied by the session cookie."""

    id: str = Field(min_length=1)
    role: str = Field(default=Role.USER.value, min_length=1)
    name: str | None = None
    email: str | None = None

    model_config = ConfigDict(frozen=True)


def _b64encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def _b64decode(data: str) -> bytes:
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(payload: str, secret: str) -> str:
    return hmac.new(secret.encode("utf-8"), payload.encode("ascii"), hashlib.sha256).hexdigest()


def encode_session_token(user: SessionUser, secret: str) -> str:
    """Serialize and sign a session payload."""
    payload = _b64encode(user.model_dump_json(exclude_none=True).encode("utf-8"))
    return f"{payload}.{_sign(payload, secret)}"


def decode_session_token(token: str | None, secret: str) -> SessionUser | None:
    """
    Verify and decode a session token.

    Returns None for a missing, malformed or tampered token; an invalid
    session is treated the same as no session.
    """
    if not token or not token.isascii() or "." not in token:
        return None

    payload, _, signature = token.rpartition(".")
    if not hmac.compare_digest(_sign(payload, secret), signature):
        return None

    try:
        data = json.loads(_b64decode(payload))
        return SessionUser.model_validate(data)
    except (ValueError, ValidationError):
        return None


def require_role(user: SessionUser | None, minimum: Role = Role.EDITOR) -> SessionUser:
    """
    Authorization predicate shared by every write procedure.

    Raises:
        UnauthorizedError: No session user.
        ForbiddenError: The user's role is below ``minimum`` or unknown.
    """
    if user is None:
        raise UnauthorizedError()
    if role_rank(user.role) < minimum.rank:
        raise ForbiddenError(f"Only {minimum.value}s and above can perform this action")
    return user
