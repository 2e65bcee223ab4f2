"""Unit tests for session tokens and the role predicate."""

import pytest

from src.core.errors import ForbiddenError, UnauthorizedError
from src.core.security import (
    Role,
    SessionUser,
    decode_session_token,
    encode_session_token,
    require_role,
    role_rank,
)

SECRET = "test-session-secret"


class TestRole:
    def test_ordering(self) -> None:
        assert Role.ADMIN.satisfies(Role.EDITOR)
        assert Role.EDITOR.satisfies(Role.EDITOR)
        assert not Role.USER.satisfies(Role.EDITOR)
        assert Role.USER.satisfies(Role.USER)

    def test_unknown_role_ranks_lowest(self) -> None:
        assert role_rank("admin") == Role.ADMIN.rank
        assert role_rank("viewer") < Role.USER.rank


class TestSessionToken:
    """Tests for cookie encoding and verification."""

    def test_round_trip(self) -> None:
        user = SessionUser(id="u1", role=Role.EDITOR, name="Jana", email="jana@example.org")
        token = encode_session_token(user, SECRET)
        assert decode_session_token(token, SECRET) == user

    def test_role_defaults_to_user(self) -> None:
        token = encode_session_token(SessionUser(id="u2"), SECRET)
        decoded = decode_session_token(token, SECRET)
        assert decoded is not None
        assert decoded.role == Role.USER

    def test_wrong_secret_rejected(self) -> None:
        token = encode_session_token(SessionUser(id="u1", role=Role.ADMIN), SECRET)
        assert decode_session_token(token, "another-secret") is None

    def test_tampered_payload_rejected(self) -> None:
        viewer = encode_session_token(SessionUser(id="u1"), SECRET)
        admin = encode_session_token(SessionUser(id="u1", role=Role.ADMIN), SECRET)
        # Admin payload with the viewer's signature
        forged = f"{admin.split('.')[0]}.{viewer.split('.')[1]}"
        assert decode_session_token(forged, SECRET) is None

    @pytest.mark.parametrize("token", [None, "", "garbage", "a.b", "....."])
    def test_malformed_tokens(self, token: str | None) -> None:
        assert decode_session_token(token, SECRET) is None

    def test_non_ascii_payload_rejected(self) -> None:
        assert decode_session_token("\u00e9.abc", SECRET) is None

    def test_non_ascii_signature_rejected(self) -> None:
        token = encode_session_token(SessionUser(id="u1", role=Role.ADMIN), SECRET)
        payload = token.split(".")[0]
        assert decode_session_token(f"{payload}.\u00e9", SECRET) is None

    def test_unknown_role_is_kept(self) -> None:
        token = encode_session_token(SessionUser(id="u1", role="viewer"), SECRET)
        decoded = decode_session_token(token, SECRET)
        assert decoded is not None
        assert decoded.role == "viewer"


class TestRequireRole:
    def test_no_session(self) -> None:
        with pytest.raises(UnauthorizedError):
            require_role(None)

    def test_insufficient_role(self) -> None:
        with pytest.raises(ForbiddenError) as exc_info:
            require_role(SessionUser(id="u1", role=Role.USER))
        assert exc_info.value.code == "FORBIDDEN"

    @pytest.mark.parametrize("role", [Role.EDITOR, Role.ADMIN])
    def test_allowed_roles(self, role: Role) -> None:
        user = SessionUser(id="u1", role=role)
        assert require_role(user, Role.EDITOR) is user

    def test_unknown_role_forbidden(self) -> None:
        with pytest.raises(ForbiddenError):
            require_role(SessionUser(id="u1", role="viewer"), Role.USER)

    def test_admin_only(self) -> None:
        with pytest.raises(ForbiddenError):
            require_role(SessionUser(id="u1", role=Role.EDITOR), Role.ADMIN)
