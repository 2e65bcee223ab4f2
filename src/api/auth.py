"""Session endpoints. Login itself is handled by the external auth service."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response

from src.api.deps import get_session_user
from src.core.config import get_settings
from src.core.logging import get_logger
from src.core.security import SessionUser
from src.schemas import LogoutResponse

logger = get_logger(__name__)

router = APIRouter()


@router.get(
    "/me",
    response_model=SessionUser | None,
    summary="Current session user",
    description="Returns null when there is no valid session.",
)
async def me(user: Annotated[SessionUser | None, Depends(get_session_user)]) -> SessionUser | None:
    return user


@router.post(
    "/logout",
    response_model=LogoutResponse,
    summary="Log out",
    description="Clears the session cookie.",
)
async def logout(
    response: Response,
    user: Annotated[SessionUser | None, Depends(get_session_user)],
) -> LogoutResponse:
    settings = get_settings()
    response.delete_cookie(
        settings.session_cookie_name,
        path="/",
        secure=settings.is_production,
        httponly=True,
        samesite="lax",
    )
    if user is not None:
        logger.info("User logged out", user_id=user.id)
    return LogoutResponse()
