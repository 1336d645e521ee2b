# taskmanager/api/v1/deps.py
from dataclasses import dataclass

from fastapi import Depends, Header, Request

from taskmanager.config import Settings
from taskmanager.core.errors import AuthenticationError
from taskmanager.models.user import User
from taskmanager.services import sessions


@dataclass
class AuthContext:
    """Authenticated identity attached to a request."""
    user: User
    token: str  # Raw token, needed to revoke exactly this session on logout


def get_settings(request: Request) -> Settings:
    """Settings constructed at startup and stored on the application."""
    return request.app.state.settings


async def get_auth_context(
    authorization: str | None = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> AuthContext:
    """
    FastAPI dependency resolving `Authorization: Bearer <token>` to a user.

    Every failure (missing header, bad signature, revoked token, deleted
    user) is reported as the same 401 so callers cannot tell them apart.

    Usage:
        @router.get("/protected")
        async def protected_route(ctx: AuthContext = Depends(get_auth_context)):
            return {"user_id": str(ctx.user.id)}
    """
    if not authorization or not authorization.startswith("Bearer "):
        raise AuthenticationError()
    token = authorization[len("Bearer "):].strip()
    if not token:
        raise AuthenticationError()

    try:
        user = await sessions.verify_token(token, settings)
    except AuthenticationError:
        raise AuthenticationError() from None
    return AuthContext(user=user, token=token)


async def get_current_user(ctx: AuthContext = Depends(get_auth_context)) -> User:
    """FastAPI dependency returning only the authenticated user."""
    return ctx.user
