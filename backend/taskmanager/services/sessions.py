"""
Session model: issue, verify and revoke the bearer tokens of a user.

A token is valid only while both hold:
  1. its signature verifies against the configured secret, and
  2. it is still present in the user's session list (AuthToken rows).
Removing the row is what makes logout effective.
"""
import logging

import jwt

from taskmanager.config import Settings
from taskmanager.core.errors import AuthenticationError, InvalidToken
from taskmanager.core.security import create_access_token, decode_access_token
from taskmanager.models.user import AuthToken, User

logger = logging.getLogger("uvicorn.error")


async def issue_token(user: User, settings: Settings) -> str:
    """
    Sign a new token for the user and append it to the user's sessions.

    Each call yields a new independent session (one per device/login).
    """
    token = create_access_token(str(user.id), settings.jwt_secret)
    await AuthToken.create(user=user, token=token)
    return token


async def verify_token(token: str, settings: Settings) -> User:
    """
    Resolve a raw token string to its user.

    Raises:
        InvalidToken: Signature invalid or payload malformed
        AuthenticationError: No user holds this exact token (revoked, or
            the user was deleted)
    """
    try:
        payload = decode_access_token(token, settings.jwt_secret)
    except jwt.InvalidTokenError as exc:
        raise InvalidToken() from exc

    user_id = payload.get("sub")
    if not isinstance(user_id, str):
        raise InvalidToken()

    session = await AuthToken.filter(token=token).select_related("user").first()
    if session is None or session.user is None or str(session.user_id) != user_id:
        raise AuthenticationError()
    return session.user


async def list_tokens(user: User) -> list[str]:
    """Active tokens of a user, oldest first."""
    return await AuthToken.filter(user=user).order_by("id").values_list("token", flat=True)


async def revoke_token(user: User, token: str) -> None:
    """Remove exactly this token from the user's sessions. No-op if absent."""
    await AuthToken.filter(user=user, token=token).delete()
    logger.info("[users] logout id=%s", user.id)


async def revoke_all_tokens(user: User) -> None:
    """Drop every session of the user in a single statement."""
    await AuthToken.filter(user=user).delete()
    logger.info("[users] logout-all id=%s", user.id)
