"""
User account service: signup, login, profile update, account deletion and
avatar storage.

Password hashing and the task cascade are explicit steps of these functions,
not hooks on the model.
"""
import asyncio
import logging
import uuid
from typing import Any

from tortoise.exceptions import IntegrityError

from taskmanager.config import Settings
from taskmanager.core.errors import NotFound, ValidationError
from taskmanager.core.security import hash_password, verify_password
from taskmanager.models.user import User
from taskmanager.schemas.common import validate_payload
from taskmanager.schemas.user import LoginIn, UserCreateIn, UserUpdateIn
from taskmanager.services import sessions, tasks
from taskmanager.services.avatar import process_avatar

logger = logging.getLogger("uvicorn.error")

ALLOWED_USER_UPDATES = frozenset({"name", "email", "age", "password"})


async def _hash(plain: str) -> str:
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, hash_password, plain)


async def _verify(plain: str, hashed: str) -> bool:
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, verify_password, plain, hashed)


async def _ensure_email_free(email: str, exclude: User | None = None) -> None:
    query = User.filter(email=email)
    if exclude is not None:
        query = query.exclude(id=exclude.id)
    if await query.exists():
        raise ValidationError("Email already registered", code="EMAIL_EXISTS")


async def signup(data: Any, settings: Settings) -> tuple[User, str]:
    """
    Create a user and log them in.

    Returns:
        The created user and its first session token
    """
    body = validate_payload(UserCreateIn, data)
    await _ensure_email_free(body.email)
    try:
        user = await User.create(
            name=body.name,
            email=body.email,
            age=body.age,
            password_hash=await _hash(body.password),
        )
    except IntegrityError as exc:
        # Lost a race against a concurrent signup with the same email
        raise ValidationError("Email already registered", code="EMAIL_EXISTS") from exc
    token = await sessions.issue_token(user, settings)
    logger.info("[users] signup id=%s", user.id)
    return user, token


async def find_by_credentials(email: str, password: str) -> User:
    """
    Raises:
        ValidationError: Unknown email or wrong password (same message for both)
    """
    user = await User.get_or_none(email=email)
    if not user or not await _verify(password, user.password_hash):
        raise ValidationError("Unable to login", code="AUTH_INVALID_CREDENTIALS")
    return user


async def login(data: Any, settings: Settings) -> tuple[User, str]:
    body = validate_payload(LoginIn, data)
    user = await find_by_credentials(body.email, body.password)
    token = await sessions.issue_token(user, settings)
    logger.info("[users] login id=%s", user.id)
    return user, token


async def update_profile(user: User, data: Any) -> User:
    """
    Apply a profile update restricted to ALLOWED_USER_UPDATES.

    Any other key rejects the whole update; nothing is applied unless every
    supplied value validates.
    """
    if not isinstance(data, dict) or not set(data) <= ALLOWED_USER_UPDATES:
        raise ValidationError("Invalid updates.", code="INVALID_UPDATES")
    body = validate_payload(UserUpdateIn, data)
    changes = body.model_dump(include=body.model_fields_set)

    if "email" in changes and changes["email"] != user.email:
        await _ensure_email_free(changes["email"], exclude=user)
    if "password" in changes:
        changes["password_hash"] = await _hash(changes.pop("password"))

    for field, value in changes.items():
        setattr(user, field, value)
    try:
        await user.save()
    except IntegrityError as exc:
        raise ValidationError("Email already registered", code="EMAIL_EXISTS") from exc
    return user


async def delete_account(user: User) -> None:
    """Delete the user's tasks, then its sessions, then the user."""
    deleted_tasks = await tasks.delete_tasks_of(user)
    await sessions.revoke_all_tokens(user)
    await user.delete()
    logger.info("[users] deleted id=%s tasks=%s", user.id, deleted_tasks)


async def set_avatar(user: User, data: bytes, settings: Settings) -> None:
    user.avatar = await process_avatar(data, settings.avatar_size)
    await user.save()


async def clear_avatar(user: User) -> None:
    user.avatar = None
    await user.save()


async def get_avatar(user_id: str) -> bytes:
    """
    Raises:
        NotFound: Unknown user or user without avatar
    """
    try:
        uid = uuid.UUID(str(user_id))
    except ValueError:
        raise NotFound() from None
    user = await User.get_or_none(id=uid)
    if not user or not user.avatar:
        raise NotFound()
    return user.avatar
