# taskmanager/api/v1/routers/users.py
from typing import Any

from fastapi import APIRouter, BackgroundTasks, Body, Depends, File, Response, UploadFile, status

from taskmanager.api.v1.deps import AuthContext, get_auth_context, get_current_user, get_settings
from taskmanager.config import Settings
from taskmanager.core.errors import ValidationError
from taskmanager.models.user import User
from taskmanager.services import sessions, users
from taskmanager.services.avatar import check_upload
from taskmanager.services.email import send_cancelation_email, send_welcome_email

router = APIRouter(prefix="/users", tags=["users"])

@router.post("", status_code=status.HTTP_201_CREATED)
async def signup(
    background: BackgroundTasks,
    data: dict[str, Any] = Body(...),
    settings: Settings = Depends(get_settings),
):
    """
    Register a new user account and log it in.

    The password is hashed before storage and a welcome email is scheduled
    after the response is sent.

    Returns:
        dict: success envelope with data:
            - user: public profile (no password, tokens or avatar)
            - token: bearer token of the first session

    Error codes:
        - VALIDATION_ERROR: missing/invalid name, email, password or age
        - EMAIL_EXISTS: email already registered
    """
    user, token = await users.signup(data, settings)
    background.add_task(send_welcome_email, settings, user.email, user.name)
    return {"success": True, "data": {"user": user.to_public(), "token": token}}

@router.post("/login")
async def login(data: dict[str, Any] = Body(...), settings: Settings = Depends(get_settings)):
    """
    Authenticate with email and password and open a new session.

    Every successful login appends a new token; tokens from earlier logins
    stay valid.

    Raises:
        ValidationError (400): AUTH_INVALID_CREDENTIALS, no token is issued
    """
    user, token = await users.login(data, settings)
    return {"success": True, "data": {"user": user.to_public(), "token": token}}

@router.post("/logout")
async def logout(ctx: AuthContext = Depends(get_auth_context)):
    """Revoke the token used for this request; other sessions stay valid."""
    await sessions.revoke_token(ctx.user, ctx.token)
    return {"success": True}

@router.post("/logoutAll")
async def logout_all(user: User = Depends(get_current_user)):
    """Revoke every session of the current user."""
    await sessions.revoke_all_tokens(user)
    return {"success": True}

@router.get("/me")
async def me(user: User = Depends(get_current_user)):
    return {"success": True, "data": user.to_public()}

@router.patch("/me")
async def update_me(data: dict[str, Any] = Body(...), user: User = Depends(get_current_user)):
    """
    Update the current user's profile.

    Only name, email, age and password may be sent. Any other key rejects
    the whole request with 400 and nothing is changed. A new password is
    re-hashed before it is stored.
    """
    user = await users.update_profile(user, data)
    return {"success": True, "data": user.to_public()}

@router.delete("/me")
async def delete_me(
    background: BackgroundTasks,
    user: User = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
):
    """
    Delete the current user's account together with all of its tasks and
    sessions, then schedule a cancelation email.
    """
    profile = user.to_public()
    await users.delete_account(user)
    background.add_task(send_cancelation_email, settings, user.email, user.name)
    return {"success": True, "data": profile}

@router.post("/me/avatar")
async def upload_avatar(
    avatar: UploadFile | None = File(default=None),
    user: User = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
):
    """
    Upload a profile picture (multipart field "avatar").

    Accepts .jpg/.jpeg/.png up to AVATAR_MAX_BYTES; the image is resized to
    AVATAR_SIZE x AVATAR_SIZE and stored as PNG.
    """
    if avatar is None:
        raise ValidationError("Please upload an image.", code="INVALID_IMAGE")
    # Read one byte past the limit so oversized uploads are detected without buffering them whole
    data = await avatar.read(settings.avatar_max_bytes + 1)
    check_upload(avatar.filename, len(data), settings.avatar_max_bytes)
    await users.set_avatar(user, data, settings)
    return {"success": True}

@router.delete("/me/avatar")
async def delete_avatar(user: User = Depends(get_current_user)):
    await users.clear_avatar(user)
    return {"success": True}

@router.get("/{user_id}/avatar")
async def get_avatar(user_id: str):
    """Public: return a user's avatar as image/png, 404 if there is none."""
    data = await users.get_avatar(user_id)
    return Response(content=data, media_type="image/png")
