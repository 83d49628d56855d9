# fridge/api/v1/routers/auth.py
from fastapi import APIRouter, Depends, Response, status

from fridge.api.v1.deps import get_current_user
from fridge.api.v1.serializers import user_to_dict
from fridge.core.security import create_access_token
from fridge.models.user import User
from fridge.schemas.auth import ChangePasswordIn, LoginRequest, ProfileUpdateIn, RegisterIn
from fridge.services import users as user_service

router = APIRouter(prefix="/auth", tags=["auth"])


def _login_payload(user: User, response: Response) -> dict:
    token = create_access_token(str(user.id), user.role)
    response.set_cookie("accessToken", token, httponly=True, secure=False, samesite="lax")
    return {"user": user_to_dict(user), "accessToken": token}


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(body: RegisterIn, response: Response):
    """
    Register a new user account and log it in.

    Email and pseudo must be unique (compared trimmed and lower-cased).
    The account is always created with role "user".

    Error codes:
        - VALIDATION_ERROR: malformed body
        - EMAIL_EXISTS / PSEUDO_EXISTS (409)
    """
    user = await user_service.register(body)
    return {"success": True, "message": "User registered successfully", "data": _login_payload(user, response)}


@router.post("/login")
async def login(payload: LoginRequest, response: Response):
    """
    Authenticate by email and password.

    The token is returned in the body and also set as an HttpOnly cookie
    named "accessToken" for browser clients.

    Error codes:
        - AUTH_INVALID_CREDENTIALS (401)
        - ACCOUNT_DISABLED (403)
    """
    user = await user_service.authenticate(payload.email, payload.password)
    return {"success": True, "message": "Login successful", "data": _login_payload(user, response)}


@router.get("/me")
async def me(user: User = Depends(get_current_user)):
    return {"success": True, "data": user_to_dict(user)}


@router.put("/me")
async def update_me(body: ProfileUpdateIn, user: User = Depends(get_current_user)):
    """Update name, lastname, pseudo or profile picture of the current user."""
    user = await user_service.update_profile(user, body)
    return {"success": True, "message": "Profile updated successfully", "data": user_to_dict(user)}


@router.post("/change-password")
async def change_password(body: ChangePasswordIn, user: User = Depends(get_current_user)):
    """Requires the current password; the new one must be at least 6 characters."""
    await user_service.change_password(user, body)
    return {"success": True, "message": "Password changed successfully"}


@router.post("/logout")
async def logout(response: Response):
    """
    Clear the access token cookie. Always succeeds.

    The JWT itself stays valid until it expires.
    """
    response.delete_cookie("accessToken")
    return {"success": True, "message": "Logged out successfully"}
