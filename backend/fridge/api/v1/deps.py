# fridge/api/v1/deps.py
from fastapi import Depends, Header, Request

from fridge.core.access import Claim, ensure_admin
from fridge.core.errors import Forbidden, Unauthorized
from fridge.core.security import verify_access_token
from fridge.models.user import User


def _extract_token(request: Request, authorization: str | None) -> str | None:
    # 1) Prioritize Authorization: Bearer xxx
    if authorization and authorization.lower().startswith("bearer "):
        token = authorization.split(" ", 1)[1].strip()
        if token:
            return token
    # 2) Secondly HttpOnly Cookie: accessToken
    return request.cookies.get("accessToken")


async def get_current_user(
    request: Request,
    authorization: str | None = Header(default=None),
) -> User:
    """
    FastAPI dependency to get the current authenticated user.

    The JWT is read from the Authorization header (Bearer) or, as a fallback,
    from the HttpOnly ``accessToken`` cookie. The account must still exist
    and be active.

    Raises:
        Unauthorized (401): AUTH_REQUIRED, AUTH_INVALID_TOKEN, AUTH_TOKEN_EXPIRED,
            AUTH_USER_NOT_FOUND
        Forbidden (403): ACCOUNT_DISABLED
    """
    token = _extract_token(request, authorization)
    if not token:
        raise Unauthorized("Authentication required", code="AUTH_REQUIRED")

    claim = verify_access_token(token)
    user = await User.get_or_none(id=claim.id)
    if not user:
        raise Unauthorized("User no longer exists", code="AUTH_USER_NOT_FOUND")
    if not user.is_active:
        raise Forbidden("Account is deactivated", code="ACCOUNT_DISABLED")
    return user


async def get_actor(user: User = Depends(get_current_user)) -> Claim:
    """The acting identity passed to core services. Role comes from the store, not the token."""
    return Claim(id=str(user.id), role=user.role)


async def get_optional_actor(
    request: Request,
    authorization: str | None = Header(default=None),
) -> Claim | None:
    """
    Like ``get_actor`` but anonymous callers (no token, bad token, disabled
    or deleted account) get ``None`` instead of an error. Used by public reads.
    """
    if not _extract_token(request, authorization):
        return None
    try:
        user = await get_current_user(request, authorization)
    except (Unauthorized, Forbidden):
        return None
    return Claim(id=str(user.id), role=user.role)


async def require_admin(actor: Claim = Depends(get_actor)) -> Claim:
    """
    FastAPI dependency to ensure the current user is an administrator.

    Raises:
        Forbidden (403): FORBIDDEN_ADMIN_ONLY
        Unauthorized (401): from get_current_user
    """
    ensure_admin(actor)
    return actor
