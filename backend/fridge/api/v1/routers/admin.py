# fridge/api/v1/routers/admin.py
from __future__ import annotations

from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query

from fridge.api.v1.deps import require_admin
from fridge.api.v1.serializers import recipe_to_dict, user_to_dict
from fridge.core.access import Claim
from fridge.schemas.admin import AdminUserUpdateIn, PlatformStatsOut
from fridge.schemas.recipe import RejectRecipeIn
from fridge.services import moderation
from fridge.services import recipes as recipe_service
from fridge.services import users as user_service

router = APIRouter(prefix="/admin", tags=["admin"])


# ==============================================================================
# I. User Management Interface
#     Prefix: /api/v1/admin/users
# ==============================================================================
@router.get("/users")
async def list_users(
    q: str | None = Query(default=None, description="Fuzzy search by pseudo/email/name"),
    offset: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
    admin: Claim = Depends(require_admin),
):
    """
    Get paginated list of all users (admin only), newest first.

    Raises:
        Forbidden (403): If user is not an admin
        Unauthorized (401): If user is not authenticated
    """
    rows, total = await user_service.list_users(admin, q, offset, limit)
    return {
        "success": True,
        "data": {"items": [user_to_dict(u) for u in rows], "offset": offset, "limit": limit, "total": total},
    }


@router.patch("/users/{user_id}")
async def update_user_status(
    user_id: str,
    body: AdminUserUpdateIn,
    admin: Claim = Depends(require_admin),
):
    """
    Activate or deactivate an account. Admin accounts are protected.

    Error codes:
        - USER_NOT_FOUND (404)
        - ADMIN_PROTECTED (403)
    """
    user = await user_service.set_active(admin, user_id, body.isActive)
    state = "activated" if user.is_active else "deactivated"
    return {"success": True, "message": f"User {state} successfully", "data": user_to_dict(user)}


@router.delete("/users/{user_id}")
async def delete_user(user_id: str, admin: Claim = Depends(require_admin)):
    """
    Delete a user together with their recipes, reviews and favorites.
    Deleting an admin always fails with ADMIN_PROTECTED.
    """
    await user_service.delete_user(admin, user_id)
    return {"success": True, "message": "User and all associated data deleted successfully"}


@router.get("/stats")
async def stats(admin: Claim = Depends(require_admin)):
    data = await user_service.platform_stats(admin)
    return {"success": True, "data": PlatformStatsOut(**data).model_dump()}


# ==============================================================================
# II. Recipe Moderation Interface
#     Prefix: /api/v1/admin/recipes
# ==============================================================================
@router.get("/recipes/pending")
async def pending_recipes(admin: Claim = Depends(require_admin)):
    """Moderation queue, oldest submission first."""
    rows = await recipe_service.list_pending()
    return {"success": True, "data": [recipe_to_dict(r) for r in rows]}


@router.get("/recipes")
async def all_recipes(
    status: Optional[Literal["pending", "approved", "rejected"]] = Query(default=None),
    source: Optional[Literal["human", "ai"]] = Query(default=None),
    offset: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
    admin: Claim = Depends(require_admin),
):
    rows, total = await recipe_service.list_all(status, source, offset, limit)
    return {
        "success": True,
        "data": {"items": [recipe_to_dict(r) for r in rows], "offset": offset, "limit": limit, "total": total},
    }


@router.put("/recipes/{recipe_id}/approve")
async def approve_recipe(recipe_id: str, admin: Claim = Depends(require_admin)):
    """
    Error codes:
        - RECIPE_NOT_FOUND (404)
        - ALREADY_APPROVED (409)
    """
    recipe = await moderation.approve(admin, recipe_id)
    return {"success": True, "message": "Recipe approved successfully", "data": recipe_to_dict(recipe)}


@router.put("/recipes/{recipe_id}/reject")
async def reject_recipe(recipe_id: str, body: RejectRecipeIn, admin: Claim = Depends(require_admin)):
    """
    Error codes:
        - REJECTION_REASON_REQUIRED (400)
        - RECIPE_NOT_FOUND (404)
        - ALREADY_REJECTED (409)
    """
    recipe = await moderation.reject(admin, recipe_id, body.reason)
    return {"success": True, "message": "Recipe rejected", "data": recipe_to_dict(recipe)}


@router.delete("/recipes/{recipe_id}")
async def delete_recipe(recipe_id: str, admin: Claim = Depends(require_admin)):
    await recipe_service.delete_recipe(admin, recipe_id)
    return {"success": True, "message": "Recipe deleted successfully"}
