# fridge/schemas/admin.py
"""
Pydantic schemas for admin endpoints.
"""
from pydantic import BaseModel


class AdminUserUpdateIn(BaseModel):
    """Admins can only toggle account activation through this endpoint."""
    isActive: bool


class PlatformStatsOut(BaseModel):
    totalUsers: int
    totalRecipes: int
    approvedRecipes: int
    pendingRecipes: int
    rejectedRecipes: int
    totalFavorites: int
    totalReviews: int
    aiRecipes: int
    humanRecipes: int
