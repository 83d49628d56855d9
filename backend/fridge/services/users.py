"""
User accounts: registration, login, profile, and admin user management.
"""
import logging
from typing import List, Optional, Tuple

from tortoise.exceptions import IntegrityError
from tortoise.expressions import Q
from tortoise.transactions import in_transaction

from fridge.core.access import ROLE_USER, Claim, ensure_admin, ensure_not_protected
from fridge.core.errors import DuplicateEntry, Forbidden, Unauthorized, ValidationError
from fridge.core.lookup import get_or_404
from fridge.core.security import hash_password, verify_password
from fridge.models import Favorite, Recipe, RecipeSource, RecipeStatus, Review, User
from fridge.schemas.auth import ChangePasswordIn, ProfileUpdateIn, RegisterIn
from fridge.services.ratings import refresh_rating

logger = logging.getLogger(__name__)


async def register(payload: RegisterIn) -> User:
    """Create a regular user. Email and pseudo arrive already normalized."""
    if await User.filter(email=payload.email).exists():
        raise DuplicateEntry("Email already registered", code="EMAIL_EXISTS")
    if await User.filter(pseudo=payload.pseudo).exists():
        raise DuplicateEntry("Pseudo already taken", code="PSEUDO_EXISTS")
    try:
        user = await User.create(
            name=payload.name,
            lastname=payload.lastname,
            pseudo=payload.pseudo,
            email=payload.email,
            password_hash=hash_password(payload.password),
            role=ROLE_USER,
        )
    except IntegrityError:
        # Lost a race with a concurrent registration; report the field that collided
        if await User.filter(pseudo=payload.pseudo).exists():
            raise DuplicateEntry("Pseudo already taken", code="PSEUDO_EXISTS")
        raise DuplicateEntry("Email already registered", code="EMAIL_EXISTS")
    logger.info("[users] registered %s (%s)", user.pseudo, user.id)
    return user


async def authenticate(email: str, password: str) -> User:
    """
    Raises:
        Unauthorized: unknown email or wrong password (indistinguishable)
        Forbidden: the account has been deactivated
    """
    user = await User.get_or_none(email=email.strip().lower())
    if not user or not verify_password(password, user.password_hash):
        raise Unauthorized("Invalid email or password", code="AUTH_INVALID_CREDENTIALS")
    if not user.is_active:
        raise Forbidden("Account is deactivated", code="ACCOUNT_DISABLED")
    return user


async def update_profile(user: User, payload: ProfileUpdateIn) -> User:
    if payload.pseudo is not None and payload.pseudo != user.pseudo:
        if await User.filter(pseudo=payload.pseudo).exclude(id=user.id).exists():
            raise DuplicateEntry("Pseudo already taken", code="PSEUDO_EXISTS")
        user.pseudo = payload.pseudo
    if payload.name is not None:
        user.name = payload.name
    if payload.lastname is not None:
        user.lastname = payload.lastname
    if payload.profilePicture is not None:
        user.profile_picture = payload.profilePicture
    try:
        await user.save()
    except IntegrityError:
        raise DuplicateEntry("Pseudo already taken", code="PSEUDO_EXISTS")
    return user


async def change_password(user: User, payload: ChangePasswordIn) -> None:
    if not verify_password(payload.currentPassword, user.password_hash):
        raise ValidationError("Current password is incorrect", code="INVALID_CURRENT_PASSWORD")
    user.password_hash = hash_password(payload.newPassword)
    await user.save()
    logger.info("[users] password changed for %s", user.id)


# ------------------------------------------------------------------------------
# Admin user management
# ------------------------------------------------------------------------------
async def list_users(
    actor: Claim,
    q: Optional[str] = None,
    offset: int = 0,
    limit: int = 20,
) -> Tuple[List[User], int]:
    ensure_admin(actor)
    qs = User.all()
    if q:
        qs = qs.filter(
            Q(pseudo__icontains=q) | Q(email__icontains=q) | Q(name__icontains=q) | Q(lastname__icontains=q)
        )
    total = await qs.count()
    rows = await qs.order_by("-created_at").offset(offset).limit(limit)
    return rows, total


async def set_active(actor: Claim, user_id, is_active: bool) -> User:
    """Activate or deactivate an account. Admin accounts cannot be touched."""
    ensure_admin(actor)
    user = await get_or_404(User, user_id, "User")
    ensure_not_protected(user)
    user.is_active = is_active
    await user.save(update_fields=["is_active", "updated_at"])
    logger.info("[users] user %s is_active=%s (by %s)", user.id, is_active, actor.id)
    return user


async def delete_user(actor: Claim, user_id) -> None:
    """
    Delete a user with everything they own:
      1) reviews and favorites on the user's recipes, then those recipes
      2) the user's own reviews and favorites on other recipes
      3) the account itself
    Ratings of other users' recipes the deleted user had reviewed are then
    recomputed.
    """
    ensure_admin(actor)
    user = await get_or_404(User, user_id, "User")
    ensure_not_protected(user)

    own_recipe_ids = await Recipe.filter(requested_by_id=user.id).values_list("id", flat=True)
    reviewed = Review.filter(user_id=user.id)
    if own_recipe_ids:
        reviewed = reviewed.exclude(recipe_id__in=own_recipe_ids)
    touched = await reviewed.values_list("recipe_id", flat=True)

    async with in_transaction():
        if own_recipe_ids:
            await Review.filter(recipe_id__in=own_recipe_ids).delete()
            await Favorite.filter(recipe_id__in=own_recipe_ids).delete()
            await Recipe.filter(id__in=own_recipe_ids).delete()
        await Review.filter(user_id=user.id).delete()
        await Favorite.filter(user_id=user.id).delete()
        await user.delete()

    logger.warning(
        "[users] deleted user %s (%d recipes) by %s", user_id, len(own_recipe_ids), actor.id
    )
    for recipe_id in set(touched):
        await refresh_rating(recipe_id)


async def platform_stats(actor: Claim) -> dict:
    ensure_admin(actor)
    return {
        "totalUsers": await User.all().count(),
        "totalRecipes": await Recipe.all().count(),
        "approvedRecipes": await Recipe.filter(status=RecipeStatus.APPROVED).count(),
        "pendingRecipes": await Recipe.filter(status=RecipeStatus.PENDING).count(),
        "rejectedRecipes": await Recipe.filter(status=RecipeStatus.REJECTED).count(),
        "totalFavorites": await Favorite.all().count(),
        "totalReviews": await Review.all().count(),
        "aiRecipes": await Recipe.filter(source=RecipeSource.AI).count(),
        "humanRecipes": await Recipe.filter(source=RecipeSource.HUMAN).count(),
    }
