"""
Review operations. Each mutation is followed by a best-effort rating refresh
of the affected recipe.
"""
import logging
from typing import List, Optional

from tortoise.exceptions import IntegrityError

from fridge.core.access import Claim, ensure_owner, ensure_owner_or_admin
from fridge.core.errors import DuplicateEntry
from fridge.core.lookup import get_or_404
from fridge.models import Review
from fridge.schemas.review import ReviewIn, ReviewUpdateIn
from fridge.services.ratings import refresh_rating
from fridge.services.recipes import get_visible_recipe

logger = logging.getLogger(__name__)


def _duplicate() -> DuplicateEntry:
    return DuplicateEntry("You have already reviewed this recipe", code="REVIEW_EXISTS")


async def create_review(actor: Claim, payload: ReviewIn) -> Review:
    """
    One review per (user, recipe). The unique index is the final arbiter:
    of two concurrent creates exactly one succeeds.
    """
    recipe = await get_visible_recipe(actor, payload.recipeId)
    if await Review.filter(user_id=actor.id, recipe_id=recipe.id).exists():
        raise _duplicate()
    try:
        review = await Review.create(
            user_id=actor.id,
            recipe_id=recipe.id,
            rating=payload.rating,
            comment=payload.comment,
        )
    except IntegrityError:
        raise _duplicate()
    logger.info("[reviews] review %s on recipe %s by %s", review.id, recipe.id, actor.id)
    await refresh_rating(recipe.id)
    return review


async def update_review(actor: Claim, review_id, payload: ReviewUpdateIn) -> Review:
    """Author only; admins may delete a review but not rewrite it."""
    review = await get_or_404(Review, review_id, "Review")
    ensure_owner(actor, review)
    if payload.rating is not None:
        review.rating = payload.rating
    if payload.comment is not None:
        review.comment = payload.comment
    await review.save()
    await refresh_rating(review.recipe_id)
    return review


async def delete_review(actor: Claim, review_id) -> None:
    review = await get_or_404(Review, review_id, "Review")
    ensure_owner_or_admin(actor, review)
    recipe_id = review.recipe_id
    await review.delete()
    logger.info("[reviews] review %s deleted by %s", review_id, actor.id)
    await refresh_rating(recipe_id)


async def list_for_recipe(actor: Optional[Claim], recipe_id) -> List[Review]:
    recipe = await get_visible_recipe(actor, recipe_id)
    return await Review.filter(recipe_id=recipe.id).order_by("-created_at").select_related("user")
