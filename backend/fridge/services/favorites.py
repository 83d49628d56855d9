"""
Favorite operations: a user bookmarks a recipe they can see.
"""
import logging
from typing import List

from tortoise.exceptions import IntegrityError

from fridge.core.access import Claim, ensure_owner_or_admin
from fridge.core.errors import DuplicateEntry
from fridge.core.lookup import get_or_404
from fridge.models import Favorite
from fridge.schemas.review import FavoriteIn
from fridge.services.recipes import get_visible_recipe

logger = logging.getLogger(__name__)


async def add_favorite(actor: Claim, payload: FavoriteIn) -> Favorite:
    recipe = await get_visible_recipe(actor, payload.recipeId)
    try:
        fav = await Favorite.create(user_id=actor.id, recipe_id=recipe.id, notes=payload.notes)
    except IntegrityError:
        raise DuplicateEntry("Recipe is already in your favorites", code="FAVORITE_EXISTS")
    logger.info("[favorites] user %s saved recipe %s", actor.id, recipe.id)
    return fav


async def list_favorites(actor: Claim) -> List[Favorite]:
    return await Favorite.filter(user_id=actor.id).order_by("-created_at").select_related("recipe")


async def find_favorite(actor: Claim, recipe_id) -> Favorite | None:
    """The actor's favorite entry for a recipe, if any."""
    recipe = await get_visible_recipe(actor, recipe_id)
    return await Favorite.get_or_none(user_id=actor.id, recipe_id=recipe.id)


async def remove_favorite(actor: Claim, favorite_id) -> None:
    fav = await get_or_404(Favorite, favorite_id, "Favorite")
    ensure_owner_or_admin(actor, fav)
    await fav.delete()
