"""
Recipe store operations.

Visibility: an approved recipe is visible to everyone (anonymous included);
a pending or rejected recipe only to its owner and to admins. Anyone else
gets ``RECIPE_NOT_FOUND`` so hidden recipes are indistinguishable from
missing ones.
"""
import logging
from typing import List, Optional, Tuple

from tortoise.expressions import Q
from tortoise.transactions import in_transaction

from fridge.core.access import Claim, ensure_owner, ensure_owner_or_admin, is_admin, is_owner
from fridge.core.errors import NotFound
from fridge.core.lookup import get_or_404
from fridge.models import Favorite, Recipe, RecipeStatus, Review
from fridge.schemas.recipe import RecipeIn, RecipeUpdateIn
from fridge.services import moderation

logger = logging.getLogger(__name__)

# API field name -> model column
_FIELD_MAP = {
    "title": "title",
    "description": "description",
    "ingredients": "ingredients",
    "instructions": "instructions",
    "cookingTime": "cooking_time",
    "preparationTime": "preparation_time",
    "servings": "servings",
    "difficulty": "difficulty",
    "category": "category",
    "tags": "tags",
    "image": "image",
    "nutritionalInfo": "nutritional_info",
}


def _columns(data: dict) -> dict:
    return {_FIELD_MAP[k]: v for k, v in data.items() if k in _FIELD_MAP}


def can_view(actor: Optional[Claim], recipe: Recipe) -> bool:
    if recipe.status == RecipeStatus.APPROVED:
        return True
    if actor is None:
        return False
    return is_admin(actor) or is_owner(actor, recipe)


async def get_visible_recipe(actor: Optional[Claim], recipe_id) -> Recipe:
    """Load a recipe the actor may see, or raise NotFound."""
    recipe = await get_or_404(Recipe, recipe_id, "Recipe")
    if not can_view(actor, recipe):
        raise NotFound.for_resource("Recipe", recipe_id)
    return recipe


async def create_recipe(actor: Claim, payload: RecipeIn) -> Recipe:
    """Create a recipe owned by the actor. It always starts as pending."""
    data = payload.model_dump(mode="json")
    recipe = await Recipe.create(
        requested_by_id=actor.id,
        status=RecipeStatus.PENDING,
        source=data.pop("source"),
        **_columns(data),
    )
    logger.info("[recipes] recipe %s created by %s (source=%s)", recipe.id, actor.id, recipe.source)
    return recipe


async def update_recipe(actor: Claim, recipe_id, payload: RecipeUpdateIn) -> Recipe:
    """
    Owner edit. Admins moderate, they do not edit.

    Every successful edit sends the recipe back to pending and clears the
    previous moderation outcome. Reviews and favorites are kept. Only the
    edited and moderation columns are written, so a rating refresh that runs
    meanwhile is not overwritten.
    """
    recipe = await get_or_404(Recipe, recipe_id, "Recipe")
    ensure_owner(actor, recipe)
    changes = _columns(payload.model_dump(mode="json", exclude_none=True))
    recipe.update_from_dict(changes)
    moderation.resubmit(recipe)
    await recipe.save(update_fields=[*changes, *moderation.RESUBMIT_FIELDS, "updated_at"])
    logger.info("[recipes] recipe %s edited by owner, back to pending", recipe.id)
    return recipe


async def delete_recipe(actor: Claim, recipe_id) -> None:
    """Owner or admin. Removes the recipe with all its reviews and favorites."""
    recipe = await get_or_404(Recipe, recipe_id, "Recipe")
    ensure_owner_or_admin(actor, recipe)
    async with in_transaction():
        await Review.filter(recipe_id=recipe.id).delete()
        await Favorite.filter(recipe_id=recipe.id).delete()
        await recipe.delete()
    logger.info("[recipes] recipe %s deleted by %s", recipe.id, actor.id)


async def list_public(
    offset: int = 0,
    limit: int = 20,
    category: Optional[str] = None,
    q: Optional[str] = None,
) -> Tuple[List[Recipe], int]:
    """Approved recipes, newest first, optionally filtered by category or text."""
    qs = Recipe.filter(status=RecipeStatus.APPROVED)
    if category:
        qs = qs.filter(category=category)
    if q:
        qs = qs.filter(Q(title__icontains=q) | Q(description__icontains=q))
    total = await qs.count()
    rows = await qs.order_by("-created_at").offset(offset).limit(limit).select_related("requested_by")
    return rows, total


async def list_owned(actor: Claim) -> List[Recipe]:
    """All recipes of the actor in every state."""
    return await Recipe.filter(requested_by_id=actor.id).order_by("-created_at")


async def list_all(
    status: Optional[str] = None,
    source: Optional[str] = None,
    offset: int = 0,
    limit: int = 20,
) -> Tuple[List[Recipe], int]:
    """Admin listing across every owner and state."""
    qs = Recipe.all()
    if status:
        qs = qs.filter(status=status)
    if source:
        qs = qs.filter(source=source)
    total = await qs.count()
    rows = await qs.order_by("-created_at").offset(offset).limit(limit).select_related("requested_by")
    return rows, total


async def list_pending() -> List[Recipe]:
    """Moderation queue, oldest first."""
    return await Recipe.filter(status=RecipeStatus.PENDING).order_by("created_at").select_related("requested_by")
