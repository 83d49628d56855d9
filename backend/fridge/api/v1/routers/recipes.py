# fridge/api/v1/routers/recipes.py
from fastapi import APIRouter, Depends, Query, status

from fridge.api.v1.deps import get_actor, get_optional_actor
from fridge.api.v1.serializers import recipe_to_dict
from fridge.core.access import Claim
from fridge.models.recipe import Category
from fridge.schemas.recipe import GenerateRecipesIn, RecipeIn, RecipeUpdateIn
from fridge.services import recipes as recipe_service
from fridge.services.recipe_generator import recipe_generator

router = APIRouter(prefix="/recipes", tags=["recipes"])


def _page(rows, offset: int, limit: int, total: int) -> dict:
    return {
        "items": [recipe_to_dict(r) for r in rows],
        "offset": offset,
        "limit": limit,
        "total": total,
    }


@router.post("/generate")
async def generate(body: GenerateRecipesIn):
    """
    Draft recipes with AI from a list of ingredients. Nothing is stored;
    the client saves a draft through POST /recipes with source="ai".

    Error codes:
        - AI_UNAVAILABLE / AI_BAD_RESPONSE (502)
    """
    drafts = await recipe_generator.generate(body.ingredients)
    return {"success": True, "message": "Recipes generated successfully", "data": drafts}


@router.get("")
async def list_recipes(
    offset: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
):
    """Public feed: approved recipes only, newest first."""
    rows, total = await recipe_service.list_public(offset, limit)
    return {"success": True, "data": _page(rows, offset, limit, total)}


@router.get("/category/{category}")
async def list_by_category(
    category: Category,
    offset: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
):
    rows, total = await recipe_service.list_public(offset, limit, category=category.value)
    return {"success": True, "data": _page(rows, offset, limit, total)}


@router.get("/search")
async def search(
    q: str = Query(..., min_length=1, description="Matched against title and description"),
    offset: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
):
    rows, total = await recipe_service.list_public(offset, limit, q=q.strip())
    return {"success": True, "data": _page(rows, offset, limit, total)}


@router.get("/mine")
async def my_recipes(actor: Claim = Depends(get_actor)):
    """Every recipe of the caller, whatever its moderation status."""
    rows = await recipe_service.list_owned(actor)
    return {"success": True, "data": [recipe_to_dict(r) for r in rows]}


@router.get("/{recipe_id}")
async def get_recipe(recipe_id: str, actor: Claim | None = Depends(get_optional_actor)):
    """
    Approved recipes are public. Pending and rejected ones answer 404 unless
    the caller is the owner or an admin.
    """
    recipe = await recipe_service.get_visible_recipe(actor, recipe_id)
    await recipe.fetch_related("requested_by")
    return {"success": True, "data": recipe_to_dict(recipe)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_recipe(body: RecipeIn, actor: Claim = Depends(get_actor)):
    recipe = await recipe_service.create_recipe(actor, body)
    return {
        "success": True,
        "message": "Recipe submitted for review",
        "data": recipe_to_dict(recipe),
    }


@router.put("/{recipe_id}")
async def update_recipe(recipe_id: str, body: RecipeUpdateIn, actor: Claim = Depends(get_actor)):
    """Owner only. The edited recipe goes back to pending moderation."""
    recipe = await recipe_service.update_recipe(actor, recipe_id, body)
    return {
        "success": True,
        "message": "Recipe updated and resubmitted for review",
        "data": recipe_to_dict(recipe),
    }


@router.delete("/{recipe_id}")
async def delete_recipe(recipe_id: str, actor: Claim = Depends(get_actor)):
    """Owner or admin. Reviews and favorites of the recipe go with it."""
    await recipe_service.delete_recipe(actor, recipe_id)
    return {"success": True, "message": "Recipe deleted successfully"}
