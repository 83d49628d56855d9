# fridge/api/v1/routers/favorites.py
from fastapi import APIRouter, Depends, status

from fridge.api.v1.deps import get_actor
from fridge.api.v1.serializers import favorite_to_dict
from fridge.core.access import Claim
from fridge.schemas.review import FavoriteIn
from fridge.services import favorites as favorite_service

router = APIRouter(prefix="/favorites", tags=["favorites"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def add_favorite(body: FavoriteIn, actor: Claim = Depends(get_actor)):
    fav = await favorite_service.add_favorite(actor, body)
    return {"success": True, "message": "Recipe added to favorites", "data": favorite_to_dict(fav)}


@router.get("")
async def list_favorites(actor: Claim = Depends(get_actor)):
    rows = await favorite_service.list_favorites(actor)
    return {"success": True, "data": [favorite_to_dict(f) for f in rows]}


@router.get("/check/{recipe_id}")
async def check_favorite(recipe_id: str, actor: Claim = Depends(get_actor)):
    """Tell the client whether the caller already saved this recipe."""
    fav = await favorite_service.find_favorite(actor, recipe_id)
    return {
        "success": True,
        "data": {"isFavorite": fav is not None, "favoriteId": str(fav.id) if fav else None},
    }


@router.delete("/{favorite_id}")
async def remove_favorite(favorite_id: str, actor: Claim = Depends(get_actor)):
    await favorite_service.remove_favorite(actor, favorite_id)
    return {"success": True, "message": "Recipe removed from favorites"}
