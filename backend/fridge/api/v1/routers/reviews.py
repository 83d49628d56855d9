# fridge/api/v1/routers/reviews.py
from fastapi import APIRouter, Depends, status

from fridge.api.v1.deps import get_actor, get_optional_actor
from fridge.api.v1.serializers import review_to_dict
from fridge.core.access import Claim
from fridge.schemas.review import ReviewIn, ReviewUpdateIn
from fridge.services import reviews as review_service

router = APIRouter(prefix="/reviews", tags=["reviews"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_review(body: ReviewIn, actor: Claim = Depends(get_actor)):
    """
    One review per user and recipe; the recipe's average rating is
    recomputed afterwards.

    Error codes:
        - RECIPE_NOT_FOUND (404)
        - REVIEW_EXISTS (409)
    """
    review = await review_service.create_review(actor, body)
    return {"success": True, "message": "Review added successfully", "data": review_to_dict(review)}


@router.get("/recipe/{recipe_id}")
async def list_recipe_reviews(recipe_id: str, actor: Claim | None = Depends(get_optional_actor)):
    rows = await review_service.list_for_recipe(actor, recipe_id)
    return {"success": True, "data": [review_to_dict(r) for r in rows]}


@router.put("/{review_id}")
async def update_review(review_id: str, body: ReviewUpdateIn, actor: Claim = Depends(get_actor)):
    review = await review_service.update_review(actor, review_id, body)
    return {"success": True, "message": "Review updated successfully", "data": review_to_dict(review)}


@router.delete("/{review_id}")
async def delete_review(review_id: str, actor: Claim = Depends(get_actor)):
    await review_service.delete_review(actor, review_id)
    return {"success": True, "message": "Review deleted successfully"}
