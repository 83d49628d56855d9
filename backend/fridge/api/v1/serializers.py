# fridge/api/v1/serializers.py
"""
Model -> JSON dict conversion for API responses (camelCase keys, ISO dates).
Related objects are only embedded when the query fetched them.
"""
from fridge.models import Favorite, Recipe, Review, User


def _iso(value):
    return value.isoformat() if value else None


def _enum(value):
    return getattr(value, "value", value)


def user_to_dict(u: User) -> dict:
    """Never includes the password hash."""
    return {
        "id": str(u.id),
        "name": u.name,
        "lastname": u.lastname,
        "pseudo": u.pseudo,
        "email": u.email,
        "role": u.role,
        "profilePicture": u.profile_picture,
        "isActive": u.is_active,
        "createdAt": _iso(u.created_at),
    }


def author_to_dict(u: User) -> dict:
    return {"id": str(u.id), "name": u.name, "pseudo": u.pseudo, "profilePicture": u.profile_picture}


def recipe_to_dict(r: Recipe) -> dict:
    data = {
        "id": str(r.id),
        "title": r.title,
        "description": r.description,
        "ingredients": r.ingredients,
        "instructions": r.instructions,
        "cookingTime": r.cooking_time,
        "preparationTime": r.preparation_time,
        "servings": r.servings,
        "difficulty": _enum(r.difficulty),
        "category": _enum(r.category),
        "tags": r.tags,
        "image": r.image,
        "nutritionalInfo": r.nutritional_info,
        "source": _enum(r.source),
        "requestedBy": str(r.requested_by_id),
        "status": _enum(r.status),
        "rejectionReason": r.rejection_reason,
        "reviewedBy": str(r.reviewed_by_id) if r.reviewed_by_id else None,
        "reviewedAt": _iso(r.reviewed_at),
        "averageRating": r.average_rating,
        "totalReviews": r.total_reviews,
        "createdAt": _iso(r.created_at),
        "updatedAt": _iso(r.updated_at),
    }
    author = getattr(r, "_requested_by", None)
    if isinstance(author, User):
        data["author"] = author_to_dict(author)
    return data


def review_to_dict(rv: Review) -> dict:
    data = {
        "id": str(rv.id),
        "recipeId": str(rv.recipe_id),
        "userId": str(rv.user_id),
        "rating": rv.rating,
        "comment": rv.comment,
        "createdAt": _iso(rv.created_at),
        "updatedAt": _iso(rv.updated_at),
    }
    user = getattr(rv, "_user", None)
    if isinstance(user, User):
        data["user"] = author_to_dict(user)
    return data


def favorite_to_dict(f: Favorite) -> dict:
    data = {
        "id": str(f.id),
        "recipeId": str(f.recipe_id),
        "userId": str(f.user_id),
        "notes": f.notes,
        "createdAt": _iso(f.created_at),
    }
    recipe = getattr(f, "_recipe", None)
    if isinstance(recipe, Recipe):
        data["recipe"] = recipe_to_dict(recipe)
    return data
