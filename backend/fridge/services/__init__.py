"""
Services Module

Core operations of the recipe platform. Every operation that acts on behalf
of someone takes the acting ``Claim`` as an explicit argument.

- moderation: recipe moderation state machine (approve / reject / resubmit)
- ratings: aggregate rating recomputation
- recipes, reviews, favorites, users: entity operations with access rules
- recipe_generator: AI recipe drafts (Gemini + Pexels)
- media: image uploads
"""

from . import ratings, moderation, recipes, reviews, favorites, users, media

from .ratings import compute_aggregate, recompute, refresh_rating
from .moderation import check_transition
from .recipe_generator import recipe_generator, RecipeGeneratorService

__all__ = [
    "ratings",
    "moderation",
    "recipes",
    "reviews",
    "favorites",
    "users",
    "media",
    "compute_aggregate",
    "recompute",
    "refresh_rating",
    "check_transition",
    "recipe_generator",
    "RecipeGeneratorService",
]
