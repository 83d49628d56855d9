# fridge/models/__init__.py
"""
Database models module initialization.
Exports all Tortoise ORM models for convenient imports throughout the application.

Models exported:
- User: account, credentials and role
- Recipe: submitted dish with its moderation status and rating cache
- Review: one user's rating/comment of one recipe
- Favorite: one user's bookmark of one recipe
"""
from .user import User
from .recipe import Recipe, RecipeStatus, RecipeSource, Category, Difficulty
from .review import Review
from .favorite import Favorite
