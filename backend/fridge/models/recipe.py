# fridge/models/recipe.py
"""
Database model for recipes.
A recipe is submitted by a user, moderated by an admin and, once approved,
shown in the public feed where it collects reviews and favorites.
"""
import uuid
from enum import Enum
from tortoise import fields, models


class RecipeStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Difficulty(str, Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class Category(str, Enum):
    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"
    DESSERT = "Dessert"
    SNACK = "Snack"
    BEVERAGE = "Beverage"


class RecipeSource(str, Enum):
    HUMAN = "human"
    AI = "ai"


class Recipe(models.Model):
    """
    Recipe database model.

    Relationships:
    - Belongs to a User through ``requested_by`` (cascade delete)
    - Optionally references the admin who moderated it (``reviewed_by``)
    - Has many Reviews and Favorites (cascade delete)

    ``average_rating`` / ``total_reviews`` are a denormalized cache kept in
    sync by ``fridge.services.ratings``; never write them anywhere else.
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)
    title = fields.CharField(max_length=100)
    description = fields.CharField(max_length=500)
    ingredients = fields.JSONField(default=list)  # [{"name", "quantity", "unit"}]
    instructions = fields.JSONField(default=list)  # [{"step", "description"}], ordered by step
    cooking_time = fields.IntField()  # minutes
    preparation_time = fields.IntField()  # minutes
    servings = fields.IntField(default=1)
    difficulty = fields.CharEnumField(Difficulty, max_length=8, default=Difficulty.MEDIUM)
    category = fields.CharEnumField(Category, max_length=16, index=True)
    tags = fields.JSONField(default=list)
    image = fields.CharField(max_length=1024, default="")
    nutritional_info = fields.JSONField(null=True)  # {"calories", "protein", "carbs", "fat"}
    source = fields.CharEnumField(RecipeSource, max_length=8, default=RecipeSource.HUMAN)

    requested_by = fields.ForeignKeyField(
        "models.User",
        related_name="recipes",
        on_delete=fields.CASCADE,
    )

    # Moderation
    status = fields.CharEnumField(RecipeStatus, max_length=16, default=RecipeStatus.PENDING, index=True)
    rejection_reason = fields.CharField(max_length=500, null=True)
    reviewed_by = fields.ForeignKeyField(
        "models.User",
        related_name="moderated_recipes",
        null=True,
        on_delete=fields.SET_NULL,
    )
    reviewed_at = fields.DatetimeField(null=True)

    # Aggregate rating cache
    average_rating = fields.FloatField(default=0)
    total_reviews = fields.IntField(default=0)

    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "recipes"

    @property
    def owner_id(self):
        return self.requested_by_id
