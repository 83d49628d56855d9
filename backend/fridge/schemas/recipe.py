# fridge/schemas/recipe.py
"""
Pydantic schemas for recipe endpoints.
Ingredients, instructions, tags and nutritional info are structured types
checked once here, at the API boundary; services receive validated objects.
"""
from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, constr, field_validator, model_validator

Difficulty = Literal["Easy", "Medium", "Hard"]
Category = Literal["Breakfast", "Lunch", "Dinner", "Dessert", "Snack", "Beverage"]
Source = Literal["human", "ai"]
Status = Literal["pending", "approved", "rejected"]

Title = constr(strip_whitespace=True, min_length=3, max_length=100)
Description = constr(strip_whitespace=True, min_length=1, max_length=500)


class IngredientIn(BaseModel):
    name: constr(strip_whitespace=True, min_length=1, max_length=100)
    quantity: float = Field(ge=0)
    unit: constr(strip_whitespace=True, min_length=1, max_length=32)


class InstructionIn(BaseModel):
    step: int = Field(ge=1)
    description: constr(strip_whitespace=True, min_length=1, max_length=1000)


class NutritionalInfoIn(BaseModel):
    calories: Optional[float] = Field(default=None, ge=0)
    protein: Optional[float] = Field(default=None, ge=0)
    carbs: Optional[float] = Field(default=None, ge=0)
    fat: Optional[float] = Field(default=None, ge=0)


def _ordered_steps(steps: List[InstructionIn]) -> List[InstructionIn]:
    ordered = sorted(steps, key=lambda s: s.step)
    numbers = [s.step for s in ordered]
    if len(set(numbers)) != len(numbers):
        raise ValueError("instruction step numbers must be unique")
    return ordered


def _clean_tags(tags: List[str]) -> List[str]:
    seen: list[str] = []
    for t in tags:
        t = t.strip()
        if t and t not in seen:
            seen.append(t)
    return seen


class RecipeIn(BaseModel):
    """
    Request model for creating a recipe.
    The recipe always starts as "pending"; status is never accepted from clients.
    """
    title: Title
    description: Description
    ingredients: List[IngredientIn] = Field(min_length=1)
    instructions: List[InstructionIn] = Field(min_length=1)
    cookingTime: int = Field(gt=0)  # minutes
    preparationTime: int = Field(gt=0)  # minutes
    servings: int = Field(default=1, ge=1)
    difficulty: Difficulty = "Medium"
    category: Category
    tags: List[str] = Field(default_factory=list)
    image: str = ""  # Path returned by the upload endpoint, stored verbatim
    nutritionalInfo: Optional[NutritionalInfoIn] = None
    source: Source = "human"  # "ai" when the user saves a generated draft

    @field_validator("instructions")
    @classmethod
    def _instructions_ordered(cls, v: List[InstructionIn]) -> List[InstructionIn]:
        return _ordered_steps(v)

    @field_validator("tags")
    @classmethod
    def _tags_clean(cls, v: List[str]) -> List[str]:
        return _clean_tags(v)


class RecipeUpdateIn(BaseModel):
    """
    Request model for editing a recipe. All fields optional; only provided
    fields are changed. Any edit sends the recipe back to moderation.
    """
    title: Optional[Title] = None
    description: Optional[Description] = None
    ingredients: Optional[List[IngredientIn]] = Field(default=None, min_length=1)
    instructions: Optional[List[InstructionIn]] = Field(default=None, min_length=1)
    cookingTime: Optional[int] = Field(default=None, gt=0)
    preparationTime: Optional[int] = Field(default=None, gt=0)
    servings: Optional[int] = Field(default=None, ge=1)
    difficulty: Optional[Difficulty] = None
    category: Optional[Category] = None
    tags: Optional[List[str]] = None
    image: Optional[str] = None
    nutritionalInfo: Optional[NutritionalInfoIn] = None

    @field_validator("instructions")
    @classmethod
    def _instructions_ordered(cls, v):
        return _ordered_steps(v) if v is not None else v

    @field_validator("tags")
    @classmethod
    def _tags_clean(cls, v):
        return _clean_tags(v) if v is not None else v

    @model_validator(mode="after")
    def _not_empty(self):
        if not self.model_dump(exclude_none=True):
            raise ValueError("at least one field must be provided")
        return self


class RejectRecipeIn(BaseModel):
    """Reason is checked by the moderation service so an empty one is a domain ValidationError."""
    reason: str = ""


class GenerateRecipesIn(BaseModel):
    ingredients: List[constr(strip_whitespace=True, min_length=1, max_length=64)] = Field(
        min_length=1, max_length=30
    )
