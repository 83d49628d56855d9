# fridge/schemas/review.py
"""
Pydantic schemas for review and favorite endpoints.
"""
from typing import Optional

from pydantic import BaseModel, Field, constr, model_validator

Comment = constr(strip_whitespace=True, min_length=10, max_length=500)


class ReviewIn(BaseModel):
    recipeId: str
    rating: int = Field(ge=1, le=5)
    comment: Comment


class ReviewUpdateIn(BaseModel):
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    comment: Optional[Comment] = None

    @model_validator(mode="after")
    def _not_empty(self):
        if self.rating is None and self.comment is None:
            raise ValueError("rating or comment is required")
        return self


class FavoriteIn(BaseModel):
    recipeId: str
    notes: constr(strip_whitespace=True, max_length=500) = ""
