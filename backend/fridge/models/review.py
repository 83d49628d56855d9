# fridge/models/review.py
import uuid
from tortoise import fields, models

class Review(models.Model):
    """
    One user's opinion of one recipe.

    The (user, recipe) pair is unique at the store level, so two concurrent
    submissions for the same pair cannot both be stored.
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)
    user = fields.ForeignKeyField("models.User", related_name="reviews", on_delete=fields.CASCADE)
    recipe = fields.ForeignKeyField("models.Recipe", related_name="reviews", on_delete=fields.CASCADE)
    rating = fields.SmallIntField()  # 1-5
    comment = fields.CharField(max_length=500)  # 10-500 chars
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "reviews"
        unique_together = (("user", "recipe"),)

    @property
    def owner_id(self):
        return self.user_id
