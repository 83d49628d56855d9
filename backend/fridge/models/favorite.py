# fridge/models/favorite.py
import uuid
from tortoise import fields, models

class Favorite(models.Model):
    id = fields.UUIDField(pk=True, default=uuid.uuid4)
    user = fields.ForeignKeyField("models.User", related_name="favorites", on_delete=fields.CASCADE)
    recipe = fields.ForeignKeyField("models.Recipe", related_name="favorites", on_delete=fields.CASCADE)
    notes = fields.CharField(max_length=500, default="")  # Optional personal note
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "favorites"
        unique_together = (("user", "recipe"),)  # A user can't favorite the same recipe twice

    @property
    def owner_id(self):
        return self.user_id
