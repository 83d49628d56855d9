# fridge/models/user.py
"""
Database model for users.
Represents an account in the system: identity fields, credentials and the
role used for access control.
"""
import uuid
from tortoise import fields, models

class User(models.Model):
    """
    User database model.

    Relationships:
    - Has many Recipes (via ``requested_by`` on Recipe, cascade delete)
    - Has many Reviews and Favorites (cascade delete)

    Security:
    - Password is stored as an Argon2 hash
    - ``email`` and ``pseudo`` are stored trimmed and lower-cased, so the
      unique indexes enforce the normalized form
    - ``is_active=False`` blocks authentication
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)
    name = fields.CharField(max_length=64)
    lastname = fields.CharField(max_length=64)
    pseudo = fields.CharField(max_length=10, unique=True, index=True)  # 3-10 chars
    email = fields.CharField(max_length=256, unique=True, index=True)
    password_hash = fields.CharField(max_length=255)
    role = fields.CharField(max_length=16, default="user")  # "user" or "admin"
    profile_picture = fields.CharField(max_length=512, default="")
    is_active = fields.BooleanField(default=True)
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "users"

    @property
    def owner_id(self):
        return self.id
