# fridge/core/bootstrap.py
"""
Bootstrap module for application initialization.
Creates the default admin account on first startup. Registration never
grants the admin role, so this is the only way an admin comes into existence.
"""
import os
import logging
from fridge.models.user import User
from fridge.core.security import hash_password

logger = logging.getLogger("uvicorn.error")

async def ensure_default_admin() -> None:
    """
    If no admin exists in the database, create a default admin based on environment variables.
    Only takes effect under the following conditions:
      - Currently no user with role="admin"
      - And ADMIN_PASSWORD is set (to avoid using default weak password)
    Environment variables:
      ADMIN_PSEUDO   (default: "admin")
      ADMIN_EMAIL    (default: "admin@fridge.local")
      ADMIN_PASSWORD (required, otherwise won't create)
    """
    if await User.filter(role="admin").exists():
        return

    admin_password = os.getenv("ADMIN_PASSWORD")
    if not admin_password:
        logger.warning("[bootstrap] No admin present, but ADMIN_PASSWORD not set -> skip creating default admin.")
        return

    admin_pseudo = os.getenv("ADMIN_PSEUDO", "admin").strip().lower()[:8]
    admin_email = os.getenv("ADMIN_EMAIL", "admin@fridge.local").strip().lower()

    if await User.filter(email=admin_email).exists():
        logger.warning("[bootstrap] ADMIN_EMAIL %s belongs to a regular account -> skip.", admin_email)
        return

    # A regular user may already own the pseudo: append a number (pseudo is at most 10 chars)
    base_pseudo = admin_pseudo
    suffix = 1
    while await User.filter(pseudo=admin_pseudo).exists():
        suffix += 1
        admin_pseudo = f"{base_pseudo}{suffix}"

    u = await User.create(
        name="Admin",
        lastname="Fridge",
        pseudo=admin_pseudo,
        email=admin_email,
        password_hash=hash_password(admin_password),
        role="admin",
    )
    logger.warning("[bootstrap] Created default admin -> pseudo=%s email=%s id=%s",
                   u.pseudo, u.email, u.id)
