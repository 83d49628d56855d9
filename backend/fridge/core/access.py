# fridge/core/access.py
"""
Access control rules.

Two independent predicates are evaluated per request: ``is_owner`` (the actor
is the resource's owner) and ``is_admin`` (the actor has the admin role). The
``ensure_*`` helpers raise ``Forbidden`` when a rule is not met. Every core
operation receives the acting ``Claim`` as an explicit argument; nothing here
reads request state.

Resources expose their owner through an ``owner_id`` attribute:
``requested_by_id`` on Recipe, ``user_id`` on Review and Favorite.
"""
from dataclasses import dataclass
from typing import Any

from fridge.core.errors import Forbidden

ROLE_ADMIN = "admin"
ROLE_USER = "user"


@dataclass(frozen=True)
class Claim:
    """Identity asserted by a verified credential: ``{id, role}``."""

    id: str
    role: str = ROLE_USER


def is_admin(actor: Claim) -> bool:
    return actor.role == ROLE_ADMIN


def is_owner(actor: Claim, resource: Any) -> bool:
    owner_id = getattr(resource, "owner_id", None)
    return owner_id is not None and str(owner_id) == str(actor.id)


def ensure_admin(actor: Claim) -> None:
    if not is_admin(actor):
        raise Forbidden("Access denied. Admin only.", code="FORBIDDEN_ADMIN_ONLY")


def ensure_owner(actor: Claim, resource: Any) -> None:
    """Update rights: the owner only. Admins moderate, they do not edit."""
    if not is_owner(actor, resource):
        raise Forbidden("Only the owner can modify this resource")


def ensure_owner_or_admin(actor: Claim, resource: Any) -> None:
    """Delete rights: the owner or any admin."""
    if not (is_owner(actor, resource) or is_admin(actor)):
        raise Forbidden("Only the owner or an admin can delete this resource")


def ensure_not_protected(target_user: Any) -> None:
    """Admin accounts can never be removed or disabled through user management."""
    if getattr(target_user, "role", None) == ROLE_ADMIN:
        raise Forbidden("Admin users cannot be deleted or deactivated", code="ADMIN_PROTECTED")
