"""
Recipe Moderation State Machine

States: pending -> approved / rejected. Named transitions, each validating
its own preconditions:

    resubmit  (owner edit, any state)        -> pending
    approve   (admin, pending | rejected)    -> approved
    reject    (admin, pending | approved)    -> rejected, reason required

``delete`` is the remaining transition and lives in ``services.recipes``
because of its cascade.

Writes are conditional UPDATEs filtered on the allowed source states, so a
transition is a single atomic step on the recipe row: two admins racing on
the same recipe cannot both succeed.
"""
import datetime as dt
import logging
from typing import Dict, FrozenSet

from fridge.core.access import Claim, ensure_admin
from fridge.core.errors import AlreadyApproved, InvalidTransition, NotFound, ValidationError
from fridge.core.lookup import get_or_404
from fridge.models import Recipe, RecipeStatus

logger = logging.getLogger(__name__)

APPROVE = "approve"
REJECT = "reject"
RESUBMIT = "resubmit"

# columns resubmit() touches; saved alongside the owner's edit
RESUBMIT_FIELDS = ("status", "rejection_reason", "reviewed_by_id", "reviewed_at")

# action -> states the action may start from
TRANSITIONS: Dict[str, FrozenSet[RecipeStatus]] = {
    APPROVE: frozenset({RecipeStatus.PENDING, RecipeStatus.REJECTED}),
    REJECT: frozenset({RecipeStatus.PENDING, RecipeStatus.APPROVED}),
    RESUBMIT: frozenset(RecipeStatus),
}

TARGETS: Dict[str, RecipeStatus] = {
    APPROVE: RecipeStatus.APPROVED,
    REJECT: RecipeStatus.REJECTED,
    RESUBMIT: RecipeStatus.PENDING,
}


def utc_now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def check_transition(current: RecipeStatus, action: str) -> RecipeStatus:
    """
    Return the target state of ``action`` from ``current``.

    Raises:
        AlreadyApproved: approve on an approved recipe
        InvalidTransition: any other illegal move (e.g. reject on rejected)
    """
    current = RecipeStatus(current)
    if current in TRANSITIONS[action]:
        return TARGETS[action]
    if action == APPROVE and current == RecipeStatus.APPROVED:
        raise AlreadyApproved()
    if action == REJECT and current == RecipeStatus.REJECTED:
        raise InvalidTransition("Recipe is already rejected", code="ALREADY_REJECTED")
    raise InvalidTransition(f"Cannot {action} a recipe that is {current.value}")


def resubmit(recipe: Recipe) -> None:
    """
    Owner edit: send the recipe back to moderation.
    Mutates the instance only; the caller saves it together with the edit.
    """
    recipe.status = check_transition(recipe.status, RESUBMIT)
    recipe.rejection_reason = None
    recipe.reviewed_by_id = None
    recipe.reviewed_at = None


async def _apply(recipe_id, action: str, **changes) -> Recipe:
    recipe = await get_or_404(Recipe, recipe_id, "Recipe")
    target = check_transition(recipe.status, action)
    updated = await Recipe.filter(id=recipe.id, status__in=list(TRANSITIONS[action])).update(
        status=target, **changes
    )
    if not updated:
        # Lost a race: someone moved or deleted the recipe since we read it
        current = await Recipe.get_or_none(id=recipe.id)
        if current is None:
            raise NotFound.for_resource("Recipe", recipe_id)
        check_transition(current.status, action)
        raise InvalidTransition(f"Recipe changed while trying to {action} it")
    return await Recipe.get(id=recipe.id)


async def approve(actor: Claim, recipe_id) -> Recipe:
    """Admin only. pending|rejected -> approved; stamps reviewer, clears reason."""
    ensure_admin(actor)
    recipe = await _apply(
        recipe_id,
        APPROVE,
        reviewed_by_id=actor.id,
        reviewed_at=utc_now(),
        rejection_reason=None,
    )
    logger.info("[moderation] recipe %s approved by %s", recipe.id, actor.id)
    return recipe


async def reject(actor: Claim, recipe_id, reason: str | None) -> Recipe:
    """
    Admin only. pending|approved -> rejected.

    An empty reason is rejected before the recipe is read, so the recipe's
    state is left untouched.
    """
    ensure_admin(actor)
    reason = (reason or "").strip()
    if not reason:
        raise ValidationError("Rejection reason is required", code="REJECTION_REASON_REQUIRED")
    if len(reason) > 500:
        raise ValidationError("Rejection reason cannot exceed 500 characters")
    recipe = await _apply(
        recipe_id,
        REJECT,
        reviewed_by_id=actor.id,
        reviewed_at=utc_now(),
        rejection_reason=reason,
    )
    logger.info("[moderation] recipe %s rejected by %s", recipe.id, actor.id)
    return recipe
