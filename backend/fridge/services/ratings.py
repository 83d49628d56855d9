"""
Rating Aggregator

Keeps ``Recipe.average_rating`` / ``Recipe.total_reviews`` consistent with the
live set of reviews of that recipe:
1. Re-read every review of the recipe (full re-scan, no incremental math)
2. Compute mean rounded half-up to one decimal, and the count
3. Write both fields in one UPDATE

Recomputations of the same recipe are serialized inside the process with a
per-recipe ``asyncio.Lock``. Across processes the last writer wins; because
each run reads the review set at write time, the next mutation restores exact
consistency.
"""
import asyncio
import logging
import weakref
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Tuple

from tortoise.exceptions import BaseORMException

from fridge.core.errors import DependencyFailure
from fridge.models import Recipe, Review

logger = logging.getLogger(__name__)

# recipe id -> lock; entries disappear once no coroutine holds the lock
_locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = weakref.WeakValueDictionary()


def _lock_for(recipe_id) -> asyncio.Lock:
    key = str(recipe_id)
    lock = _locks.get(key)
    if lock is None:
        lock = asyncio.Lock()
        _locks[key] = lock
    return lock


def compute_aggregate(ratings: Iterable[int]) -> Tuple[float, int]:
    """
    Pure aggregate computation.

    Returns:
        (average_rating, total_reviews); (0.0, 0) for an empty review set.
        The mean is rounded half-up to one decimal (4.25 -> 4.3).
    """
    values = list(ratings)
    if not values:
        return 0.0, 0
    mean = Decimal(sum(values)) / Decimal(len(values))
    return float(mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)), len(values)


async def recompute(recipe_id) -> Tuple[float, int]:
    """
    Recompute and store the aggregate rating of one recipe.

    Raises:
        DependencyFailure: if the store fails while reading or writing.
    """
    async with _lock_for(recipe_id):
        try:
            ratings = await Review.filter(recipe_id=recipe_id).values_list("rating", flat=True)
            average, total = compute_aggregate(ratings)
            await Recipe.filter(id=recipe_id).update(average_rating=average, total_reviews=total)
        except BaseORMException as e:
            raise DependencyFailure(
                f"Rating recomputation failed for recipe {recipe_id}: {e}",
                code="STORE_FAILURE",
            ) from e
    logger.debug("[ratings] recipe=%s average=%s total=%s", recipe_id, average, total)
    return average, total


async def refresh_rating(recipe_id) -> Tuple[float, int] | None:
    """
    Best-effort recomputation used after a review mutation.

    The review mutation has already been committed and must stand; a failure
    here is logged and left for the next successful recomputation to repair.
    Returns None when the recomputation failed.
    """
    try:
        return await recompute(recipe_id)
    except DependencyFailure as e:
        logger.error("[ratings] inconsistent aggregate left for recipe %s: %s", recipe_id, e.message)
        return None
