# fridge/core/lookup.py
import uuid
from typing import Type, TypeVar

from tortoise.models import Model

from fridge.core.errors import NotFound

M = TypeVar("M", bound=Model)


async def get_or_404(model: Type[M], obj_id, resource: str) -> M:
    """
    Fetch a row by UUID primary key or raise ``NotFound``.

    Ids that are not valid UUIDs can never resolve, so they are reported as
    not found instead of reaching the database driver.
    """
    try:
        pk = obj_id if isinstance(obj_id, uuid.UUID) else uuid.UUID(str(obj_id))
    except (TypeError, ValueError):
        raise NotFound.for_resource(resource, obj_id)
    obj = await model.get_or_none(id=pk)
    if obj is None:
        raise NotFound.for_resource(resource, obj_id)
    return obj
