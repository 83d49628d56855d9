# fridge/api/v1/routers/uploads.py
from fastapi import APIRouter, Depends, File, UploadFile, status

from fridge.api.v1.deps import get_actor
from fridge.core.access import Claim
from fridge.services.media import save_image

router = APIRouter(prefix="/uploads", tags=["uploads"])


@router.post("/images", status_code=status.HTTP_201_CREATED)
async def upload_image(file: UploadFile = File(...), actor: Claim = Depends(get_actor)):
    """
    Store a recipe or profile image (jpeg, jpg, png, gif) and return the path
    to put in ``image`` / ``profilePicture``.
    """
    path = await save_image(file)
    return {"success": True, "message": "Image uploaded successfully", "data": {"path": path}}
