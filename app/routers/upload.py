from fastapi import APIRouter, Depends, File, UploadFile, status
from typing import Optional

from app.core.config import Settings, get_settings
from app.core.dependencies import get_current_user
from app.core.errors import DomainValidation
from app.core.responses import success_response
from app.services.upload_service import save_image

router = APIRouter(prefix="/upload", tags=["upload"], dependencies=[Depends(get_current_user)])


@router.post("/image", status_code=status.HTTP_201_CREATED)
def upload_image(
    image: Optional[UploadFile] = File(None),
    settings: Settings = Depends(get_settings),
):
    if image is None:
        raise DomainValidation("No image provided")
    payload = save_image(image, settings.UPLOADS_DIR)
    return success_response(payload, "Image uploaded successfully.")
