"""Image upload endpoint."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile

from app.config import AppConfig
from app.routers.deps import get_config
from app.schemas import ErrorResponse, UploadResponse
from app.services.uploads import save_image

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["uploads"])

@router.post("/upload", response_model=UploadResponse, responses={400: {"model": ErrorResponse}})
async def upload_image(
    image: Optional[UploadFile] = File(None),
    config: AppConfig = Depends(get_config),
):
    """
    Upload one image (multipart field **image**) and get back its public URL.
    """
    filename = image.filename if image else None
    content_type = image.content_type if image else None
    # Read one byte past the limit so oversize files are detected without reading them whole
    data = await image.read(config.max_upload_bytes + 1) if image else b""

    url = save_image(
        config.upload_dir,
        filename,
        content_type,
        data,
        max_bytes=config.max_upload_bytes,
    )
    return UploadResponse(url=url)
