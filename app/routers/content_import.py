"""AI-assisted content import endpoint."""
import logging

from fastapi import APIRouter, Depends

from app.auth import Authorizer, require_admin
from app.config import AppConfig
from app.routers.deps import get_authorizer, get_config
from app.schemas import ErrorResponse, ImportedArticle, ImportRequest
from app.services.content_import import import_from_url_async

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["import"])

@router.post(
    "/import",
    response_model=ImportedArticle,
    responses={401: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def import_content(
    request: ImportRequest,
    config: AppConfig = Depends(get_config),
    authorizer: Authorizer = Depends(get_authorizer),
):
    """
    Extract a draft article from a web page.

    - **url**: page to import
    - **password**: admin password

    The result is not saved; review it and submit it to POST /api/articles.
    """
    require_admin(authorizer, request.password)
    return await import_from_url_async(
        (request.url or "").strip(),
        config.gemini_api_key,
        config.gemini_model,
    )
