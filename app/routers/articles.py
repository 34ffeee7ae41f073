"""Article API endpoints."""
import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Response, status

from app.auth import Authorizer, require_admin
from app.routers.deps import get_authorizer, get_store
from app.schemas import AdminRequest, ArticleCreate, ArticleResponse, ErrorResponse
from app.services.article_store import ArticleStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/articles", tags=["articles"])

@router.get("", response_model=List[ArticleResponse])
async def list_articles(store: ArticleStore = Depends(get_store)):
    """
    Get all articles, newest first.
    """
    articles = store.list_articles()
    return [ArticleResponse.model_validate(article) for article in articles]

@router.post(
    "",
    response_model=ArticleResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)
async def create_article(
    request: ArticleCreate,
    store: ArticleStore = Depends(get_store),
    authorizer: Authorizer = Depends(get_authorizer),
):
    """
    Create an article.

    - **password**: admin password
    - **title**, **content**, **author**, **category**: all required and non-empty
    """
    require_admin(authorizer, request.password)
    article = store.create_article(
        title=request.title,
        content=request.content,
        author=request.author,
        category=request.category,
    )
    return ArticleResponse.model_validate(article)

@router.delete(
    "/{article_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={401: {"model": ErrorResponse}},
)
async def delete_article(
    article_id: int,
    request: Optional[AdminRequest] = Body(None),
    store: ArticleStore = Depends(get_store),
    authorizer: Authorizer = Depends(get_authorizer),
):
    """
    Delete an article by ID. Deleting an ID that does not exist still succeeds.
    """
    require_admin(authorizer, request.password if request else None)
    store.delete_article(article_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
