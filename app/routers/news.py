"""Aggregated industry news endpoint."""
import logging
from typing import List

from fastapi import APIRouter, Depends, Request

from app.config import AppConfig
from app.routers.deps import get_config
from app.schemas import ErrorResponse, FeedItem
from app.services.feeds import aggregate_feeds

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["news"])

@router.get("/news", response_model=List[FeedItem], responses={500: {"model": ErrorResponse}})
async def get_news(request: Request, config: AppConfig = Depends(get_config)):
    """
    Latest items from the configured news feeds, interleaved across sources.
    """
    return await aggregate_feeds(config.feed_urls, fetch=request.app.state.feed_fetcher)
