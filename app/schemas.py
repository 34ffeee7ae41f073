"""Pydantic schemas for request/response validation."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict

class AdminRequest(BaseModel):
    """Any request body carrying the admin password."""
    password: Optional[str] = None

class ArticleCreate(AdminRequest):
    """Schema for creating an article.

    Fields are optional here so that a missing field is reported with the
    same 400 as an empty one.
    """
    title: Optional[str] = None
    content: Optional[str] = None
    author: Optional[str] = None
    category: Optional[str] = None

class ArticleResponse(BaseModel):
    """Schema for article response."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    content: str
    author: str
    category: str
    created_at: datetime

class FeedItem(BaseModel):
    """One normalized news item. Field names follow the RSS wire format."""
    title: str = ""
    link: str = ""
    pubDate: str = ""
    source: str

class UploadResponse(BaseModel):
    url: str

class ImportRequest(AdminRequest):
    url: Optional[str] = None

class ImportedArticle(BaseModel):
    """Draft article extracted from a web page. Never stored automatically."""
    title: str = ""
    author: str = ""
    category: str = ""
    content: str = ""

class ErrorResponse(BaseModel):
    error: str
