"""FastAPI dependencies pulling shared objects off app.state."""
from fastapi import Request

from app.auth import Authorizer
from app.config import AppConfig
from app.services.article_store import ArticleStore


def get_config(request: Request) -> AppConfig:
    return request.app.state.config


def get_store(request: Request) -> ArticleStore:
    return request.app.state.store


def get_authorizer(request: Request) -> Authorizer:
    return request.app.state.authorizer
