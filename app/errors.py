"""Error taxonomy shared by the services and the HTTP layer.

Each error carries the status code and the short message that is sent to
the client. Internal details stay in the logs.
"""
from typing import Optional

from fastapi import status


class AppError(Exception):
    """Base class for errors that map to an HTTP response."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Missing required fields"


class AuthError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Unauthorized: Invalid password"


class UnsupportedMediaType(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Only image files are allowed (jpeg, jpg, png, gif, webp)"


class PayloadTooLarge(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "File too large (max 5 MB)"


class StorageError(AppError):
    message = "Database error"


class AggregationError(AppError):
    message = "Failed to fetch news"


class ContentImportError(AppError):
    status_code = status.HTTP_502_BAD_GATEWAY
    message = "Failed to import content. Please check the URL."
