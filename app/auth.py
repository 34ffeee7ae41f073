"""Admin authorization for write endpoints.

Routes only talk to the Authorizer interface, so the shared-secret check
can be swapped for a real credential system later.
"""
import logging
import os
from typing import Optional, Protocol

from app.config import ADMIN_PASSWORD_ENV
from app.errors import AuthError

logger = logging.getLogger(__name__)


class Authorizer(Protocol):
    def is_authorized(self, supplied: Optional[str]) -> bool:
        ...


class SharedSecretAuthorizer:
    """Exact string comparison against a single configured secret.

    An unset or empty secret rejects everything. The comparison is not
    constant-time.
    """

    def __init__(self, secret: Optional[str]):
        self.secret = secret

    def is_authorized(self, supplied: Optional[str]) -> bool:
        return _matches(self.secret, supplied)


class EnvSecretAuthorizer:
    """Shared-secret check against an environment variable read per call."""

    def __init__(self, env_var: str = ADMIN_PASSWORD_ENV):
        self.env_var = env_var

    def is_authorized(self, supplied: Optional[str]) -> bool:
        return _matches(os.getenv(self.env_var), supplied)


def _matches(secret: Optional[str], supplied: Optional[str]) -> bool:
    if not secret or not supplied:
        return False
    return supplied == secret


def require_admin(authorizer: Authorizer, supplied: Optional[str]) -> None:
    """Raise AuthError unless the supplied secret is accepted."""
    if not authorizer.is_authorized(supplied):
        logger.warning("Rejected admin request: invalid password")
        raise AuthError()
