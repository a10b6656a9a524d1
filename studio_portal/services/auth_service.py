"""Admin authentication.

A single shared admin password (ADMIN_PASSWORD) is exchanged for an opaque
bearer token. Issued tokens live in a per-application set so logout can
revoke them; they do not survive a restart.
"""
import hmac
import logging
import secrets
from typing import Optional

from flask import Flask, current_app

from studio_portal.errors import UnauthorizedError, ValidationError

logger = logging.getLogger(__name__)

EXTENSION_KEY = 'auth_tokens'


def init_app(app: Flask) -> None:
    """Give the application an empty token set."""
    app.extensions[EXTENSION_KEY] = set()


def _tokens() -> set:
    return current_app.extensions[EXTENSION_KEY]


def login(password: Optional[str]) -> str:
    """Exchange the admin password for a new token.

    Args:
        password: Password supplied by the caller.

    Returns:
        A new bearer token.

    Raises:
        ValidationError: If no password was supplied.
        UnauthorizedError: If the password is wrong.
    """
    if not password:
        raise ValidationError('Password is required')

    expected = current_app.config.get('ADMIN_PASSWORD') or ''
    if not hmac.compare_digest(str(password).encode(), expected.encode()):
        logger.warning("Rejected admin login attempt")
        raise UnauthorizedError('Invalid password')

    token = secrets.token_urlsafe(32)
    _tokens().add(token)
    logger.info("Admin logged in")
    return token


def logout(token: Optional[str]) -> None:
    """Revoke a token. Unknown tokens are ignored."""
    if token:
        _tokens().discard(token)
        logger.info("Admin logged out")


def is_valid_token(token: Optional[str]) -> bool:
    """True for an issued, unrevoked token or the configured SERVICE_TOKEN."""
    if not token:
        return False
    if token in _tokens():
        return True
    service_token = current_app.config.get('SERVICE_TOKEN') or ''
    return bool(service_token) and hmac.compare_digest(
        token.encode(), service_token.encode()
    )


def token_from_header(header: Optional[str]) -> Optional[str]:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if not header:
        return None
    scheme, _, token = header.partition(' ')
    if scheme.lower() != 'bearer' or not token.strip():
        return None
    return token.strip()


def check_token(header: Optional[str]) -> str:
    """Return the caller's token if it is valid.

    Raises:
        UnauthorizedError: If the header is missing or the token unknown.
    """
    token = token_from_header(header)
    if not is_valid_token(token):
        logger.warning("Rejected request with missing or invalid token")
        raise UnauthorizedError('Unauthorized')
    return token
