"""CSRF token handling using the double-submit cookie pattern.

Tables never validate the token themselves: it is handed through to the
delete buttons they render and checked here on state-changing requests.
"""

import secrets

from fastapi import HTTPException, Request
from starlette.responses import Response

from tableview.config import settings

CSRF_COOKIE_NAME = "csrf_token"
CSRF_HEADER_NAME = "X-CSRF-Token"
CSRF_TOKEN_LENGTH = 32


def generate_csrf_token() -> str:
    """Generate a cryptographically secure CSRF token."""
    return secrets.token_urlsafe(CSRF_TOKEN_LENGTH)


def get_csrf_token(request: Request) -> str:
    """Get CSRF token from cookie or generate a new one."""
    token = request.cookies.get(CSRF_COOKIE_NAME)
    if not token:
        token = generate_csrf_token()
    return token


def _is_https_request(request: Request | None) -> bool:
    """Return True when request is HTTPS (directly or via proxy header)."""
    if not request:
        return False
    forwarded_proto = request.headers.get("x-forwarded-proto", "")
    if forwarded_proto:
        return forwarded_proto.split(",")[0].strip().lower() == "https"
    return request.url.scheme == "https"


def set_csrf_cookie(response: Response, token: str, request: Request | None = None) -> None:
    """Set CSRF token in a secure cookie."""
    secure_cookie = settings.secure_cookies and _is_https_request(request)
    response.set_cookie(
        key=CSRF_COOKIE_NAME,
        value=token,
        httponly=False,  # Must be readable by JS for fetch requests
        samesite="strict",
        secure=secure_cookie,
        max_age=3600 * 24,  # 24 hours
    )


def validate_csrf_token(request: Request) -> bool:
    """Cookie token must match the ``X-CSRF-Token`` header."""
    cookie_token = request.cookies.get(CSRF_COOKIE_NAME)
    header_token = request.headers.get(CSRF_HEADER_NAME)
    if not cookie_token or not header_token:
        return False
    return secrets.compare_digest(cookie_token, header_token)


class CSRFValidationError(HTTPException):
    """Raised when CSRF validation fails."""

    def __init__(self, detail: str = "CSRF token invalid. Please refresh the page and try again."):
        super().__init__(status_code=403, detail=detail)


def require_csrf(request: Request) -> str:
    """Dependency for state-changing endpoints; returns the validated token."""
    if not validate_csrf_token(request):
        raise CSRFValidationError()
    return request.cookies[CSRF_COOKIE_NAME]
