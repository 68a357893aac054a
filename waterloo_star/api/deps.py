"""
Dependencies for settings, the post service and the opaque credential.
"""
from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from waterloo_star.config import ForumSettings
from waterloo_star.services.post_service import PostService
from waterloo_star.utils import get_logger

logger = get_logger(__name__)
security = HTTPBearer(auto_error=False)

def get_settings(request: Request) -> ForumSettings:
    return request.app.state.settings

def get_post_service(request: Request) -> PostService:
    return request.app.state.post_service

def get_auth_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: ForumSettings = Depends(get_settings),
) -> Optional[str]:
    """
    Return the caller's credential, or None when there is none.

    A bearer header wins over the cookie. The token is never inspected here;
    ``PostService`` decides whether its absence is an error.
    """
    if credentials is not None and credentials.credentials:
        return credentials.credentials

    token = request.cookies.get(settings.auth_cookie_name)
    if token:
        return token

    logger.debug("No credential on request", path=request.url.path)
    return None

def get_request_id(request: Request) -> str:
    return getattr(request.state, "request_id", None) or request.headers.get("X-Request-ID", "unknown")
