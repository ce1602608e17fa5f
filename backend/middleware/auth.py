"""
Authentication dependencies

The credential is read from the ``Authorization: Bearer <token>`` header,
falling back to the ``access_token`` cookie set by the web frontend.
"""

from fastapi import Depends, HTTPException, Request
from typing import Optional
import logging

from models.domain.viewer import ANONYMOUS, Authenticated, Viewer
from repositories import Repositories, get_repositories
from services.exceptions import IdentityRequired, InvalidCredential
from services.identity_resolver import IdentityResolver

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def extract_credential(request: Request) -> Optional[str]:
    """Bearer token from the request, or None if none was sent"""
    header = request.headers.get("Authorization")
    if header:
        if header.startswith(BEARER_PREFIX):
            return header[len(BEARER_PREFIX):].strip() or None
        logger.warning("Authorization header does not begin with Bearer String")
        return None

    return request.cookies.get("access_token")


async def get_identity_resolver(
    repos: Repositories = Depends(get_repositories),
) -> IdentityResolver:
    return IdentityResolver(repos.users)


async def get_viewer_optional(
    request: Request,
    resolver: IdentityResolver = Depends(get_identity_resolver),
) -> Viewer:
    """
    Viewer for read-only endpoints.

    An undecodable or expired token reads as anonymous. A valid token for
    a user that does not exist is still an error.
    """
    try:
        return await resolver.resolve(extract_credential(request))
    except InvalidCredential as e:
        logger.warning(f"Ignoring invalid credential on read-only request: {e}")
        return ANONYMOUS


async def get_viewer_required(
    request: Request,
    resolver: IdentityResolver = Depends(get_identity_resolver),
) -> Authenticated:
    """
    Viewer for mutating endpoints.

    Raises:
        IdentityRequired: no credential, or it names no known user
        InvalidCredential: credential cannot be decoded
    """
    viewer = await resolver.resolve(extract_credential(request))
    if not isinstance(viewer, Authenticated):
        raise IdentityRequired()
    return viewer


async def get_admin_viewer(
    viewer: Authenticated = Depends(get_viewer_required),
) -> Authenticated:
    """Authenticated viewer holding ROLE_ADMIN (403 otherwise)"""
    if not viewer.user.is_admin:
        raise HTTPException(status_code=403, detail="Admin role required")
    return viewer
