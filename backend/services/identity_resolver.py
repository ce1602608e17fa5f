"""
Identity Resolver

Maps an opaque bearer credential to a viewer context.

- No credential            -> Anonymous
- Undecodable / expired    -> InvalidCredential
- Valid, unknown user      -> IdentityRequired
- Valid, known user        -> Authenticated(user)

Callers decide how strict to be: the feed degrades InvalidCredential to
anonymous, mutating operations let it propagate.
"""
import logging
from typing import Optional

from jose import JWTError

from middleware.jwt_session import decode_access_token
from models.domain.viewer import ANONYMOUS, Authenticated, Viewer
from repositories.protocols import UserRepository
from .exceptions import IdentityRequired, InvalidCredential

logger = logging.getLogger(__name__)


class IdentityResolver:

    def __init__(self, users: UserRepository):
        self.users = users

    async def resolve(self, credential: Optional[str]) -> Viewer:
        if not credential:
            return ANONYMOUS

        try:
            payload = decode_access_token(credential)
        except JWTError as e:
            raise InvalidCredential(f"Unable to decode bearer token: {e}") from e

        user_id = payload.get("sub")
        if not user_id:
            raise InvalidCredential("Bearer token has no subject")

        user = await self.users.get_by_id(str(user_id))
        if user is None:
            logger.warning(f"Token subject {user_id} does not match any user")
            raise IdentityRequired()

        return Authenticated(user)
