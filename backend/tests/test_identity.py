"""
Tests for resolving bearer credentials to viewers.
"""

import uuid
from datetime import timedelta

import pytest

from middleware.jwt_session import create_access_token, decode_access_token
from models.domain.user import User
from models.domain.viewer import ANONYMOUS, Authenticated
from services.exceptions import IdentityRequired, InvalidCredential
from services.identity_resolver import IdentityResolver


@pytest.fixture
def resolver(repos):
    return IdentityResolver(repos.users)


def test_token_round_trip():
    account = User(user_id=str(uuid.uuid4()), email="a@example.com", name="a")

    payload = decode_access_token(create_access_token(account))

    assert payload["sub"] == account.user_id
    assert payload["email"] == "a@example.com"


@pytest.mark.parametrize("credential", [None, ""])
async def test_no_credential_is_anonymous(resolver, credential):
    assert await resolver.resolve(credential) is ANONYMOUS


async def test_valid_token(resolver, user, theme):
    sports = theme("sports")
    account = user("fan@example.com", prefer=[sports])

    viewer = await resolver.resolve(create_access_token(account))

    assert isinstance(viewer, Authenticated)
    assert viewer.user.user_id == account.user_id
    assert viewer.user.prefer == [sports]


async def test_garbage_token(resolver):
    with pytest.raises(InvalidCredential):
        await resolver.resolve("not-a-jwt")


async def test_expired_token(resolver, user):
    account = user("late@example.com")
    token = create_access_token(account, expires_delta=timedelta(minutes=-5))

    with pytest.raises(InvalidCredential):
        await resolver.resolve(token)


async def test_unknown_user(resolver):
    stranger = User(user_id=str(uuid.uuid4()), email="ghost@example.com")

    with pytest.raises(IdentityRequired):
        await resolver.resolve(create_access_token(stranger))
