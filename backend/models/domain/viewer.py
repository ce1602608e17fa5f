"""
Viewer context - who is looking at the feed for this request.

Either ``Anonymous`` or ``Authenticated(user)``. Derived per request from
the bearer credential and never persisted.
"""
from dataclasses import dataclass
from typing import Union

from .user import User


@dataclass(frozen=True)
class Anonymous:
    """No credential was presented"""


@dataclass(frozen=True)
class Authenticated:
    """Credential resolved to a known user"""
    user: User


Viewer = Union[Anonymous, Authenticated]

ANONYMOUS = Anonymous()
