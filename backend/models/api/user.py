"""
Pydantic models for User
"""

from pydantic import BaseModel
from typing import List, Optional

from models.domain.user import User
from .article import ThemeResponse


class UserResponse(BaseModel):
    """User with theme preferences"""
    user_id: str
    email: str
    name: Optional[str] = None
    prefer: List[ThemeResponse] = []
    forbid: List[ThemeResponse] = []
    roles: List[str] = []

    # Alias for frontend compatibility
    id: Optional[str] = None

    def __init__(self, **data):
        super().__init__(**data)
        self.id = self.user_id

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(
            user_id=user.user_id,
            email=user.email,
            name=user.name,
            prefer=[ThemeResponse.from_domain(t) for t in user.prefer],
            forbid=[ThemeResponse.from_domain(t) for t in user.forbid],
            roles=sorted(user.roles),
        )
