"""
User-related Pydantic models
"""

from typing import Optional
from dataclasses import dataclass
from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    """A stored user as exposed over the API"""
    model_config = ConfigDict(populate_by_name=True)

    id: int
    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")


class UserPayload(BaseModel):
    """Request body for create and update; a client supplied id is ignored"""
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[int] = None
    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")


@dataclass
class UserLookup:
    """Result of a get-by-id lookup"""
    found: bool
    user: Optional[User] = None

    @classmethod
    def hit(cls, user: User) -> "UserLookup":
        return cls(found=True, user=user)

    @classmethod
    def miss(cls) -> "UserLookup":
        return cls(found=False)
