# api/schemas/user.py
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, ConfigDict


class UserSummary(BaseModel):
    id: int
    username: Optional[str] = None
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
    bio: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class UserList(BaseModel):
    items: List[UserSummary]
    total: int


class UserCreate(BaseModel):
    email: str
    username: Optional[str] = None
    display_name: Optional[str] = None


class UserCreated(UserSummary):
    email: str
    api_token: str


class ProfileCounts(BaseModel):
    review_count: int = 0
    books_read_count: int = 0
    want_to_read_count: int = 0


class UserProfile(UserSummary):
    created_at: datetime
    counts: ProfileCounts
    followers_count: int = 0
    following_count: int = 0
    is_following: bool = False


class FollowResult(BaseModel):
    success: bool
    following: bool
