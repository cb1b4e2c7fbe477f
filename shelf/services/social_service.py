# shelf/services/social_service.py
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from shelf.auth import AuthSession, require_auth
from shelf.config import settings
from shelf.exceptions import NotFoundError, ValidationError
from shelf.sa.models import ActivityEvent, Follow, User
from shelf.sa.repositories import UserRepository, FollowRepository, ActivityRepository

logger = logging.getLogger(__name__)


@dataclass
class Profile:
    user: User
    counts: Dict[str, int] = field(default_factory=dict)
    followers_count: int = 0
    following_count: int = 0
    is_following: bool = False


class SocialService:
    """Follow graph, profiles and the activity feed"""

    def __init__(self, session: Session):
        self.session = session
        self.users = UserRepository(session)
        self.follows = FollowRepository(session)
        self.activity = ActivityRepository(session)

    def follow(self, auth: Optional[AuthSession], following_id: int) -> Follow:
        """Follow another reader. Following someone twice is a no-op.

        Raises:
            AuthenticationError: Without a session
            ValidationError: When following yourself
            NotFoundError: If the target user does not exist
        """
        auth = require_auth(auth)
        if following_id == auth.user_id:
            raise ValidationError("You cannot follow yourself")
        if self.users.get_by_id(following_id) is None:
            raise NotFoundError(f"User {following_id} not found")
        edge = self.follows.follow(auth.user_id, following_id)
        logger.info("User %s follows %s", auth.user_id, following_id)
        return edge

    def unfollow(self, auth: Optional[AuthSession], following_id: int) -> bool:
        auth = require_auth(auth)
        return self.follows.unfollow(auth.user_id, following_id)

    def is_following(self, follower_id: Optional[int], following_id: int) -> bool:
        if follower_id is None:
            return False
        return self.follows.is_following(follower_id, following_id)

    def followers(self, user_id: int) -> List[User]:
        return self.follows.get_followers(user_id)

    def following(self, user_id: int) -> List[User]:
        return self.follows.get_following(user_id)

    def feed(self, auth: Optional[AuthSession], limit: Optional[int] = None) -> List[ActivityEvent]:
        """The reader's own activity plus that of everyone they follow.

        Computed at read time, newest first, capped at limit.
        """
        if auth is None:
            return []
        user_ids = [auth.user_id] + self.follows.get_following_ids(auth.user_id)
        return self.activity.get_for_users(user_ids, limit=limit or settings.feed_page_size)

    def user_activity(self, user_id: int, limit: Optional[int] = None) -> List[ActivityEvent]:
        return self.activity.get_for_users([user_id], limit=limit or settings.feed_page_size)

    def recent_activity(self, limit: Optional[int] = None) -> List[ActivityEvent]:
        return self.activity.get_recent(limit=limit or settings.feed_page_size)

    def search_users(self, query: str, limit: int = 20) -> List[User]:
        return self.users.search_users(query, limit=limit)

    def get_profile(self, username: str, viewer: Optional[AuthSession] = None) -> Optional[Profile]:
        user = self.users.get_by_username(username)
        if user is None:
            return None
        is_owner = viewer is not None and viewer.user_id == user.id
        return Profile(
            user=user,
            counts=self.users.get_profile_counts(user.id, include_private=is_owner),
            followers_count=self.follows.count_followers(user.id),
            following_count=self.follows.count_following(user.id),
            is_following=self.is_following(viewer.user_id if viewer else None, user.id)
        )
