# shelf/sa/repositories/social.py
from typing import Any, Dict, List, Optional
from sqlalchemy import desc
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from shelf.sa.models import User, Follow, ActivityEvent


class FollowRepository:
    """Repository for the follow graph."""

    def __init__(self, session: Session):
        self.session = session

    def get_edge(self, follower_id: int, following_id: int) -> Optional[Follow]:
        return (
            self.session.query(Follow)
            .filter(Follow.follower_id == follower_id, Follow.following_id == following_id)
            .first()
        )

    def follow(self, follower_id: int, following_id: int) -> Follow:
        """Create a follow edge; an existing edge is returned unchanged"""
        edge = self.get_edge(follower_id, following_id)
        if edge:
            return edge
        edge = Follow(follower_id=follower_id, following_id=following_id)
        self.session.add(edge)
        try:
            self.session.commit()
            return edge
        except IntegrityError:
            # Lost a race with a concurrent follow of the same pair
            self.session.rollback()
            return self.get_edge(follower_id, following_id)

    def unfollow(self, follower_id: int, following_id: int) -> bool:
        result = (
            self.session.query(Follow)
            .filter(Follow.follower_id == follower_id, Follow.following_id == following_id)
            .delete()
        )
        self.session.commit()
        return result > 0

    def is_following(self, follower_id: int, following_id: int) -> bool:
        return self.get_edge(follower_id, following_id) is not None

    def get_followers(self, user_id: int) -> List[User]:
        """Users who follow user_id"""
        return (
            self.session.query(User)
            .join(Follow, Follow.follower_id == User.id)
            .filter(Follow.following_id == user_id)
            .order_by(desc(Follow.created_at))
            .all()
        )

    def get_following(self, user_id: int) -> List[User]:
        """Users that user_id follows"""
        return (
            self.session.query(User)
            .join(Follow, Follow.following_id == User.id)
            .filter(Follow.follower_id == user_id)
            .order_by(desc(Follow.created_at))
            .all()
        )

    def get_following_ids(self, user_id: int) -> List[int]:
        rows = self.session.query(Follow.following_id).filter(Follow.follower_id == user_id).all()
        return [row.following_id for row in rows]

    def count_followers(self, user_id: int) -> int:
        return self.session.query(Follow).filter(Follow.following_id == user_id).count()

    def count_following(self, user_id: int) -> int:
        return self.session.query(Follow).filter(Follow.follower_id == user_id).count()


class ActivityRepository:
    """Insert-only store for feed events."""

    def __init__(self, session: Session):
        self.session = session

    def record(
        self,
        user_id: int,
        activity_type: str,
        hardcover_id: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
        book_title: Optional[str] = None,
        book_author: Optional[str] = None,
        book_cover_url: Optional[str] = None
    ) -> ActivityEvent:
        event = ActivityEvent(
            user_id=user_id,
            activity_type=activity_type,
            hardcover_id=hardcover_id,
            event_metadata=metadata or {},
            book_title=book_title,
            book_author=book_author,
            book_cover_url=book_cover_url
        )
        self.session.add(event)
        self.session.commit()
        return event

    def get_for_users(self, user_ids: List[int], limit: int = 20) -> List[ActivityEvent]:
        """Most recent events from any of the given users"""
        if not user_ids:
            return []
        return (
            self.session.query(ActivityEvent)
            .filter(ActivityEvent.user_id.in_(user_ids))
            .order_by(desc(ActivityEvent.created_at), desc(ActivityEvent.id))
            .limit(limit)
            .all()
        )

    def get_recent(self, limit: int = 20) -> List[ActivityEvent]:
        return (
            self.session.query(ActivityEvent)
            .order_by(desc(ActivityEvent.created_at), desc(ActivityEvent.id))
            .limit(limit)
            .all()
        )
