# api/routes/feed.py

from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from api.dependencies import get_auth_session
from api.schemas.feed import ActivitySchema, FeedResponse
from shelf.auth import AuthSession
from shelf.sa.database import get_db
from shelf.sa.models import ActivityEvent
from shelf.services import SocialService

router = APIRouter(prefix="/feed", tags=["feed"])


def to_activity_schemas(events: List[ActivityEvent]) -> List[ActivitySchema]:
    return [
        ActivitySchema(
            id=event.id,
            user_id=event.user_id,
            activity_type=event.activity_type,
            hardcover_id=event.hardcover_id,
            metadata=event.event_metadata or {},
            book_title=event.book_title,
            book_author=event.book_author,
            book_cover_url=event.book_cover_url,
            created_at=event.created_at,
            username=event.user.username if event.user else None,
            user_display_name=event.user.display_name if event.user else None,
            user_avatar_url=event.user.avatar_url if event.user else None
        )
        for event in events
    ]


@router.get("", response_model=FeedResponse)
def get_feed(
    limit: Optional[int] = Query(None, ge=1, le=100, description="Maximum number of events"),
    auth: Optional[AuthSession] = Depends(get_auth_session),
    db: Session = Depends(get_db)
):
    """
    Activity from the caller and everyone they follow, newest first.
    """
    return FeedResponse(items=to_activity_schemas(SocialService(db).feed(auth, limit=limit)))


@router.get("/recent", response_model=FeedResponse)
def get_recent_activity(
    limit: Optional[int] = Query(None, ge=1, le=100, description="Maximum number of events"),
    db: Session = Depends(get_db)
):
    return FeedResponse(items=to_activity_schemas(SocialService(db).recent_activity(limit=limit)))
