# api/routes/users.py

from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from api.dependencies import get_auth_session, get_hardcover
from api.routes.feed import to_activity_schemas
from api.routes.library import to_display_schema
from api.schemas.book import BookMetadata
from api.schemas.feed import FeedResponse
from api.schemas.library import DisplayBookSchema
from api.schemas.review import ReviewSchema, UserReview, UserReviewList
from api.schemas.user import (
    FollowResult, ProfileCounts, UserCreate, UserCreated, UserList, UserProfile, UserSummary
)
from shelf.auth import AuthSession
from shelf.hardcover import HardcoverClient
from shelf.sa.database import get_db
from shelf.sa.models import User
from shelf.sa.repositories import UserRepository
from shelf.services import LibraryService, ReviewService, SocialService

router = APIRouter(prefix="/users", tags=["users"])


def get_user_or_404(db: Session, username: str) -> User:
    user = UserRepository(db).get_by_username(username)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


@router.get("", response_model=UserList)
def search_users(
    q: str = Query("", description="Search users by username or display name"),
    limit: int = Query(20, ge=1, le=100, description="Maximum number of users to return"),
    db: Session = Depends(get_db)
):
    """
    Search readers. A blank query returns no results.
    """
    users = SocialService(db).search_users(q, limit=limit)
    return UserList(items=[UserSummary.model_validate(u) for u in users], total=len(users))


@router.post("", response_model=UserCreated, status_code=status.HTTP_201_CREATED)
def create_user(user: UserCreate, db: Session = Depends(get_db)):
    """Register a reader and return the API token used as a bearer credential."""
    try:
        db_user = UserRepository(db).create_user(
            email=user.email,
            username=user.username,
            display_name=user.display_name
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return UserCreated.model_validate(db_user)


@router.get("/{username}", response_model=UserProfile)
def get_profile(
    username: str,
    auth: Optional[AuthSession] = Depends(get_auth_session),
    db: Session = Depends(get_db)
):
    profile = SocialService(db).get_profile(username, viewer=auth)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    summary = UserSummary.model_validate(profile.user).model_dump()
    return UserProfile(
        **summary,
        created_at=profile.user.created_at,
        counts=ProfileCounts(**profile.counts),
        followers_count=profile.followers_count,
        following_count=profile.following_count,
        is_following=profile.is_following
    )


@router.get("/{username}/books", response_model=List[DisplayBookSchema])
def get_user_books(
    username: str,
    limit: Optional[int] = Query(None, ge=1, le=100, description="Maximum number of books"),
    auth: Optional[AuthSession] = Depends(get_auth_session),
    db: Session = Depends(get_db),
    hardcover: HardcoverClient = Depends(get_hardcover)
):
    """
    A reader's public shelf, newest additions first. Private books are only
    visible to their owner.
    """
    user = get_user_or_404(db, username)
    books = LibraryService(db, hardcover).get_user_books(user.id, viewer=auth, limit=limit)
    return [to_display_schema(book) for book in books]


@router.get("/{username}/reviews", response_model=UserReviewList)
def get_user_reviews(
    username: str,
    limit: Optional[int] = Query(None, ge=1, le=100, description="Maximum number of reviews"),
    db: Session = Depends(get_db),
    hardcover: HardcoverClient = Depends(get_hardcover)
):
    user = get_user_or_404(db, username)
    reviewed = ReviewService(db, hardcover).get_user_reviews(user.id, limit=limit)
    items = [
        UserReview(
            review=ReviewSchema.model_validate(r.review),
            book=BookMetadata.model_validate(r.book) if r.book else None
        )
        for r in reviewed
    ]
    return UserReviewList(items=items, total=len(items))


@router.get("/{username}/activity", response_model=FeedResponse)
def get_user_activity(
    username: str,
    limit: Optional[int] = Query(None, ge=1, le=100),
    db: Session = Depends(get_db)
):
    user = get_user_or_404(db, username)
    return FeedResponse(items=to_activity_schemas(SocialService(db).user_activity(user.id, limit=limit)))


@router.get("/{username}/followers", response_model=List[UserSummary])
def get_followers(username: str, db: Session = Depends(get_db)):
    user = get_user_or_404(db, username)
    return SocialService(db).followers(user.id)


@router.get("/{username}/following", response_model=List[UserSummary])
def get_following(username: str, db: Session = Depends(get_db)):
    user = get_user_or_404(db, username)
    return SocialService(db).following(user.id)


@router.post("/{username}/follow", response_model=FollowResult)
def follow_user(
    username: str,
    auth: Optional[AuthSession] = Depends(get_auth_session),
    db: Session = Depends(get_db)
):
    user = get_user_or_404(db, username)
    SocialService(db).follow(auth, user.id)
    return FollowResult(success=True, following=True)


@router.delete("/{username}/follow", response_model=FollowResult)
def unfollow_user(
    username: str,
    auth: Optional[AuthSession] = Depends(get_auth_session),
    db: Session = Depends(get_db)
):
    user = get_user_or_404(db, username)
    SocialService(db).unfollow(auth, user.id)
    return FollowResult(success=True, following=False)
