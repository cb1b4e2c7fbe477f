# shelf/sa/repositories/user.py
import secrets
from typing import Dict, List, Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from shelf.sa.models import User, UserBook, Review


class UserRepository:
    """Repository for managing User entities."""

    def __init__(self, session: Session):
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self.session = session

    def create_user(
        self,
        email: str,
        username: Optional[str] = None,
        display_name: Optional[str] = None,
        avatar_url: Optional[str] = None,
        bio: Optional[str] = None
    ) -> User:
        """Create a new user with a freshly issued API token.

        Args:
            email: The user's email address
            username: Optional public handle used in profile URLs
            display_name: Optional name shown in feeds and reviews
            avatar_url: Optional avatar image URL
            bio: Optional profile text

        Returns:
            The created User object

        Raises:
            ValueError: If the email or username is already taken
        """
        existing = (
            self.session.query(User)
            .filter(or_(User.email == email, User.username == username) if username else User.email == email)
            .first()
        )
        if existing:
            raise ValueError(f"User with email '{email}' or username '{username}' already exists")

        user = User(
            email=email,
            username=username,
            display_name=display_name,
            avatar_url=avatar_url,
            bio=bio,
            api_token=self.new_token()
        )
        self.session.add(user)
        try:
            self.session.commit()
            return user
        except IntegrityError:
            self.session.rollback()
            raise ValueError(f"User with email '{email}' or username '{username}' already exists")

    @staticmethod
    def new_token() -> str:
        return secrets.token_urlsafe(32)

    def rotate_token(self, user_id: int) -> Optional[str]:
        """Issue a new API token, invalidating the previous one.

        Returns:
            The new token, or None if the user does not exist
        """
        user = self.get_by_id(user_id)
        if not user:
            return None
        user.api_token = self.new_token()
        self.session.commit()
        return user.api_token

    def update_profile(self, user_id: int, **fields) -> Optional[User]:
        """Update profile fields (username, display_name, avatar_url, bio).

        Returns:
            The updated User object if found, None otherwise
        """
        user = self.get_by_id(user_id)
        if not user:
            return None
        for name in ("username", "display_name", "avatar_url", "bio"):
            if name in fields:
                setattr(user, name, fields[name])
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise ValueError(f"Username '{fields.get('username')}' is already taken")
        return user

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.session.query(User).filter(User.id == user_id).one_or_none()

    def get_by_username(self, username: str) -> Optional[User]:
        return self.session.query(User).filter(User.username == username).one_or_none()

    def get_by_token(self, token: str) -> Optional[User]:
        """Resolve an API token to its user; blank tokens never match"""
        if not token:
            return None
        return self.session.query(User).filter(User.api_token == token).one_or_none()

    def get_by_ids(self, user_ids: List[int]) -> List[User]:
        if not user_ids:
            return []
        return self.session.query(User).filter(User.id.in_(user_ids)).all()

    def count_users(self) -> int:
        return self.session.query(User).count()

    def list_users(self, limit: int = 20, offset: int = 0) -> List[User]:
        return self.session.query(User).order_by(User.id).offset(offset).limit(limit).all()

    def search_users(self, query: str, limit: int = 20) -> List[User]:
        """Search users by username or display name.

        Args:
            query: The search query string; blank queries return no results
            limit: Maximum number of results to return (default: 20)

        Returns:
            List of matching User objects
        """
        if not query or not query.strip():
            return []
        pattern = f"%{query.strip()}%"
        return (
            self.session.query(User)
            .filter(or_(User.username.ilike(pattern), User.display_name.ilike(pattern)))
            .order_by(User.username)
            .limit(limit)
            .all()
        )

    def get_profile_counts(self, user_id: int, include_private: bool = True) -> Dict[str, int]:
        """Counts shown on a profile header.

        Args:
            user_id: The ID of the profile owner
            include_private: Whether private library records are counted.
                Only the owner should see them.
        """
        review_count = self.session.query(Review).filter(Review.user_id == user_id).count()
        books = self.session.query(UserBook).filter(UserBook.user_id == user_id)
        if not include_private:
            books = books.filter(UserBook.is_private.is_(False))
        books_read_count = books.filter(UserBook.status == "finished").count()
        want_to_read_count = books.filter(UserBook.status == "want_to_read").count()
        return {
            "review_count": review_count,
            "books_read_count": books_read_count,
            "want_to_read_count": want_to_read_count,
        }
