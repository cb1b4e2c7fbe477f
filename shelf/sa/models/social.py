# shelf/sa/models/social.py
from datetime import datetime
from typing import Any
from sqlalchemy import Integer, String, DateTime, ForeignKey, Index, UniqueConstraint, JSON
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base, utcnow


class Follow(Base):
    """Directed edge: follower_id follows following_id"""
    __tablename__ = 'follows'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    follower_id: Mapped[int] = mapped_column(ForeignKey('users.id'), nullable=False)
    following_id: Mapped[int] = mapped_column(ForeignKey('users.id'), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)

    # Relationships
    follower = relationship('User', foreign_keys=[follower_id])
    following = relationship('User', foreign_keys=[following_id])

    __table_args__ = (
        UniqueConstraint('follower_id', 'following_id', name='uix_follows_pair'),
        Index('idx_follows_following_id', 'following_id'),
    )


class ActivityEvent(Base):
    """Append-only feed entry with denormalized book fields"""
    __tablename__ = 'social_feed'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey('users.id'), nullable=False)
    activity_type: Mapped[str] = mapped_column(String(50), nullable=False)
    hardcover_id: Mapped[str | None] = mapped_column(String(50), nullable=True)
    event_metadata: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    book_title: Mapped[str | None] = mapped_column(String(500), nullable=True)
    book_author: Mapped[str | None] = mapped_column(String(255), nullable=True)
    book_cover_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)

    # Relationships
    user = relationship('User', back_populates='activities')

    __table_args__ = (
        Index('idx_social_feed_user_created', 'user_id', 'created_at'),
    )
