# shelf/sa/models/library.py
from datetime import date
from sqlalchemy import Integer, String, Text, Boolean, Float, Date, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base, TimestampMixin


class UserBook(Base, TimestampMixin):
    """A user's tracking record for one Hardcover book"""
    __tablename__ = 'user_books'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey('users.id'), nullable=False)
    hardcover_id: Mapped[str] = mapped_column(String(50), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default='want_to_read')
    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    finish_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    current_page: Mapped[int | None] = mapped_column(Integer, nullable=True)
    rating: Mapped[float | None] = mapped_column(Float, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_favorite: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_private: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Relationships
    user = relationship('User', back_populates='user_books')

    __table_args__ = (
        UniqueConstraint('user_id', 'hardcover_id', name='uix_user_books_user_book'),
        Index('idx_user_books_status', 'status'),
        Index('idx_user_books_updated_at', 'updated_at'),
    )
