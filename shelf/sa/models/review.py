# shelf/sa/models/review.py
from sqlalchemy import Integer, String, Text, Boolean, Float, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base, TimestampMixin


class Review(Base, TimestampMixin):
    __tablename__ = 'reviews'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey('users.id'), nullable=False)
    hardcover_id: Mapped[str] = mapped_column(String(50), nullable=False)
    rating: Mapped[float] = mapped_column(Float, nullable=False)
    review_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_spoiler: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Relationships
    user = relationship('User', back_populates='reviews')

    __table_args__ = (
        UniqueConstraint('user_id', 'hardcover_id', name='uix_reviews_user_book'),
        Index('idx_reviews_hardcover_id', 'hardcover_id'),
    )
