from .base import Base, TimestampMixin
from .user import User
from .library import UserBook
from .review import Review
from .social import Follow, ActivityEvent

__all__ = [
    'Base',
    'TimestampMixin',
    'User',
    'UserBook',
    'Review',
    'Follow',
    'ActivityEvent'
]
