from .database import Database
from .models import (
    Base, User, UserBook, Review, Follow, ActivityEvent
)

__all__ = [
    'Database',
    'Base',
    'User',
    'UserBook',
    'Review',
    'Follow',
    'ActivityEvent'
]
