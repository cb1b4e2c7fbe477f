from .user import UserRepository
from .library import LibraryRepository
from .review import ReviewRepository
from .social import FollowRepository, ActivityRepository

__all__ = ['UserRepository', 'LibraryRepository', 'ReviewRepository', 'FollowRepository', 'ActivityRepository']
