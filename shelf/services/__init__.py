from .library_service import LibraryService, LibraryView
from .review_service import ReviewService, ReviewedBook
from .social_service import SocialService, Profile

__all__ = ['LibraryService', 'LibraryView', 'ReviewService', 'ReviewedBook', 'SocialService', 'Profile']
