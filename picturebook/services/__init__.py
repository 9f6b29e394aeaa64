"""Service chains for users and galleries."""

from picturebook.services.galleries import GalleryService, new_gallery_service
from picturebook.services.users import UserService, new_user_service

__all__ = [
    "GalleryService",
    "UserService",
    "new_gallery_service",
    "new_user_service",
]
