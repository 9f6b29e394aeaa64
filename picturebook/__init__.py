"""User and gallery data access for the Picturebook photo gallery."""

from picturebook.errors import ModelError, NotFoundError, PasswordIncorrectError, ValidationError
from picturebook.models import Gallery, Image, User
from picturebook.services import (
    GalleryService,
    UserService,
    new_gallery_service,
    new_user_service,
)

__all__ = [
    "Gallery",
    "GalleryService",
    "Image",
    "ModelError",
    "NotFoundError",
    "PasswordIncorrectError",
    "User",
    "UserService",
    "ValidationError",
    "new_gallery_service",
    "new_user_service",
]
