"""SQLAlchemy models."""

from picturebook.models.gallery import Gallery, Image
from picturebook.models.user import User

__all__ = [
    "User",
    "Gallery",
    "Image",
]
