"""Gallery model and its embedded image references."""

from urllib.parse import quote

from pydantic import BaseModel
from sqlalchemy import JSON, Column, ForeignKey, Integer, String
from sqlalchemy.types import TypeDecorator

from picturebook.database import Base
from picturebook.models.mixins import TimestampMixin


class Image(BaseModel):
    """Reference to an image file stored for a gallery."""

    gallery_id: int
    filename: str

    def relative_path(self) -> str:
        """Path of the image on disk, relative to the application root."""
        return f"images/galleries/{self.gallery_id}/{self.filename}"

    def path(self) -> str:
        """URL path the image is served from."""
        return quote(f"/{self.relative_path()}")


class ImageList(TypeDecorator):
    """Stores an ordered list of Image references as a JSON array."""

    impl = JSON
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return []
        return [Image.model_validate(image).model_dump() for image in value]

    def process_result_value(self, value, dialect):
        return [Image.model_validate(image) for image in value or []]


class Gallery(Base, TimestampMixin):
    """Named collection of images owned by a user."""

    __tablename__ = "galleries"

    id = Column("_id", Integer, primary_key=True, index=True)
    # No cascade: deleting a user leaves their galleries in place
    user_id = Column("UserID", Integer, ForeignKey("users._id"), nullable=False, index=True)
    title = Column("Title", String(255), nullable=False)
    images = Column("Images", ImageList, nullable=False, default=list)

    def images_split_n(self, n: int) -> list[list[Image]]:
        """Deal the images round-robin into ``n`` columns for display."""
        columns: list[list[Image]] = [[] for _ in range(n)]
        for i, image in enumerate(self.images or []):
            columns[i % n].append(image)
        return columns

    def __repr__(self) -> str:
        return f"<Gallery id={self.id} title={self.title!r}>"
