"""Gallery persistence and validation.

    GalleryService -> GalleryValidator -> GalleryStore -> SQLAlchemy session
"""

from typing import Protocol

from sqlalchemy.orm import Session
from sqlalchemy.orm.attributes import flag_modified

from picturebook.errors import TitleRequiredError, UserIDRequiredError
from picturebook.models.gallery import Gallery
from picturebook.services.store import SQLStore
from picturebook.services.validation import ValidatorChain

GALLERY_VALIDATORS = (
    "user_id_required",
    "title_required",
)


class GalleryDB(Protocol):
    """Contract shared by every layer of the gallery chain."""

    def by_id(self, id: int) -> Gallery: ...
    def by_user_id(self, user_id: int) -> list[Gallery]: ...
    def create(self, gallery: Gallery) -> None: ...
    def update(self, gallery: Gallery) -> None: ...
    def delete(self, id: int) -> None: ...
    def discard(self, gallery: Gallery) -> None: ...


class GalleryStore(SQLStore[Gallery]):
    model = Gallery

    def by_user_id(self, user_id: int) -> list[Gallery]:
        """All galleries owned by ``user_id``, in whatever order the store returns them."""
        return self.all(Gallery.user_id == user_id)

    def mark_modified(self, gallery: Gallery) -> None:
        # Appending to gallery.images does not register as a change
        flag_modified(gallery, "images")


class GalleryValidator(ValidatorChain):
    def __init__(self, gallery_db: GalleryDB):
        self.gallery_db = gallery_db

    def by_id(self, id: int) -> Gallery:
        return self.gallery_db.by_id(id)

    def by_user_id(self, user_id: int) -> list[Gallery]:
        return self.gallery_db.by_user_id(user_id)

    def create(self, gallery: Gallery) -> None:
        self.validate(gallery, GALLERY_VALIDATORS)
        self.gallery_db.create(gallery)

    def update(self, gallery: Gallery) -> None:
        self.validate(gallery, GALLERY_VALIDATORS)
        self.gallery_db.update(gallery)

    def delete(self, id: int) -> None:
        self.gallery_db.delete(id)

    def discard(self, gallery: Gallery) -> None:
        self.gallery_db.discard(gallery)

    def user_id_required(self, gallery: Gallery) -> None:
        if not gallery.user_id:
            raise UserIDRequiredError()

    def title_required(self, gallery: Gallery) -> None:
        if not gallery.title or not gallery.title.strip():
            raise TitleRequiredError()


class GalleryService:
    """Entry point for working with galleries."""

    def __init__(self, gallery_db: GalleryDB):
        self.gallery_db = gallery_db

    def by_id(self, id: int) -> Gallery:
        return self.gallery_db.by_id(id)

    def by_user_id(self, user_id: int) -> list[Gallery]:
        return self.gallery_db.by_user_id(user_id)

    def create(self, gallery: Gallery) -> None:
        self.gallery_db.create(gallery)

    def update(self, gallery: Gallery) -> None:
        self.gallery_db.update(gallery)

    def delete(self, id: int) -> None:
        self.gallery_db.delete(id)

    def discard(self, gallery: Gallery) -> None:
        """Drop unsaved changes to ``gallery``, restoring its stored values."""
        self.gallery_db.discard(gallery)


def new_gallery_service(db: Session) -> GalleryService:
    """Assemble the service -> validator -> store chain for galleries."""
    return GalleryService(GalleryValidator(GalleryStore(db)))
