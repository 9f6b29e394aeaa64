"""User model."""

from sqlalchemy import Column, Integer, String

from picturebook.database import Base
from picturebook.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User account for authentication and gallery ownership."""

    __tablename__ = "users"

    id = Column("_id", Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column("passwordHash", String(255), nullable=False)
    remember_hash = Column("rememberHash", String(255), unique=True, nullable=False, index=True)

    # Plaintext values, never persisted. The validation layer hashes and clears them.
    password = ""
    remember = ""

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r}>"
