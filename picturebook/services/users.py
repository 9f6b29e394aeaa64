"""User persistence, validation and authentication.

The user service is a chain of layers that all satisfy ``UserDB``::

    UserService -> UserValidator -> UserStore -> SQLAlchemy session

Single-user lookups return the user or raise ``NotFoundError``. Any other
exception comes from the store and should be treated as a server error.
"""

import logging
import re
from typing import Protocol

from sqlalchemy.orm import Session

from picturebook.errors import (
    EmailInvalidError,
    EmailRequiredError,
    EmailTakenError,
    NotFoundError,
    PasswordIncorrectError,
    PasswordRequiredError,
    PasswordTooShortError,
    RememberRequiredError,
    RememberTooShortError,
)
from picturebook.models.user import User
from picturebook.security import (
    HMAC,
    REMEMBER_TOKEN_BYTES,
    hash_password,
    n_bytes,
    remember_token,
    verify_password,
)
from picturebook.services.store import SQLStore
from picturebook.services.validation import ValidatorChain

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8
EMAIL_PATTERN = re.compile(r"^[a-z0-9._%+\-]+@[a-z0-9.\-]+\.[a-z]{2,16}$")

# Passwords must be hashed before the hash is checked, and emails normalized
# before their format and availability are checked.
USER_CREATE_VALIDATORS = (
    "password_required",
    "password_min_length",
    "bcrypt_password",
    "password_hash_required",
    "set_remember_if_unset",
    "remember_min_bytes",
    "hmac_remember",
    "remember_hash_required",
    "normalize_email",
    "require_email",
    "email_format",
    "email_is_avail",
)

# Password and remember steps are no-ops when the plaintext is empty, so
# updates can leave either untouched.
USER_UPDATE_VALIDATORS = (
    "password_min_length",
    "bcrypt_password",
    "password_hash_required",
    "remember_min_bytes",
    "hmac_remember",
    "remember_hash_required",
    "normalize_email",
    "require_email",
    "email_format",
    "email_is_avail",
)


class UserDB(Protocol):
    """Contract shared by every layer of the user chain."""

    def by_id(self, id: int) -> User: ...
    def by_email(self, email: str) -> User: ...
    def by_remember(self, token: str) -> User: ...
    def create(self, user: User) -> None: ...
    def update(self, user: User) -> None: ...
    def delete(self, id: int) -> None: ...
    def discard(self, user: User) -> None: ...


class UserStore(SQLStore[User]):
    """Reads and writes users. Expects emails normalized and tokens hashed."""

    model = User

    def by_email(self, email: str) -> User:
        return self.first(User.email == email)

    def by_remember(self, remember_hash: str) -> User:
        return self.first(User.remember_hash == remember_hash)


class UserValidator(ValidatorChain):
    """Validates and normalizes users before passing them to the wrapped UserDB."""

    def __init__(self, user_db: UserDB, hmac: HMAC, pepper: str):
        self.user_db = user_db
        self.hmac = hmac
        self.pepper = pepper

    def by_id(self, id: int) -> User:
        return self.user_db.by_id(id)

    def by_email(self, email: str) -> User:
        """Look up a user by email, normalizing it first."""
        user = User(email=email)
        self.validate(user, ("normalize_email",))
        return self.user_db.by_email(user.email)

    def by_remember(self, token: str) -> User:
        """Look up a user by plaintext remember token."""
        user = User(remember=token)
        self.validate(user, ("hmac_remember",))
        return self.user_db.by_remember(user.remember_hash)

    def create(self, user: User) -> None:
        self.validate(user, USER_CREATE_VALIDATORS)
        self.user_db.create(user)

    def update(self, user: User) -> None:
        self.validate(user, USER_UPDATE_VALIDATORS)
        self.user_db.update(user)

    def delete(self, id: int) -> None:
        self.user_db.delete(id)

    def discard(self, user: User) -> None:
        self.user_db.discard(user)

    # Validators

    def password_required(self, user: User) -> None:
        if not user.password:
            raise PasswordRequiredError()

    def password_min_length(self, user: User) -> None:
        if user.password and len(user.password) < MIN_PASSWORD_LENGTH:
            raise PasswordTooShortError()

    def bcrypt_password(self, user: User) -> None:
        """Hash the password with the app-wide pepper. bcrypt adds the salt."""
        if not user.password:
            return
        user.password_hash = hash_password(user.password + self.pepper)
        user.password = ""

    def password_hash_required(self, user: User) -> None:
        if not user.password_hash:
            raise PasswordRequiredError()

    def set_remember_if_unset(self, user: User) -> None:
        if not user.remember:
            user.remember = remember_token()

    def remember_min_bytes(self, user: User) -> None:
        if user.remember and n_bytes(user.remember) < REMEMBER_TOKEN_BYTES:
            raise RememberTooShortError()

    def hmac_remember(self, user: User) -> None:
        if not user.remember:
            return
        user.remember_hash = self.hmac.hash(user.remember)
        user.remember = ""

    def remember_hash_required(self, user: User) -> None:
        if not user.remember_hash:
            raise RememberRequiredError()

    def normalize_email(self, user: User) -> None:
        user.email = (user.email or "").lower().strip()

    def require_email(self, user: User) -> None:
        if not user.email:
            raise EmailRequiredError()

    def email_format(self, user: User) -> None:
        if user.email and not EMAIL_PATTERN.match(user.email):
            raise EmailInvalidError()

    def email_is_avail(self, user: User) -> None:
        try:
            existing = self.by_email(user.email)
        except NotFoundError:
            return
        # The address may belong to the very user being updated
        if existing.id != user.id:
            raise EmailTakenError()


class UserService:
    """Entry point for working with users."""

    def __init__(self, user_db: UserDB, pepper: str):
        self.user_db = user_db
        self.pepper = pepper

    def authenticate(self, email: str, password: str) -> User:
        """Return the user owning ``email`` if ``password`` is theirs.

        Raises NotFoundError for an unknown email and PasswordIncorrectError
        for a wrong password. A stored hash passlib cannot read raises
        ValueError.
        """
        try:
            user = self.by_email(email)
        except NotFoundError:
            logger.info(f"Authentication failed, no user for {email!r}")
            raise

        if not verify_password(password + self.pepper, user.password_hash):
            logger.info(f"Authentication failed, incorrect password for user {user.id}")
            raise PasswordIncorrectError()
        return user

    def by_id(self, id: int) -> User:
        return self.user_db.by_id(id)

    def by_email(self, email: str) -> User:
        return self.user_db.by_email(email)

    def by_remember(self, token: str) -> User:
        return self.user_db.by_remember(token)

    def create(self, user: User) -> None:
        self.user_db.create(user)

    def update(self, user: User) -> None:
        self.user_db.update(user)

    def delete(self, id: int) -> None:
        self.user_db.delete(id)

    def discard(self, user: User) -> None:
        """Drop unsaved changes to ``user``, restoring its stored values."""
        self.user_db.discard(user)


def new_user_service(db: Session, pepper: str, hmac_key: str) -> UserService:
    """Assemble the service -> validator -> store chain for users."""
    store = UserStore(db)
    validator = UserValidator(store, HMAC(hmac_key), pepper)
    return UserService(validator, pepper)
