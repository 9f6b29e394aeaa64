"""Errors raised by the model layer.

Every error carries an internal message prefixed with ``"models: "``.
``public()`` renders the same message without the prefix, suitable for
showing to end users.

Store failures are not represented here: SQLAlchemy exceptions propagate
through every layer unchanged.
"""

PREFIX = "models: "


class ModelError(Exception):
    """Base exception for all model layer errors."""

    message = "models: unexpected error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)

    def public(self) -> str:
        """Return the message with the internal prefix removed and a capital first letter."""
        text = str(self)
        if text.startswith(PREFIX):
            text = text[len(PREFIX) :]
        return text[:1].upper() + text[1:]


class NotFoundError(ModelError):
    """No record matched the lookup."""

    message = "models: resource not found"


class PasswordIncorrectError(ModelError):
    """The password did not match during authentication."""

    message = "models: incorrect password provided"


# ─── Validation errors ──────────────────────────────────────────


class ValidationError(ModelError):
    """A record failed a field check before reaching the store."""

    message = "models: record is not valid"
    field: str | None = None


class EmailRequiredError(ValidationError):
    message = "models: email address is required"
    field = "email"


class EmailInvalidError(ValidationError):
    message = "models: email address is not valid"
    field = "email"


class EmailTakenError(ValidationError):
    message = "models: email address is already taken"
    field = "email"


class PasswordRequiredError(ValidationError):
    message = "models: password is required"
    field = "password"


class PasswordTooShortError(ValidationError):
    message = "models: password must be at least 8 characters long"
    field = "password"


class RememberRequiredError(ValidationError):
    message = "models: remember token is required"
    field = "remember"


class RememberTooShortError(ValidationError):
    message = "models: remember token must be at least 32 bytes"
    field = "remember"


class UserIDRequiredError(ValidationError):
    message = "models: user ID is required"
    field = "user_id"


class TitleRequiredError(ValidationError):
    message = "models: title is required"
    field = "title"
