"""Field validation for users and microposts.

Each validator returns a list of FieldError; an empty list means the
attributes are valid. Validators never touch the database, except the
email uniqueness check which services run separately.
"""

import re

from microblog.exceptions import FieldError
from microblog.models.micropost import MAX_CONTENT_LENGTH

MAX_NAME_LENGTH = 50
MAX_EMAIL_LENGTH = 255
MIN_PASSWORD_LENGTH = 6
MAX_PASSWORD_LENGTH = 40

EMAIL_REGEX = re.compile(r"\A[\w+\-.]+@[a-z\d\-.]+\.[a-z]+\Z", re.IGNORECASE)

BLANK = "can't be blank"
INVALID = "is invalid"
TAKEN = "has already been taken"
CONFIRMATION = "doesn't match confirmation"


def too_long(maximum: int) -> str:
    return f"is too long (maximum is {maximum} characters)"


def too_short(minimum: int) -> str:
    return f"is too short (minimum is {minimum} characters)"


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def validate_name(name: str | None) -> list[FieldError]:
    if is_blank(name):
        return [FieldError("name", BLANK)]
    if len(name) > MAX_NAME_LENGTH:
        return [FieldError("name", too_long(MAX_NAME_LENGTH))]
    return []


def validate_email(email: str | None) -> list[FieldError]:
    if is_blank(email):
        return [FieldError("email", BLANK)]
    if len(email) > MAX_EMAIL_LENGTH:
        return [FieldError("email", too_long(MAX_EMAIL_LENGTH))]
    if not EMAIL_REGEX.match(email):
        return [FieldError("email", INVALID)]
    return []


def validate_password(password: str | None, confirmation: str | None) -> list[FieldError]:
    """Check presence, length and confirmation of a new password."""
    if is_blank(password):
        return [FieldError("password", BLANK)]
    errors = []
    if password != confirmation:
        errors.append(FieldError("password", CONFIRMATION))
    if len(password) < MIN_PASSWORD_LENGTH:
        errors.append(FieldError("password", too_short(MIN_PASSWORD_LENGTH)))
    elif len(password) > MAX_PASSWORD_LENGTH:
        errors.append(FieldError("password", too_long(MAX_PASSWORD_LENGTH)))
    return errors


def validate_user(
    name: str | None,
    email: str | None,
    password: str | None,
    password_confirmation: str | None,
    *,
    require_password: bool = True,
) -> list[FieldError]:
    """Validate user attributes.

    When require_password is False (profile updates), the password is only
    checked if one was supplied.
    """
    errors = validate_name(name) + validate_email(email)
    if require_password or password or password_confirmation:
        errors += validate_password(password, password_confirmation)
    return errors


def validate_micropost(content: str | None, user_id: int | None) -> list[FieldError]:
    """Validate micropost attributes."""
    errors = []
    if is_blank(content):
        errors.append(FieldError("content", BLANK))
    elif len(content) > MAX_CONTENT_LENGTH:
        errors.append(FieldError("content", too_long(MAX_CONTENT_LENGTH)))
    if user_id is None:
        errors.append(FieldError("user_id", BLANK))
    return errors
