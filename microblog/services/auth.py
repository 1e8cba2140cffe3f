"""Authentication service: account creation and credential checks."""

import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from microblog.exceptions import FieldError, ValidationFailed
from microblog.models.user import User
from microblog.security import hash_password
from microblog.validation import TAKEN, validate_user

logger = logging.getLogger(__name__)


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    """Authenticate a user by email and password.

    Unknown email and wrong password both return None.
    """
    user = db.query(User).filter(User.email == email).first()
    if not user:
        return None
    if not user.has_password(password):
        return None
    return user


def get_user(db: Session, user_id: int) -> User | None:
    """Get a user by id."""
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email, ignoring case."""
    return db.query(User).filter(func.lower(User.email) == email.lower()).first()


def email_taken(db: Session, email: str, exclude_user_id: int | None = None) -> bool:
    """Check whether another account already uses this email."""
    query = db.query(User.id).filter(func.lower(User.email) == email.lower())
    if exclude_user_id is not None:
        query = query.filter(User.id != exclude_user_id)
    return query.first() is not None


def create_user(
    db: Session,
    name: str | None,
    email: str | None,
    password: str | None,
    password_confirmation: str | None,
) -> User:
    """Create a new user.

    Raises ValidationFailed with per-field errors and writes nothing when the
    attributes are invalid or the email is already registered.
    """
    errors = validate_user(name, email, password, password_confirmation)
    if not any(e.field == "email" for e in errors) and email_taken(db, email):
        errors.append(FieldError("email", TAKEN))
    if errors:
        raise ValidationFailed(errors)

    user = User(name=name, email=email, encrypted_password=hash_password(password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same address
        db.rollback()
        raise ValidationFailed([FieldError("email", TAKEN)]) from None
    db.refresh(user)
    logger.info(f"Created user {user.id}")
    return user
