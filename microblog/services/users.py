"""User service for profile updates, admin changes and account removal."""

import logging

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from microblog.exceptions import FieldError, ValidationFailed
from microblog.models.micropost import Micropost
from microblog.models.relationship import Relationship
from microblog.models.user import User
from microblog.security import hash_password
from microblog.services.auth import email_taken
from microblog.validation import TAKEN, validate_user

logger = logging.getLogger(__name__)


class UserService:
    """Service for user-related operations."""

    def __init__(self, db: Session):
        self.db = db

    def list_users(self, page: int = 1, per_page: int = 30) -> list[User]:
        """List users ordered by id."""
        return (
            self.db.query(User)
            .order_by(User.id)
            .offset((max(page, 1) - 1) * per_page)
            .limit(per_page)
            .all()
        )

    def update_user(
        self,
        user: User,
        name: str | None = None,
        email: str | None = None,
        password: str | None = None,
        password_confirmation: str | None = None,
    ) -> User:
        """Update profile fields. Omitted fields keep their current value.

        The password is only changed when one is supplied.
        """
        new_name = user.name if name is None else name
        new_email = user.email if email is None else email

        errors = validate_user(
            new_name, new_email, password, password_confirmation, require_password=False
        )
        if not any(e.field == "email" for e in errors) and email_taken(
            self.db, new_email, exclude_user_id=user.id
        ):
            errors.append(FieldError("email", TAKEN))
        if errors:
            raise ValidationFailed(errors)

        user.name = new_name
        user.email = new_email
        if password:
            user.encrypted_password = hash_password(password)

        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ValidationFailed([FieldError("email", TAKEN)]) from None
        self.db.refresh(user)
        return user

    def toggle_admin(self, user: User) -> User:
        """Flip the admin flag and persist it."""
        user.admin = not user.admin
        self.db.commit()
        self.db.refresh(user)
        logger.info(f"User {user.id} admin set to {user.admin}")
        return user

    def destroy_user(self, user: User) -> None:
        """Delete a user with their microposts and relationships.

        Everything is removed in one transaction; on failure nothing is.
        """
        user_id = user.id
        try:
            self.db.query(Micropost).filter(Micropost.user_id == user_id).delete(
                synchronize_session=False
            )
            self.db.query(Relationship).filter(
                or_(Relationship.follower_id == user_id, Relationship.followed_id == user_id)
            ).delete(synchronize_session=False)
            self.db.delete(user)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to destroy user {user_id}: {e}")
            raise
        logger.info(f"Destroyed user {user_id}")
