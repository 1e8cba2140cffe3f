"""Follow graph service."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from microblog.exceptions import FieldError, ValidationFailed
from microblog.models.relationship import Relationship
from microblog.models.user import User

logger = logging.getLogger(__name__)


class FollowService:
    """Service for follow/unfollow and graph lookups."""

    def __init__(self, db: Session):
        self.db = db

    def _edge(self, follower_id: int, followed_id: int) -> Relationship | None:
        return (
            self.db.query(Relationship)
            .filter(
                Relationship.follower_id == follower_id,
                Relationship.followed_id == followed_id,
            )
            .first()
        )

    def follow(self, follower: User, target: User) -> Relationship:
        """Make follower follow target.

        Following someone already followed returns the existing edge.
        Following yourself is rejected.
        """
        if follower.id == target.id:
            raise ValidationFailed([FieldError("followed_id", "can't follow yourself")])

        existing = self._edge(follower.id, target.id)
        if existing:
            return existing

        edge = Relationship(follower_id=follower.id, followed_id=target.id)
        self.db.add(edge)
        try:
            self.db.commit()
        except IntegrityError:
            # A concurrent request created the same edge first
            self.db.rollback()
            existing = self._edge(follower.id, target.id)
            if existing is None:
                raise
            return existing
        self.db.refresh(edge)
        logger.info(f"User {follower.id} followed user {target.id}")
        return edge

    def unfollow(self, follower: User, target: User) -> bool:
        """Remove the edge if present. Returns whether an edge was removed."""
        deleted = (
            self.db.query(Relationship)
            .filter(
                Relationship.follower_id == follower.id,
                Relationship.followed_id == target.id,
            )
            .delete(synchronize_session=False)
        )
        self.db.commit()
        if deleted:
            logger.info(f"User {follower.id} unfollowed user {target.id}")
        return bool(deleted)

    def is_following(self, follower: User, target: User) -> bool:
        """Check whether follower follows target."""
        return self._edge(follower.id, target.id) is not None

    def following(self, user: User) -> list[User]:
        """Users that user follows, in the order they were followed."""
        return (
            self.db.query(User)
            .join(Relationship, Relationship.followed_id == User.id)
            .filter(Relationship.follower_id == user.id)
            .order_by(Relationship.id)
            .all()
        )

    def followers(self, user: User) -> list[User]:
        """Users following user, in the order they started following."""
        return (
            self.db.query(User)
            .join(Relationship, Relationship.follower_id == User.id)
            .filter(Relationship.followed_id == user.id)
            .order_by(Relationship.id)
            .all()
        )

    def following_ids(self, user: User) -> set[int]:
        """Ids of users that user follows."""
        rows = (
            self.db.query(Relationship.followed_id)
            .filter(Relationship.follower_id == user.id)
            .all()
        )
        return {followed_id for (followed_id,) in rows}

    def followed_set(self, user: User) -> frozenset[int]:
        """The user's own id plus the ids of everyone they follow."""
        return frozenset(self.following_ids(user) | {user.id})

    def counts(self, user: User) -> tuple[int, int]:
        """Return (following, followers) counts."""
        following = (
            self.db.query(Relationship).filter(Relationship.follower_id == user.id).count()
        )
        followers = (
            self.db.query(Relationship).filter(Relationship.followed_id == user.id).count()
        )
        return following, followers
