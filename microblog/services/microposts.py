"""Micropost service: posting, listing and the status feed."""

import logging
from collections.abc import Iterable

from sqlalchemy.orm import Session

from microblog.exceptions import PermissionDenied, ValidationFailed
from microblog.models.enums import MicropostOrder
from microblog.models.micropost import Micropost
from microblog.models.user import User
from microblog.services.follows import FollowService
from microblog.validation import validate_micropost

logger = logging.getLogger(__name__)


class MicropostService:
    """Service for micropost-related operations."""

    def __init__(self, db: Session, follow_service: FollowService | None = None):
        self.db = db
        self.follow_service = follow_service or FollowService(db)

    def create_micropost(self, user: User, content: str | None) -> Micropost:
        """Create a micropost owned by user."""
        errors = validate_micropost(content, user.id)
        if errors:
            raise ValidationFailed(errors)

        micropost = Micropost(content=content, user_id=user.id)
        self.db.add(micropost)
        self.db.commit()
        self.db.refresh(micropost)
        logger.info(f"User {user.id} posted micropost {micropost.id}")
        return micropost

    def get_micropost(self, micropost_id: int) -> Micropost | None:
        """Get a micropost by id."""
        return self.db.query(Micropost).filter(Micropost.id == micropost_id).first()

    def delete_micropost(self, micropost: Micropost, user: User) -> None:
        """Delete a micropost. Only its owner or an admin may do so."""
        if micropost.user_id != user.id and not user.admin:
            raise PermissionDenied("Only the author can delete this micropost")
        micropost_id = micropost.id
        self.db.delete(micropost)
        self.db.commit()
        logger.info(f"User {user.id} deleted micropost {micropost_id}")

    def list_microposts(
        self,
        user_ids: Iterable[int],
        order: MicropostOrder = MicropostOrder.NEWEST_FIRST,
        page: int = 1,
        per_page: int | None = None,
    ) -> list[Micropost]:
        """List microposts written by any of user_ids in one query.

        Sorted by creation time, ties broken by id, in the given order.
        Without per_page every matching row is returned.
        """
        ids = list(user_ids)
        if not ids:
            return []

        if order.descending:
            ordering = (Micropost.created_at.desc(), Micropost.id.desc())
        else:
            ordering = (Micropost.created_at.asc(), Micropost.id.asc())

        query = self.db.query(Micropost).filter(Micropost.user_id.in_(ids)).order_by(*ordering)
        if per_page is not None:
            query = query.offset((max(page, 1) - 1) * per_page).limit(per_page)
        return query.all()

    def microposts_for(
        self,
        user: User,
        order: MicropostOrder = MicropostOrder.NEWEST_FIRST,
        page: int = 1,
        per_page: int | None = None,
    ) -> list[Micropost]:
        """A user's own microposts."""
        return self.list_microposts([user.id], order=order, page=page, per_page=per_page)

    def feed(
        self,
        user: User,
        order: MicropostOrder = MicropostOrder.NEWEST_FIRST,
        page: int = 1,
        per_page: int | None = None,
    ) -> list[Micropost]:
        """Microposts from the user and everyone they follow."""
        followed_set = self.follow_service.followed_set(user)
        return self.list_microposts(followed_set, order=order, page=page, per_page=per_page)

    def count_for(self, user: User) -> int:
        """Number of microposts a user has written."""
        return self.db.query(Micropost).filter(Micropost.user_id == user.id).count()
