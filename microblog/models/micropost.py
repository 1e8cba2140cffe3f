"""Micropost model."""

from sqlalchemy import Column, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship

from microblog.database import Base
from microblog.models.mixins import TimestampMixin

MAX_CONTENT_LENGTH = 140


class Micropost(Base, TimestampMixin):
    """A short status update owned by one user."""

    __tablename__ = "microposts"
    __table_args__ = (Index("ix_microposts_user_id_created_at", "user_id", "created_at"),)

    id = Column(Integer, primary_key=True, index=True)
    content = Column(String(MAX_CONTENT_LENGTH), nullable=False)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Relationships
    user = relationship("User", back_populates="microposts")

    def __repr__(self) -> str:
        return f"<Micropost(id={self.id}, user_id={self.user_id})>"
