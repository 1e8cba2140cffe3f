"""Relationship model for the follow graph."""

from sqlalchemy import Column, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship

from microblog.database import Base
from microblog.models.mixins import TimestampMixin


class Relationship(Base, TimestampMixin):
    """Directed edge: follower follows followed."""

    __tablename__ = "relationships"
    __table_args__ = (
        UniqueConstraint("follower_id", "followed_id", name="uq_relationships_follower_followed"),
    )

    id = Column(Integer, primary_key=True, index=True)
    follower_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    followed_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Relationships
    follower = relationship("User", foreign_keys=[follower_id], back_populates="relationships")
    followed = relationship(
        "User", foreign_keys=[followed_id], back_populates="reverse_relationships"
    )
