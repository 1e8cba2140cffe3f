"""User model."""

from sqlalchemy import Boolean, Column, Index, Integer, String, false, func
from sqlalchemy.orm import relationship

from microblog.database import Base
from microblog.models.mixins import TimestampMixin
from microblog.security import verify_password


class User(Base, TimestampMixin):
    """User model for authentication, posting and following."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    encrypted_password = Column(String(255), nullable=False)
    admin = Column(Boolean, nullable=False, default=False, server_default=false())

    # Dependent rows are removed by UserService.destroy_user
    microposts = relationship("Micropost", back_populates="user", passive_deletes="all")
    relationships = relationship(
        "Relationship",
        foreign_keys="Relationship.follower_id",
        back_populates="follower",
        passive_deletes="all",
    )
    reverse_relationships = relationship(
        "Relationship",
        foreign_keys="Relationship.followed_id",
        back_populates="followed",
        passive_deletes="all",
    )

    def has_password(self, password: str) -> bool:
        """Check a plaintext password against the stored credential."""
        if not self.encrypted_password:
            return False
        return verify_password(password, self.encrypted_password)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"


# Case-insensitive uniqueness enforced by the database
Index("uq_users_email_lower", func.lower(User.email), unique=True)
