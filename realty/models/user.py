"""
Operator account table for the admin back office.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column
from realty.database import Base


class User(Base):
    """
    Back-office operator account.
    The password hash never leaves the storage layer.
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="User email address - must be unique"
    )

    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password"
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Display name"
    )

    def __repr__(self) -> str:
        """String representation of the user."""
        return f"<User(id={self.id}, email={self.email})>"
