from typing import Optional, TypedDict

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from userstore.database.base import Base


class UserRecord(Base):
    """
    SQLAlchemy model for the persisted `user` row.

    Mirrors initdb.d/user.sql. The repository only uses the underlying table
    (`UserRecord.__table__`) to build Core statements; the class itself is
    what registers the schema with `Base.metadata`.
    """
    __tablename__ = "user"

    id: Mapped[str] = mapped_column(
        String(26),
        primary_key=True,
    )

    name: Mapped[str] = mapped_column(
        String(40),
        unique=True,
        nullable=False,
    )

    # Nullable in storage; User.age is not
    age: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<UserRecord(id={self.id!r}, name={self.name!r}, age={self.age!r})>"


class UserRow(TypedDict):
    """Row shape exchanged with an SQLExecutor."""

    id: str
    name: str
    age: Optional[int]


user_table = UserRecord.__table__
