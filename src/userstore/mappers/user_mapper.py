"""
Storage mapper between the User entity and the persisted `user` row.

This is the only place where the nullable `age` column is dealt with:
  - to_row(): always writes a concrete age (never leaves the column absent)
  - from_row(): a NULL (or missing) age becomes 0

Both directions are pure; malformed rows are a storage concern and surface
from the executor before the mapper ever sees them.
"""
from typing import Any, Iterable, Mapping

from userstore.models.user import User
from userstore.models.user_record import UserRow


class UserMapper:

    @staticmethod
    def to_row(user: User) -> UserRow:
        return UserRow(id=user.id, name=user.name, age=user.age)

    @staticmethod
    def from_row(row: Mapping[str, Any]) -> User:
        age = row.get("age")
        return User(
            id=row["id"],
            name=row["name"],
            age=age if age is not None else 0,
        )

    @classmethod
    def from_rows(cls, rows: Iterable[Mapping[str, Any]]) -> list[User]:
        return [cls.from_row(row) for row in rows]
