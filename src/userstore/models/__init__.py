r"""
Centralized access to the entity model and its storage row.

Example:

    from userstore.models import User, UserRecord, UserRow
"""

from .user import User
from .user_record import UserRecord, UserRow, user_table

__all__ = [
    "User",
    "UserRecord",
    "UserRow",
    "user_table",
]
