from dataclasses import dataclass


@dataclass(frozen=True)
class User:
    """
    In-memory representation of a user record.

    Used as both the input and the output of UserRepository, so callers never
    see the storage row shape. `age` is always a concrete int here: the
    nullable column is unwrapped by UserMapper before a User is built.
    """

    # 26-character sortable identifier, supplied by the caller (primary key)
    id: str

    # Unique across all users; uniqueness is enforced by the database
    name: str

    age: int
