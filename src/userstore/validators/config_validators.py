"""Normalisers applied to raw environment values before Settings validation."""


def to_uppercase(value: str | None) -> str | None:
    """
    Strip surrounding whitespace and upper-case `value` (None passes through).
    """
    if value is None:
        return None
    return value.strip().upper()


def to_lowercase(value: str | None) -> str | None:
    """
    Strip surrounding whitespace and lower-case `value` (None passes through).
    """
    if value is None:
        return None
    return value.strip().lower()
