"""
Custom exceptions for repository-related operations.
"""

from typing import Iterable

# canonical repository-level exception

class RepositoryError(Exception):
    """
    Base exception for repository errors.

    - message: static description of what failed (e.g. "failed to list users")
    - cause: the original storage error, rendered verbatim after the message
    - fields: optional list of field names related to the error (e.g., ['name'])
    - constraint: optional DB constraint name or identifier (for logs only)
    - error_code: canonical short code (e.g., 'not_found', 'duplicate') for callers and logs

    The rendered text is ``"{message}: {cause}"`` when a cause is attached and
    just ``message`` otherwise, so messages stay deterministic across backends.
    """

    def __init__(self, message: str, *, cause: BaseException | None = None,
                 fields: Iterable[str] | None = None, constraint: str | None = None,
                 error_code: str | None = None):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.fields = list(fields) if fields else None
        self.constraint = constraint
        self.error_code = error_code

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.message}: {self.cause}"
        return self.message

    def to_log_context(self) -> dict:
        """
        Return the structured fields worth attaching to a log record via `extra=`.
        Raw cause text is left out; log it at DEBUG if it is needed.
        """
        context = {"error_code": self.error_code}
        if self.fields:
            context["fields"] = list(self.fields)
        if self.constraint:
            context["constraint"] = self.constraint
        return context


class NotFoundError(RepositoryError):
    def __init__(self, message: str = "Not found", *, cause: BaseException | None = None,
                 fields: Iterable[str] | None = None):
        super().__init__(message, cause=cause, fields=fields, error_code="not_found")


__all__ = [
    "RepositoryError",
    "NotFoundError",
]
