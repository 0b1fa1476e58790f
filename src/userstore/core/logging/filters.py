"""
Logging filters.

CorrelationIdFilter attaches a correlation id to every LogRecord so that all
lines produced by one logical unit of work (a job, a test, a request handled
by whatever service embeds this package) can be grouped. The id lives in a
`contextvars.ContextVar`, so it follows the current asyncio task across
awaits and concurrent tasks keep their own value.

RedactFilter masks sensitive `extra=` fields before any handler formats them.
"""
import logging
from logging import LogRecord
import contextvars


_correlation_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "correlation_id", default=None
)


def set_correlation_id(correlation_id: str | None) -> contextvars.Token:
    """
    Set the correlation id in the current context and return the token to allow reset.
    """
    return _correlation_id_ctx.set(correlation_id)


def reset_correlation_id(token: contextvars.Token) -> None:
    _correlation_id_ctx.reset(token)


def get_correlation_id() -> str | None:
    return _correlation_id_ctx.get()


class CorrelationIdFilter(logging.Filter):
    """
    Guarantee every LogRecord has a `correlation_id` attribute.

    Precedence: an explicit `extra={"correlation_id": ...}`, then the
    contextvar, then the sentinel "-" (so `%(correlation_id)s` never KeyErrors).
    Always returns True; it annotates, never drops.
    """

    def filter(self, record: LogRecord) -> bool:
        record.correlation_id = (
            getattr(record, "correlation_id", None) or get_correlation_id() or "-"
        )
        return True


class RedactFilter(logging.Filter):
    SENSITIVE = {"password", "db_password", "secret", "token", "authorization", "database_url"}

    def filter(self, record: LogRecord) -> bool:
        for key in list(record.__dict__.keys()):
            if key.lower() in self.SENSITIVE:
                record.__dict__[key] = "***REDACTED***"
        return True
