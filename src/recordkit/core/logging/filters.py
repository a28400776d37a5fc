# src/recordkit/core/logging/filters.py
"""
Logging filters

Context ID filter and helpers for logging.

Callers (a web request handler, a worker job, a CLI command) set a context id
once with `set_context_id()`; every record logged afterwards in the same
execution context carries it as `record.context_id`, so all the existence
checks and projections done for one unit of work can be correlated.

- A `contextvars.ContextVar` is used so the id follows asyncio tasks across
  `await` boundaries (threading.local() would leak between tasks sharing a thread).
- `ContextIdFilter` always sets `record.context_id` (falling back to "-"), so
  formatters referencing `%(context_id)s` never KeyError.
- `RedactFilter` masks attributes with sensitive names before they are formatted.

Both filters return True: they annotate records, they never drop them.
"""

import logging
from logging import LogRecord
import contextvars

# Default None means "no context id set".
_context_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "context_id", default=None
)


def set_context_id(context_id: str | None):
    """
    Set the context id in the current context and return the token to allow reset.
    """
    return _context_id_ctx.set(context_id)


def reset_context_id(token):
    """
    Reset the contextvar to the previously saved token returned by set_context_id().
    """
    _context_id_ctx.reset(token)


def get_context_id() -> str | None:
    return _context_id_ctx.get()


class ContextIdFilter(logging.Filter):
    """
    Guarantee every LogRecord has a `context_id` attribute.

    Precedence: an explicit `extra={"context_id": ...}`, then the contextvar,
    then the sentinel "-".
    """

    def filter(self, record: LogRecord) -> bool:
        record.context_id = (
            getattr(record, "context_id", None) or get_context_id() or "-"
        )
        return True


# Redact sensitive information
class RedactFilter(logging.Filter):
    SENSITIVE = {"password", "secret", "token", "access_token", "refresh_token", "ssn",
                 "authorization", "field_value"}

    def filter(self, record: LogRecord) -> bool:
        # mask attributes on record that match SENSITIVE
        for key in list(record.__dict__.keys()):
            if key.lower() in self.SENSITIVE:
                record.__dict__[key] = "***REDACTED***"
        return True
