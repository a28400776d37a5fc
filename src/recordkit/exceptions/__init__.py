
# recordkit/
# │
# ├── exceptions/
# │   ├── __init__.py
# │   └── base.py                    # App-level errors (RepositoryError, SecurityViolationError, ...)

from .base import (
    RepositoryError,
    InvalidArgumentError,
    SecurityViolationError,
    InvalidFieldError,
)

__all__ = [
    "RepositoryError",
    "InvalidArgumentError",
    "SecurityViolationError",
    "InvalidFieldError",
]
