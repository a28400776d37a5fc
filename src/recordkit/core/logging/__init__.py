# src/recordkit/core/logging/
# ├─ __init__.py            # public API: setup_logging, set_context_id
# ├─ builder.py             # make_dict_config(settings) + setup_logging(settings)
# ├─ formatters.py          # JsonFormatter, ColorFormatter
# ├─ filters.py             # ContextIdFilter, RedactFilter (+ contextvar helpers)
# └─ handlers.py            # handler config factories (console/file)


from .builder import setup_logging, make_dict_config
from .filters import set_context_id, get_context_id, reset_context_id, ContextIdFilter, RedactFilter

__all__ = [
    "setup_logging",
    "make_dict_config",
    "set_context_id",
    "get_context_id",
    "reset_context_id",
    "ContextIdFilter",
    "RedactFilter",
]
