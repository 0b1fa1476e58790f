# src/userstore/core/logging/
# ├─ __init__.py            # public API: setup_logging, make_dict_config, correlation id helpers
# ├─ builder.py             # make_dict_config(settings) + setup_logging(settings)
# ├─ formatters.py          # JsonFormatter, ColorFormatter
# ├─ filters.py             # CorrelationIdFilter (+ contextvar helpers), RedactFilter
# └─ handlers.py            # handler factories (console/file/error)


from .builder import setup_logging, make_dict_config
from .filters import set_correlation_id, get_correlation_id, reset_correlation_id, CorrelationIdFilter

__all__ = [
    "setup_logging",
    "make_dict_config",
    "set_correlation_id",
    "get_correlation_id",
    "reset_correlation_id",
    "CorrelationIdFilter",
]
