"""
Logging builder: assemble a dictConfig mapping from Settings and apply it.

    setup_logging(get_settings())

Layout produced by `make_dict_config`:
  - formatters: "standard" (ColorFormatter for LOG_FORMAT=text) and "json"
  - filters: "request_id", "redact"
  - handlers: "console" always; "file" + "error_file" when LOG_TO_STDOUT is false
    and LOG_DIR is set, otherwise "error_console"
  - loggers: root, uvicorn.error, uvicorn.access, sqlalchemy.engine
"""

from pathlib import Path
import logging
import logging.config

from book_api.config.settings import Settings
from book_api.utils.logging import get_project_name

from .formatters import JsonFormatter, ColorFormatter
from .filters import RequestIdFilter, RedactFilter
from .handlers import (
    get_console_handler,
    get_file_handler,
    get_error_file_handler,
    get_error_console_handler,
)

TEXT_LINE = "%(asctime)s | %(levelname)s | %(name)s | %(request_id)s | %(message)s"


def _writes_files(settings: Settings) -> bool:
    return (not settings.LOG_TO_STDOUT) and bool(settings.LOG_DIR)


def _build_handlers(settings: Settings) -> dict[str, dict]:
    handlers = {"console": get_console_handler(settings)}
    if _writes_files(settings):
        handlers["file"] = get_file_handler(settings)
        handlers["error_file"] = get_error_file_handler(settings)
    else:
        handlers["error_console"] = get_error_console_handler(settings)
    return handlers


def _build_loggers(settings: Settings, handler_names: list[str]) -> dict[str, dict]:
    # name -> (level, handlers, propagate)
    table = {
        "": (settings.LOG_LEVEL, handler_names, True),
        "uvicorn.error": (settings.LOG_LEVEL, handler_names, False),
        "uvicorn.access": ("INFO", ["console"], False),
        # Bound parameters may contain user data; statements only on request
        "sqlalchemy.engine": ("DEBUG" if settings.ENABLE_SQL_LOGGING else "WARNING", ["console"], False),
    }
    return {
        name: {"level": level, "handlers": list(handlers), "propagate": propagate}
        for name, (level, handlers, propagate) in table.items()
    }


def make_dict_config(settings: Settings) -> dict:
    text_formatter = ColorFormatter if settings.LOG_FORMAT == "text" else logging.Formatter
    handlers = _build_handlers(settings)

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {"()": text_formatter, "fmt": TEXT_LINE},
            "json": {
                "()": JsonFormatter,
                "env": settings.ENV,
                "service": get_project_name(default="book-api"),
            },
        },
        "filters": {
            "request_id": {"()": RequestIdFilter},
            "redact": {"()": RedactFilter},
        },
        "handlers": handlers,
        "loggers": _build_loggers(settings, list(handlers)),
    }


def setup_logging(settings: Settings) -> None:
    """
    Apply the logging configuration.

    Creates LOG_DIR when file handlers are in use, then installs a RequestIdFilter on
    the root logger so records from loggers with their own handlers still get a
    request_id.
    """
    if _writes_files(settings):
        Path(settings.LOG_DIR).mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(make_dict_config(settings))

    root = logging.getLogger()
    if not any(isinstance(f, RequestIdFilter) for f in root.filters):
        root.addFilter(RequestIdFilter())
