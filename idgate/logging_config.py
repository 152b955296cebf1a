from __future__ import annotations

import logging

# requests/urllib3 log every connection at DEBUG; key-set refreshes would
# flood the output when the service itself runs at DEBUG.
_HTTP_LOGGERS = ("urllib3",)


def _level_number(level: str) -> int:
    value = logging.getLevelName(level.upper())
    if not isinstance(value, int):
        raise ValueError(f"unknown log level {level!r}")
    return value


def configure_app_logging(level: str = "INFO", idtoken_level: str | None = None) -> dict[str, int]:
    """
    Set levels for the service loggers and return what was applied.

    Notes:
    - uvicorn already installs handlers; only levels are touched here.
    - ``idgate.idtoken`` follows ``level`` unless ``idtoken_level``
      (``APP_IDTOKEN_LOG_LEVEL``) is given, so token rejections can be traced
      at DEBUG without turning on DEBUG for the whole service.
    - HTTP client loggers never go below WARNING.
    """

    applied: dict[str, int] = {}

    root_level = _level_number(level)
    app_logger = logging.getLogger("idgate")
    app_logger.setLevel(root_level)
    app_logger.propagate = True
    applied["idgate"] = root_level

    idtoken_logger = logging.getLogger("idgate.idtoken")
    if idtoken_level is None:
        idtoken_logger.setLevel(logging.NOTSET)
        applied["idgate.idtoken"] = root_level
    else:
        idtoken_logger.setLevel(_level_number(idtoken_level))
        applied["idgate.idtoken"] = idtoken_logger.level

    for name in _HTTP_LOGGERS:
        http_logger = logging.getLogger(name)
        http_level = max(http_logger.getEffectiveLevel(), logging.WARNING)
        http_logger.setLevel(http_level)
        applied[name] = http_level

    return applied
