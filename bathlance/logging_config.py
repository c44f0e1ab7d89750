from __future__ import annotations

import logging
import re

DEV_FORMAT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d: %(message)s"
PROD_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Log lines echo user-typed values (manufacturing dates, categories, env
# settings); an address pasted into one of those fields is masked.
EMAIL_PATTERN = re.compile(r"[A-Za-z0-9_.+-]+@[A-Za-z0-9-]+\.[A-Za-z0-9-.]+")


class PiiRedactionFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = EMAIL_PATTERN.sub("[REDACTED_EMAIL]", record.getMessage())
        record.args = None
        return True


def configure_logging(level="WARNING", *, production: bool = False, redact_pii: bool = True) -> logging.Logger:
    """Configure the ``bathlance`` logger tree and return its root logger."""
    package_logger = logging.getLogger("bathlance")
    package_logger.setLevel(_coerce_level(level))
    package_logger.propagate = False
    for existing in package_logger.handlers[:]:
        package_logger.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(PROD_FORMAT if production else DEV_FORMAT))
    if redact_pii:
        handler.addFilter(PiiRedactionFilter())
    package_logger.addHandler(handler)
    return package_logger


def _coerce_level(raw_level) -> int:
    if isinstance(raw_level, int):
        return raw_level
    level = logging.getLevelName(str(raw_level).strip().upper())
    return level if isinstance(level, int) else logging.INFO
