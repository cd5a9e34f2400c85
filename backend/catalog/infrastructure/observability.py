"""Catalog Logging — JSON records carrying catalog context and error envelopes.

Invariants:
    - Every record has timestamp (the record's creation time), level, logger, message
    - Catalog extras (operation, core_id, slug, error_code, page, limit, row_count)
      are emitted only when set on the record
    - A logged CatalogError contributes its code, category and severity
    - At most one catalog handler on the root logger, however often setup runs

Design Decisions:
    - stdlib logging with a hand-written formatter: no logging dependency
    - The handler is named so a second catalog_lifespan replaces it instead of
      stacking a duplicate
"""

import json
import logging
from datetime import datetime, timezone

from catalog.core.errors import CatalogError

HANDLER_NAME = "catalog"

_EXTRA_KEYS = (
    "operation", "core_id", "slug", "error_code",
    "page", "limit", "row_count",
)


def _catalog_error(record: logging.LogRecord) -> CatalogError | None:
    if not record.exc_info:
        return None
    exc = record.exc_info[1]
    return exc if isinstance(exc, CatalogError) else None


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_KEYS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val

        error = _catalog_error(record)
        if error is not None:
            log.setdefault("error_code", error.code)
            log["error_category"] = error.category.value
            log["error_severity"] = error.severity.value
            if error.context.operation:
                log.setdefault("operation", error.context.operation)
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the catalog handler on the root logger, replacing an earlier one."""
    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == HANDLER_NAME:
            root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
