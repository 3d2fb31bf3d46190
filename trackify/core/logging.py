import json
import logging
import sys
import time
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Dict, Iterator

operation_id_ctx: ContextVar[str | None] = ContextVar("operation_id", default=None)

# Attributes every LogRecord carries; anything else came in through `extra=`.
_RESERVED_ATTRS = set(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime", "operation_id"}


class OperationIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401
        oid = operation_id_ctx.get()
        record.operation_id = oid or "-"
        return True


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        base: Dict[str, Any] = {
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "time": time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created)),
            "operation_id": getattr(record, "operation_id", "-"),
        }
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                base[key] = value
        if record.exc_info:
            base["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(base, ensure_ascii=False, default=str)


def init_logging(debug: bool = False) -> None:
    root = logging.getLogger()
    root.handlers.clear()
    level = logging.DEBUG if debug else logging.INFO
    root.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.addFilter(OperationIdFilter())
    handler.setFormatter(JsonFormatter())
    root.addHandler(handler)


@contextmanager
def operation_context(name: str) -> Iterator[str]:
    """Tag every log line emitted inside the block with a fresh operation id."""
    oid = str(uuid.uuid4())
    token = operation_id_ctx.set(oid)
    logger = logging.getLogger("trackify.operation")
    logger.debug("operation start", extra={"operation": name})
    try:
        yield oid
    finally:
        logger.debug("operation end", extra={"operation": name})
        operation_id_ctx.reset(token)
