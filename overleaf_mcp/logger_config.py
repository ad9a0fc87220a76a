"""Logging setup for the Overleaf MCP server.

Two loggers are configured:
- ``mcp_call_logger``: one line per tool call and result (``mcp_calls.log``)
- ``error_logger``: structured JSON error records (``errors.log``)

Both write to rotating files only; stdout carries the MCP stdio protocol and
must stay clean.
"""

from __future__ import annotations

import datetime
import functools
import inspect
import json
import logging
import os
import tempfile
import traceback
from enum import Enum
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from .metrics_config import record_tool_call_error
from .metrics_config import record_tool_call_start
from .metrics_config import record_tool_call_success

SECRET_ARGUMENTS = {"git_token", "gitToken", "token"}

_STANDARD_RECORD_ATTRS = set(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


class ErrorCategory(Enum):
    """Severity classification for structured error records."""

    CRITICAL = "CRITICAL"
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"


_CATEGORY_LEVELS = {
    ErrorCategory.CRITICAL: logging.CRITICAL,
    ErrorCategory.ERROR: logging.ERROR,
    ErrorCategory.WARNING: logging.WARNING,
    ErrorCategory.INFO: logging.INFO,
}


class StructuredLogFormatter(logging.Formatter):
    """Format log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.datetime.fromtimestamp(record.created, tz=datetime.timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "line": record.lineno,
        }
        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc_value, exc_tb = record.exc_info
            log_data["exception"] = {
                "type": exc_type.__name__,
                "message": str(exc_value),
                "traceback": traceback.format_exception(exc_type, exc_value, exc_tb),
            }
        for key, value in record.__dict__.items():
            if key not in _STANDARD_RECORD_ATTRS and not key.startswith("_"):
                log_data[key] = value
        return json.dumps(log_data, default=str)


def _log_dir() -> Path:
    path = Path(os.environ.get("OVERLEAF_MCP_LOG_DIR", Path(tempfile.gettempdir()) / "overleaf-mcp" / "logs"))
    path.mkdir(parents=True, exist_ok=True)
    return path


def _rotating_handler(filename: str) -> RotatingFileHandler:
    # 10MB per file, 5 backups
    return RotatingFileHandler(_log_dir() / filename, maxBytes=10 * 1024 * 1024, backupCount=5, delay=True)


# --- Logging Setup ---
mcp_call_logger = logging.getLogger("mcp_call_logger")
mcp_call_logger.setLevel(logging.INFO)
if not mcp_call_logger.handlers:
    _call_handler = _rotating_handler("mcp_calls.log")
    _call_handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
    mcp_call_logger.addHandler(_call_handler)
mcp_call_logger.propagate = False

error_logger = logging.getLogger("error_logger")
error_logger.setLevel(logging.INFO)
if not error_logger.handlers:
    _error_handler = _rotating_handler("errors.log")
    _error_handler.setFormatter(StructuredLogFormatter())
    error_logger.addHandler(_error_handler)
error_logger.propagate = False


def configure_logging(level: str = "INFO") -> None:
    """Apply the configured level to the server loggers."""
    numeric = logging.getLevelName(level.upper())
    if isinstance(numeric, int):
        mcp_call_logger.setLevel(numeric)
        error_logger.setLevel(numeric)


def log_structured_error(
    category: ErrorCategory,
    message: str,
    exception: BaseException | None = None,
    context: dict[str, Any] | None = None,
    operation: str | None = None,
    **kwargs: Any,
) -> None:
    """Write one structured error record to ``error_logger``."""
    extra: dict[str, Any] = {"error_category": category.value}
    if operation:
        extra["operation"] = operation
    if context:
        extra.update(context)
    extra.update(kwargs)
    if exception is not None and hasattr(exception, "error_code"):
        extra.setdefault("error_code", exception.error_code)
    error_logger.log(_CATEGORY_LEVELS[category], message, exc_info=exception is not None, extra=extra)


def safe_operation(
    operation_name: str,
    func,
    *args,
    error_category: ErrorCategory = ErrorCategory.ERROR,
    **kwargs,
) -> tuple[bool, Any, Exception | None]:
    """Call ``func`` and report ``(success, result, error)`` instead of raising."""
    try:
        return True, func(*args, **kwargs), None
    except Exception as e:
        log_structured_error(
            category=error_category,
            message=f"Operation {operation_name} failed: {e}",
            exception=e,
            operation=operation_name,
        )
        return False, None, e


def _describe(value: Any) -> str:
    if hasattr(value, "model_dump_json"):
        return value.model_dump_json(indent=None, exclude_none=True)
    if isinstance(value, list) and value and hasattr(value[0], "model_dump_json"):
        return "[" + ", ".join(item.model_dump_json(indent=None, exclude_none=True) for item in value) + "]"
    return repr(value)


def _describe_argument(name: str, value: Any) -> str:
    return "***" if name in SECRET_ARGUMENTS and value else _describe(value)


def _describe_call(signature: inspect.Signature | None, args: tuple, kwargs: dict) -> str:
    try:
        if signature is not None:
            # Positional arguments are masked by the parameter they bind to
            bound = signature.bind_partial(*args, **kwargs)
            logged = {k: _describe_argument(k, v) for k, v in bound.arguments.items()}
            return f"args={logged}"
        logged_kwargs = {k: _describe_argument(k, v) for k, v in kwargs.items()}
        return f"args=<{len(args)} positional>, kwargs={logged_kwargs}"
    except Exception as e:
        return f"args/kwargs logging error: {e}"


def _log_failure(func_name: str, start_time: float | None, error: Exception) -> None:
    record_tool_call_error(func_name, start_time, error)
    mcp_call_logger.error(f"Tool {func_name} raised exception: {error}")
    log_structured_error(
        category=ErrorCategory.ERROR,
        message=f"Tool {func_name} failed: {error}",
        exception=error,
        operation="tool_execution",
        function=func_name,
    )


def _log_success(func_name: str, start_time: float | None, result: Any) -> None:
    result_str = _describe(result)
    record_tool_call_success(func_name, start_time, len(result_str))
    mcp_call_logger.info(f"Tool {func_name} returned: {result_str}")


# --- Decorator for Logging MCP Calls with Metrics ---
def log_mcp_call(func):
    """Log arguments, result and failures of a tool function (sync or async)."""
    func_name = getattr(func, "__name__", "unknown_function")
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        signature = None

    if inspect.iscoroutinefunction(func):

        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs):
            start_time = record_tool_call_start(func_name, args, kwargs)
            mcp_call_logger.info(f"Calling tool: {func_name} with {_describe_call(signature, args, kwargs)}")
            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                _log_failure(func_name, start_time, e)
                raise
            _log_success(func_name, start_time, result)
            return result

        return async_wrapper

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start_time = record_tool_call_start(func_name, args, kwargs)
        mcp_call_logger.info(f"Calling tool: {func_name} with {_describe_call(signature, args, kwargs)}")
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            _log_failure(func_name, start_time, e)
            raise
        _log_success(func_name, start_time, result)
        return result

    return wrapper
