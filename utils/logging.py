"""
Structured logging for the Rookie Draft Board

Console output stays human-readable; the rotating file handler set up in
app.py writes one JSON object per line through JSONFormatter. Request
details (method, path, route, path/query params) and the current trace id
live in a context variable so every log line inside a request carries them.
"""
import contextvars
import json
import logging
import time
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

# Per-request fields, copied on write so concurrent requests never share a dict
log_context: contextvars.ContextVar[Dict[str, Any]] = contextvars.ContextVar('log_context', default={})

# Attributes every LogRecord has; anything else on a record came from extra=
_RECORD_ATTRS = frozenset(vars(logging.LogRecord('', 0, '', 0, '', (), None))) | {'message', 'asctime'}


def _json_safe(value: Any) -> Any:
    try:
        json.dumps(value)
        return value
    except (TypeError, ValueError):
        return str(value)


class JSONFormatter(logging.Formatter):
    """One JSON document per record, with request context and extra fields."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            'timestamp': datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'function': record.funcName,
            'line': record.lineno,
        }

        context = log_context.get({})
        if context:
            entry['context'] = dict(context)
            if 'trace_id' in context:
                entry['trace_id'] = context['trace_id']

        extra = {
            key: _json_safe(value)
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRS
        }
        if extra:
            entry['extra'] = extra

        if record.exc_info:
            exc_type, exc_value, _ = record.exc_info
            entry['exception'] = {
                'type': exc_type.__name__ if exc_type else 'Unknown',
                'message': str(exc_value) if exc_value else '',
                'traceback': self.formatException(record.exc_info),
            }

        return json.dumps(entry, ensure_ascii=False)


class ContextualLogger:
    """
    Wrapper around a stdlib logger that times operations.

    Keyword arguments to the log methods become structured fields. Between
    start_operation() and end_operation() each line also gets duration_ms.
    """

    def __init__(self, logger_name: str):
        self.logger = logging.getLogger(logger_name)
        self._start_time: Optional[float] = None

    def _elapsed_ms(self) -> Optional[int]:
        if self._start_time is None:
            return None
        return int((time.perf_counter() - self._start_time) * 1000)

    def _emit(self, method: str, message: str, fields: Dict[str, Any], **log_kwargs) -> None:
        elapsed = self._elapsed_ms()
        if elapsed is not None:
            fields['duration_ms'] = elapsed
        getattr(self.logger, method)(message, extra=fields, **log_kwargs)

    def start_operation(self, operation_name: Optional[str] = None) -> str:
        """
        Begin timing and put a fresh 8-character trace id into the context.

        Returns:
            The trace id
        """
        self._start_time = time.perf_counter()
        trace_id = uuid.uuid4().hex[:8]

        context = {**log_context.get({}), 'trace_id': trace_id}
        if operation_name:
            context['operation'] = operation_name
        log_context.set(context)
        return trace_id

    def end_operation(self, trace_id: str, operation_result: str = "completed") -> None:
        """Log the total duration and drop the operation from the context."""
        if self._start_time is None:
            self.warning("end_operation called without corresponding start_operation")
            return

        final_ms = int((time.perf_counter() - self._start_time) * 1000)
        self.info(
            f"Operation {operation_result}",
            trace_id=trace_id,
            final_duration_ms=final_ms,
            operation_result=operation_result
        )

        context = {k: v for k, v in log_context.get({}).items() if k != 'operation'}
        if context.get('trace_id') == trace_id:
            del context['trace_id']
        log_context.set(context)
        self._start_time = None

    def debug(self, message: str, **fields):
        self._emit('debug', message, fields)

    def info(self, message: str, **fields):
        self._emit('info', message, fields)

    def warning(self, message: str, **fields):
        self._emit('warning', message, fields)

    def error(self, message: str, error: Optional[Exception] = None, **fields):
        """
        Log an error; when an exception is given its type and message are
        added as fields and its traceback is attached.
        """
        if error is None:
            self._emit('error', message, fields)
            return
        fields['error'] = {'type': type(error).__name__, 'message': str(error)}
        self._emit('error', message, fields, exc_info=error)

    def exception(self, message: str, **fields):
        """Log from inside an except block with the active traceback."""
        self._emit('exception', message, fields)


def set_request_context(
    request: Optional[Any] = None,
    method: Optional[str] = None,
    path: Optional[str] = None,
    route: Optional[str] = None,
    **additional_context
):
    """
    Record HTTP request details for subsequent log lines.

    Args:
        request: aiohttp request (method, path and remote address are read from it)
        method: Explicit HTTP method, overriding the request's
        path: Explicit path, overriding the request's
        route: Route name such as 'POST /api/players/reorder'
        **additional_context: Extra fields, e.g. param_player_id
    """
    context = dict(log_context.get({}))

    if request is not None:
        context['method'] = request.method
        context['path'] = request.path
        remote = getattr(request, 'remote', None)
        if remote:
            context['remote'] = remote

    overrides = {'method': method, 'path': path, 'route': route}
    context.update({k: v for k, v in overrides.items() if v})
    context.update(additional_context)

    log_context.set(context)


def clear_context():
    """Forget all request fields (called when a request finishes)."""
    log_context.set({})


def get_contextual_logger(logger_name: str) -> ContextualLogger:
    return ContextualLogger(logger_name)
