"""
Decorators for the Rookie Draft Board

This module provides decorators to reduce logging boilerplate in HTTP route
handlers.
"""

import inspect
from functools import wraps
from typing import List, Optional

from utils.logging import set_request_context, get_contextual_logger


def logged_route(
    route_name: Optional[str] = None,
    log_params: bool = True,
    exclude_params: Optional[List[str]] = None
):
    """
    Decorator for aiohttp route handlers that adds comprehensive logging.

    This decorator automatically handles:
    - Setting request context (method, path, route) for all log entries
    - Starting/ending operation timing
    - Logging route start/completion/failure
    - Preserving function metadata and signature

    Args:
        route_name: Override route name (defaults to "METHOD /path")
        log_params: Whether to log path and query parameters (default: True)
        exclude_params: List of parameter names to exclude from logging

    Example:
        @logged_route("GET /api/players/{id}")
        async def get_player(self, request):
            player = self.store.get_player(parse_id(request, 'player_id'))
            return web.json_response(player.to_dict())

    Side Effects:
        - Sets request context for subsequent log entries
        - Creates trace_id for request correlation
        - Re-raises all exceptions after logging (the error middleware maps them)

    Requirements:
        - Function must be an async method with (self, request) signature
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(self, request, *args, **kwargs):
            name = route_name or f"{request.method} {request.path}"

            context = {}
            if log_params:
                exclude_set = set(exclude_params or [])
                params = {**dict(request.query), **dict(request.match_info)}
                for key, value in params.items():
                    if key not in exclude_set:
                        context[f"param_{key}"] = value

            set_request_context(request=request, route=name, **context)

            logger = getattr(self, 'logger', None) or get_contextual_logger(
                f'{self.__class__.__module__}.{self.__class__.__name__}'
            )
            trace_id = logger.start_operation(f"{func.__name__}_route")

            try:
                logger.debug(f"{name} started")
                result = await func(self, request, *args, **kwargs)
                logger.info(f"{name} completed", status=getattr(result, 'status', None))
                logger.end_operation(trace_id, "completed")
                return result

            except Exception as e:
                logger.warning(f"{name} failed: {e}", error_type=type(e).__name__)
                logger.end_operation(trace_id, "failed")
                raise

        wrapper.__signature__ = inspect.signature(func)  # type: ignore
        return wrapper
    return decorator
