"""Repository utility functions for common database operations."""

import time
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import ParamSpec, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from core.errors import ConflictError, DatabaseError
from core.logger import get_logger

logger = get_logger(__name__)

# Threshold for logging slow queries (milliseconds)
SLOW_QUERY_THRESHOLD_MS = 500

LIKE_ESCAPE = "\\"

P = ParamSpec("P")
R = TypeVar("R")


def log_slow_query(
    operation_name: str,
    *,
    conflict_message: str | None = None,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Decorator to log slow repository operations and translate storage errors.

    Logs a warning for queries exceeding SLOW_QUERY_THRESHOLD_MS.
    Any SQLAlchemyError is logged and re-raised as DatabaseError; when
    ``conflict_message`` is given, unique violations become ConflictError.

    Usage:
        @log_slow_query("get_project_by_id")
        async def get_by_id(self, project_id: int) -> Project | None:
            ...
    """

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            start_time = time.perf_counter()
            try:
                result = await func(*args, **kwargs)
            except IntegrityError as e:
                if conflict_message is None:
                    _log_failure(operation_name, start_time, e)
                    raise DatabaseError(str(e.orig)) from e
                logger.info("db.query.conflict", db_operation=operation_name)
                raise ConflictError(conflict_message) from e
            except SQLAlchemyError as e:
                _log_failure(operation_name, start_time, e)
                raise DatabaseError(str(e)) from e

            duration_ms = (time.perf_counter() - start_time) * 1000
            if duration_ms > SLOW_QUERY_THRESHOLD_MS:
                logger.warning(
                    "db.query.slow",
                    db_operation=operation_name,
                    db_duration_ms=round(duration_ms, 2),
                )
            return result

        return wrapper

    return decorator


def _log_failure(operation_name: str, start_time: float, error: Exception) -> None:
    logger.error(
        "db.query.failed",
        db_operation=operation_name,
        db_duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
        db_error=str(error),
        db_error_type=type(error).__name__,
    )


def contains_pattern(query: str) -> str:
    """LIKE pattern matching ``query`` anywhere, with wildcards escaped.

    Pair with ``escape=LIKE_ESCAPE`` on the LIKE expression.
    """
    escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"
