"""
Logging Context Management Utilities

Provides helpers for adding and managing context in structured logs.
Context automatically appears in all log statements within the scope,
including logs emitted by strategy tasks spawned afterwards.
"""

import time
from contextlib import contextmanager
from typing import Optional

import structlog
from structlog.contextvars import bind_contextvars, unbind_contextvars


def bind_search_context(
    query: str,
    category: Optional[str] = None,
    limit: Optional[int] = None,
    **kwargs
):
    """
    Bind search request context to all logs.

    Args:
        query: Raw search text
        category: Requested category filter
        limit: Requested result limit
        **kwargs: Additional context key-value pairs

    Example:
        ```python
        bind_search_context(query="108 trout", category="all", limit=50)
        logger.info("searching")  # Includes search_query, search_category, search_limit
        ```
    """
    context = {"search_query": query}

    if category:
        context["search_category"] = category
    if limit is not None:
        context["search_limit"] = limit

    context.update(kwargs)
    bind_contextvars(**context)


@contextmanager
def log_context(**context_vars):
    """
    Context manager for temporary logging context.

    Context is added on enter and removed on exit.

    Example:
        ```python
        with log_context(operation="health_check"):
            logger.info("pinging store")
        ```
    """
    bind_contextvars(**context_vars)

    try:
        yield
    finally:
        unbind_contextvars(*context_vars.keys())


@contextmanager
def log_performance(operation_name: str, logger=None):
    """
    Context manager for logging operation performance.

    Logs operation start, end, and duration.

    Args:
        operation_name: Name of the operation being timed
        logger: Logger instance (defaults to structlog.get_logger())

    Example:
        ```python
        with log_performance("universal_search"):
            response = await orchestrator.search(...)
        ```
    """
    if logger is None:
        logger = structlog.get_logger()

    start_time = time.time()

    logger.info(f"{operation_name}_started", operation=operation_name)

    try:
        yield
    finally:
        duration_ms = int((time.time() - start_time) * 1000)
        logger.info(
            f"{operation_name}_completed",
            operation=operation_name,
            duration_ms=duration_ms
        )
