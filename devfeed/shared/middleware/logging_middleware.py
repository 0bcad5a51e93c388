# devfeed/shared/middleware/logging_middleware.py (async version)

"""
Middleware for HTTP request logging.

One line when a request arrives, one when its response leaves. Headers are
never logged, so bearer tokens stay out of the logs.
"""

import time
import logging
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from devfeed.adapters.configuration.config import settings

# Configure logger
logger = logging.getLogger(__name__)


class AsyncRequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status and duration of each request."""

    async def dispatch(self, request: Request, call_next):
        verbose = settings.ENVIRONMENT != "production"

        if verbose:
            query_params = dict(request.query_params)
            logger.info(
                f"Request: {request.method} {request.url.path} | "
                f"Query: {query_params if query_params else 'N/A'} | "
                f"Client: {request.client.host if request.client else 'N/A'}"
            )
        else:
            logger.info(f"Request: {request.method} {request.url.path}")

        start_time = time.time()
        response = await call_next(request)
        elapsed_ms = (time.time() - start_time) * 1000

        log = logger.warning if response.status_code >= 500 else logger.info
        log(
            f"Response: {response.status_code} for {request.method} {request.url.path} | "
            f"Time: {elapsed_ms:.1f}ms"
        )

        return response
