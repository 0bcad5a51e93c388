# devfeed/shared/middleware/__init__.py (async version)

from devfeed.shared.middleware.exception_middleware import (
    AsyncExceptionMiddleware,
    register_exception_handlers,
)
from devfeed.shared.middleware.logging_middleware import AsyncRequestLoggingMiddleware

# Export all for easy imports
__all__ = [
    "AsyncExceptionMiddleware",
    "AsyncRequestLoggingMiddleware",
    "register_exception_handlers",
]
