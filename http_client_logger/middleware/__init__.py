from .logging_middleware import BaseLoggingMiddleware, CallNext, HttpLoggingMiddleware
from .scope_middleware import HttpLoggingScopeMiddleware

__all__ = [
    "BaseLoggingMiddleware",
    "CallNext",
    "HttpLoggingMiddleware",
    "HttpLoggingScopeMiddleware",
]
