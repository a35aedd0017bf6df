"""
Middleware modules for the Mindful Heaven server.

This package contains custom middleware for request/response logging,
error handling, and other cross-cutting concerns.
"""

from .request_tracing import RequestTracingMiddleware

__all__ = ["RequestTracingMiddleware"]
