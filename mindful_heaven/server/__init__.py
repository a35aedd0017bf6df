"""
Mindful Heaven Server Package.

This package contains the web server implementation for Mindful Heaven.
It includes the API definition, core service logic, and configuration.

Subpackages:
    api: FastAPI route definitions and endpoint logic.
    core: Settings and constants.
    services: Business logic and service layer.
    middleware: Request tracing.
    exception_handlers: Error rendering.
"""
