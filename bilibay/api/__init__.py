"""
HTTP layer: routers, dependencies, middleware and exception handlers.
"""
