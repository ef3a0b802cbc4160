"""Stylecraft - FastAPI REST API layer.

Modules
-------
main
    Application factory, route handlers, exception handlers, and the
    ``main()`` CLI entry point.
"""
