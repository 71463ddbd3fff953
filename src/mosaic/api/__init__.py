"""Mosaic Gallery — FastAPI REST API layer.

This package contains the FastAPI application, the Pydantic response
models, and the directory listing logic.

Modules
-------
main
    FastAPI application with all route handlers and the ``main()`` CLI
    entry point.
models
    Pydantic models for API responses.
image_lister
    Directory scanning, extension filtering and descriptor id assignment.
"""
