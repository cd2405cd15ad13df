"""
Application package initializer.

This package contains the main entrypoint for the API and its
submodules: ``core`` (settings, logging, database, errors),
``schemas`` (pydantic payloads), ``services`` (validation, rating,
filters and the ship service), ``repositories`` (sqlite persistence)
and ``api`` (versioned routers).
"""

from .main import app  # noqa: F401
