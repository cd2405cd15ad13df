"""
Top‑level package for the Space Ships API.

This file makes ``space_api`` a Python package so that modules within
``app`` can be imported using fully qualified names like
``space_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
