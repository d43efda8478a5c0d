"""
Root application entry point for the gridsheets API
===================================================

This module exposes the FastAPI application instance defined in
``gridsheets/main.py`` so that deployment tools like Uvicorn can import
``main:app`` directly from the repository root.

Usage
-----

.. code-block:: bash

    uvicorn main:app --host 0.0.0.0 --port 8000

Configuration is read from ``APP_*`` environment variables; see
:mod:`gridsheets.core.config`.
"""

from gridsheets.main import app  # noqa: F401 re-export for Uvicorn

__all__ = ["app"]
