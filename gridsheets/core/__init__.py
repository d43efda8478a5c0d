"""
Core helpers for the gridsheets service.

Configuration, the error taxonomy, authentication primitives and the
active sheet selector live here, below the services and routes that
use them.
"""

__all__ = []
