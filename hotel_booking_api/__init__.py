"""
Top‑level package for the Hotel Booking API.

The HTTP service lives in ``app``.  ``client`` wraps the HTTP surface
for Python callers and ``console`` is the terminal owner console
built on top of it.
"""

__all__ = []
