"""
Application package initializer.

This package contains the entrypoint for the API and its submodules:
``core`` (configuration, logging, database, authentication),
``schemas`` (request and response models), ``services`` (business
logic, persistence and the media relay) and ``api`` (versioned HTTP
routes).
"""

from .main import app  # noqa: F401
