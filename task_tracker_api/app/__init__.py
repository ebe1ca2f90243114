"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules.  Requests flow from the versioned routers in
``api/v1/endpoints`` into the services (validation and ownership
checks), then into the repositories (parameterized SQL) and finally
into the SQLite store configured in ``core``.
"""

from .main import app  # noqa: F401
