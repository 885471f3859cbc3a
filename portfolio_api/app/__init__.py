"""
Application package initializer.

This package contains the main entrypoint for the API and its
submodules.  Authentication lives in ``api/endpoints/auth.py``; the
four portfolio resources (members, countries, projects, services) are
served by a single generic CRUD router built once per resource from
the table in ``resources.py``.
"""

from .main import app  # noqa: F401
