"""
Top‑level package for the Portfolio API.

The package makes ``portfolio_api`` importable with fully qualified
names such as ``portfolio_api.app.main``.  The HTTP client for the API
lives in :mod:`portfolio_api.client`; the server itself lives in the
``app`` subpackage.
"""

__all__ = []
