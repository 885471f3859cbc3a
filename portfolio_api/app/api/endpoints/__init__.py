"""
Endpoint subpackage.

``auth`` defines login, logout and the current-user route; ``crud``
defines the router factory shared by every resource.  Both are
aggregated in ``api/router.py``.
"""
