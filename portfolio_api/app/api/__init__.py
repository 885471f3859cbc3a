"""
API package containing the HTTP routes.

``router.py`` exposes a top‑level ``router`` which includes the
authentication endpoints and one CRUD router per resource.
"""
