"""
Top‑level router.

Authentication routes live under ``/auth``, the current-user route
under ``/user`` and each resource under ``/crud/<name>``.  Resources
with aliases are mounted once per alias; every prefix exposes the same
endpoints on the same table.
"""

from fastapi import APIRouter

from portfolio_api.app.resources import RESOURCES
from .endpoints import auth
from .endpoints.crud import build_crud_router

router = APIRouter()

router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(auth.user_router, prefix="/user", tags=["auth"])

for resource in RESOURCES:
    crud_router = build_crud_router(resource)
    for name in (resource.name,) + resource.aliases:
        router.include_router(crud_router, prefix=f"/crud/{name}", tags=[resource.name])
