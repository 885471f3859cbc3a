"""
CRUD endpoints shared by every portfolio resource.

``build_crud_router`` returns an ``APIRouter`` exposing list, create,
read, update and delete for one ``Resource``.  All routes require a
valid bearer token.  Responses use the envelope
``{"status": bool, "data"?, "message"?, "errors"?}``; errors are
raised as ``NotFound``/``ValidationFailed`` and rendered by the
handlers in ``core.errors``.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Path, status

from portfolio_api.app.core.security import get_current_user
from portfolio_api.app.services.crud_service import CRUDService, Resource

# Ids are assigned from 1 and SQLite cannot store integers above this;
# path values outside the range are answered with 404.
MAX_ITEM_ID = 2**63 - 1


def build_crud_router(resource: Resource) -> APIRouter:
    """Create the router serving ``resource``.

    The router has no prefix of its own; ``api.router`` mounts it under
    ``/crud/<name>`` and under each alias.
    """
    service = CRUDService(resource)
    label = resource.label
    router = APIRouter(dependencies=[Depends(get_current_user)])

    @router.get("")
    async def list_items() -> Dict[str, Any]:
        """Return every record, ordered by id."""
        return {"status": True, "data": await service.list_items()}

    @router.post("", status_code=status.HTTP_201_CREATED)
    async def create_item(payload: Optional[Dict[str, Any]] = Body(None)) -> Dict[str, Any]:
        """Validate the body and create a record."""
        item = await service.create(payload)
        return {"status": True, "message": f"{label} created successfully", "data": item}

    @router.get("/{item_id}")
    async def get_item(item_id: int = Path(..., ge=1, le=MAX_ITEM_ID)) -> Dict[str, Any]:
        """Return one record, or 404."""
        return {"status": True, "data": await service.get(item_id)}

    @router.put("/{item_id}")
    async def update_item(
        item_id: int = Path(..., ge=1, le=MAX_ITEM_ID),
        payload: Optional[Dict[str, Any]] = Body(None),
    ) -> Dict[str, Any]:
        """Replace every field of a record.

        The body is validated exactly as on creation; omitted optional
        fields are cleared.
        """
        item = await service.update(item_id, payload)
        return {"status": True, "message": f"{label} updated successfully", "data": item}

    @router.delete("/{item_id}")
    async def delete_item(item_id: int = Path(..., ge=1, le=MAX_ITEM_ID)) -> Dict[str, Any]:
        """Delete a record, or 404."""
        await service.delete(item_id)
        return {"status": True, "message": f"{label} deleted successfully"}

    return router
