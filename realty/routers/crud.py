"""
Shared route builders for entities that only need plain CRUD.
Handlers look the repository up on the app's storage by attribute name.
"""

from fastapi import APIRouter, Depends, Path, status
from pydantic import BaseModel
from typing import Any, Dict, List, Optional, Type

from realty.schemas.error import get_error_responses, get_crud_error_responses
from realty.storage import Filter, Storage
from realty.utils.dependencies import get_storage, require_session_user
from realty.utils.exceptions import NotFoundError


def eq_filters(**values: Any) -> List[Filter]:
    """Equality filters for every query parameter that was supplied."""
    return [Filter(field, "eq", value) for field, value in values.items() if value is not None]


def partial_update_data(payload: BaseModel, response_schema: Type[BaseModel]) -> Dict[str, Any]:
    """
    Fields the client actually sent. An explicit null is kept only for optional fields.
    """
    nullable = {
        name for name, field in response_schema.model_fields.items()
        if not field.is_required() and field.default is None
    }
    return {
        key: value
        for key, value in payload.model_dump(exclude_unset=True).items()
        if value is not None or key in nullable
    }


def register_crud_routes(
    router: APIRouter,
    *,
    repository: str,
    resource: str,
    response_schema: Type[BaseModel],
    create_schema: Type[BaseModel],
    update_schema: Optional[Type[BaseModel]] = None,
    public_read: bool = True,
    public_create: bool = False,
) -> None:
    """
    Add GET /{id}, POST, PUT /{id} and DELETE /{id} to a router.

    Args:
        router: Router with the entity prefix
        repository: Storage attribute holding the entity repository
        resource: Human-readable name used in messages
        response_schema: Record schema returned to clients
        create_schema: Request body for POST
        update_schema: Request body for PUT; no PUT route when omitted
        public_read: Whether GET /{id} is open to anonymous visitors
        public_create: Whether POST is open to anonymous visitors
    """
    guard = [Depends(require_session_user)]

    async def get_item(
        item_id: str = Path(..., description=f"{resource} ID"),
        storage: Storage = Depends(get_storage)
    ):
        record = await getattr(storage, repository).get(item_id)
        if record is None:
            raise NotFoundError(resource, item_id)
        return record

    async def create_item(
        payload: create_schema,
        storage: Storage = Depends(get_storage)
    ):
        return await getattr(storage, repository).create(payload.model_dump())

    async def delete_item(
        item_id: str = Path(..., description=f"{resource} ID"),
        storage: Storage = Depends(get_storage)
    ) -> None:
        if not await getattr(storage, repository).delete(item_id):
            raise NotFoundError(resource, item_id)

    router.add_api_route(
        "/{item_id}",
        get_item,
        methods=["GET"],
        response_model=response_schema,
        summary=f"Get {resource.lower()}",
        dependencies=[] if public_read else guard,
        responses=get_error_responses(401, 404),
    )
    router.add_api_route(
        "",
        create_item,
        methods=["POST"],
        response_model=response_schema,
        status_code=status.HTTP_201_CREATED,
        summary=f"Create {resource.lower()}",
        dependencies=[] if public_create else guard,
        responses=get_crud_error_responses(),
    )

    if update_schema is not None:
        async def update_item(
            payload: update_schema,
            item_id: str = Path(..., description=f"{resource} ID"),
            storage: Storage = Depends(get_storage)
        ):
            record = await getattr(storage, repository).update(
                item_id, partial_update_data(payload, response_schema)
            )
            if record is None:
                raise NotFoundError(resource, item_id)
            return record

        router.add_api_route(
            "/{item_id}",
            update_item,
            methods=["PUT"],
            response_model=response_schema,
            summary=f"Update {resource.lower()}",
            dependencies=guard,
            responses=get_crud_error_responses(),
        )

    router.add_api_route(
        "/{item_id}",
        delete_item,
        methods=["DELETE"],
        status_code=status.HTTP_204_NO_CONTENT,
        response_model=None,
        summary=f"Delete {resource.lower()}",
        dependencies=guard,
        responses=get_error_responses(401, 404),
    )
