"""
Contact form endpoints.
Visitors submit messages anonymously; reading and deleting them requires a session.
"""

from fastapi import APIRouter, Depends
from typing import List

from realty.routers.crud import register_crud_routes
from realty.schemas.content import ContactCreate, ContactResponse
from realty.storage import Storage
from realty.utils.dependencies import get_storage, require_session_user

router = APIRouter(prefix="/contacts", tags=["Contacts"])


@router.get(
    "",
    response_model=List[ContactResponse],
    summary="List contact messages",
    dependencies=[Depends(require_session_user)]
)
async def list_contacts(storage: Storage = Depends(get_storage)):
    """Get every contact message, newest first."""
    return await storage.contacts.list()


register_crud_routes(
    router,
    repository="contacts",
    resource="Contact",
    response_schema=ContactResponse,
    create_schema=ContactCreate,
    public_read=False,
    public_create=True,
)
