# routers/properties.py

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from core.config import settings
from core.errors import handle_supabase_error
from core.logging_config import logger
from core.permission_helpers import requires_capability, requires_edit
from core.session import SessionController
from dependencies.stores import get_document_store, get_file_store
from models.enums import Capability
from models.property import PropertyDetail, PropertyRead, PropertyUpdate
from services.document_store import DocumentStore
from services.file_store import FileStore
from services.property_service import (
    fetch_recent_properties,
    filter_properties,
    resolve_photo_urls,
)


router = APIRouter(
    prefix="/properties",
    tags=["Properties"],
)


# ============================================================
# LIST PROPERTIES
# ============================================================
@router.get(
    "",
    response_model=List[PropertyRead],
    summary="List Properties",
    description="""
    Newest listings first (up to 100).

    **Permissions:** Requires `canRead`.

    **Query Parameters:**
    - `search`: case-insensitive match on customer ID, property type or listing type
    - `status`: `Pending`, `Approved`, `Rejected` or `all`
    - `listing`: `Yes`, `No` or `all`
    """,
    dependencies=[Depends(requires_capability(Capability.can_read))],
)
def list_properties(
    search: Optional[str] = None,
    status: Optional[str] = Query("all"),
    listing: Optional[str] = Query("all"),
    store: DocumentStore = Depends(get_document_store),
):
    try:
        rows = fetch_recent_properties(store)
    except Exception as e:
        raise handle_supabase_error(e, "Property listing")

    return filter_properties(rows, search=search, status=status, listing=listing)


# ============================================================
# GET PROPERTY (with photos)
# ============================================================
@router.get(
    "/{property_id}",
    response_model=PropertyDetail,
    summary="Get Property",
    dependencies=[Depends(requires_capability(Capability.can_read))],
)
def get_property(
    property_id: str,
    store: DocumentStore = Depends(get_document_store),
    files: FileStore = Depends(get_file_store),
):
    try:
        row = store.get_document(settings.PROPERTIES_TABLE, property_id)
    except Exception as e:
        raise handle_supabase_error(e, "Property lookup")

    photo_urls, notice = resolve_photo_urls(files, row.get("photos") or [])

    return PropertyDetail(**row, photo_urls=photo_urls, photo_notice=notice)


# ============================================================
# UPDATE PROPERTY
# ============================================================
@router.patch(
    "/{property_id}",
    response_model=PropertyRead,
    summary="Update Property",
    description="""
    Partial update of a listing.

    **Permissions:** Requires `canEdit`. Changing `status` also requires `canApprove`.
    """,
)
def update_property(
    property_id: str,
    payload: PropertyUpdate,
    session: SessionController = Depends(requires_edit()),
    store: DocumentStore = Depends(get_document_store),
):
    updates = payload.model_dump(by_alias=True, exclude_unset=True, mode="json")
    if not updates:
        raise HTTPException(400, "No fields provided to update.")

    try:
        current = store.get_document(settings.PROPERTIES_TABLE, property_id)
    except Exception as e:
        raise handle_supabase_error(e, "Property lookup")

    if "status" in updates and updates["status"] != current.get("status"):
        if not session.has_permission(Capability.can_approve):
            raise HTTPException(403, "Insufficient permissions: 'canApprove' required to change status")

    try:
        store.update_document(settings.PROPERTIES_TABLE, property_id, updates)
        # Re-read so the response reflects what was actually stored
        row = store.get_document(settings.PROPERTIES_TABLE, property_id)
    except Exception as e:
        raise handle_supabase_error(e, "Property update")

    logger.info(f"Property {property_id} updated by {session.principal.id}: {sorted(updates)}")
    return row
