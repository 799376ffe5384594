# routers/dashboard.py

from fastapi import APIRouter, Depends

from core.config import settings
from core.errors import handle_supabase_error
from core.permission_helpers import requires_capability
from dependencies.stores import get_document_store
from models.enums import Capability
from models.property import DashboardRead
from services.document_store import DocumentStore
from services.property_service import compute_stats, fetch_recent_properties


router = APIRouter(
    prefix="/dashboard",
    tags=["Dashboard"],
)


@router.get(
    "/stats",
    response_model=DashboardRead,
    summary="Listing counts and most recent properties",
    dependencies=[Depends(requires_capability(Capability.can_read))],
)
def dashboard_stats(store: DocumentStore = Depends(get_document_store)):
    """Counts cover the newest 100 listings, the same window as the listings page."""
    try:
        rows = fetch_recent_properties(store)
    except Exception as e:
        raise handle_supabase_error(e, "Dashboard load")

    return DashboardRead(
        stats=compute_stats(rows),
        recent=rows[: settings.RECENT_PROPERTIES_COUNT],
    )
