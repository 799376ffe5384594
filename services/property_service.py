# services/property_service.py

from typing import List, Optional, Tuple

from core.config import settings
from core.logging_config import logger
from models.property import PhotoLink, PropertyStats
from services.document_store import DocumentStore, limit, order_desc
from services.file_store import FileStore


SEARCH_FIELDS = ("custId", "propertyType", "listingType")
ALL = "all"


def fetch_recent_properties(store: DocumentStore) -> List[dict]:
    """Newest listings first, capped at PROPERTY_LIST_LIMIT."""
    return store.list_documents(
        settings.PROPERTIES_TABLE,
        [order_desc("created_at"), limit(settings.PROPERTY_LIST_LIMIT)],
    )


def filter_properties(
    properties: List[dict],
    search: Optional[str] = None,
    status: Optional[str] = None,
    listing: Optional[str] = None,
) -> List[dict]:
    """
    Same rules as the listings table in the panel:
    - search: case-insensitive substring over custId / propertyType / listingType
    - status / listing: exact match, "all" or empty means no filter
    """
    term = (search or "").strip().lower()
    results = []

    for prop in properties:
        if term and not any(term in str(prop.get(f) or "").lower() for f in SEARCH_FIELDS):
            continue
        if status and status != ALL and prop.get("status") != status:
            continue
        if listing and listing != ALL and prop.get("listing") != listing:
            continue
        results.append(prop)

    return results


def compute_stats(properties: List[dict]) -> PropertyStats:
    return PropertyStats(
        total=len(properties),
        approved=sum(1 for p in properties if p.get("status") == "Approved"),
        pending=sum(1 for p in properties if p.get("status") == "Pending"),
        listed=sum(1 for p in properties if p.get("listing") == "Yes"),
    )


def resolve_photo_urls(files: FileStore, photos: List[str]) -> Tuple[List[PhotoLink], Optional[str]]:
    """
    Turn stored photo ids into viewable URLs.

    Absolute URLs pass through. Blank entries are skipped. A photo whose
    URL cannot be produced is left out and counted in the returned notice.
    """
    links = []
    failed = 0

    for photo in photos or []:
        if not isinstance(photo, str) or not photo.strip():
            continue

        photo = photo.strip()
        if photo.startswith("http://") or photo.startswith("https://"):
            links.append(PhotoLink(file_id=photo, url=photo))
            continue

        try:
            url = files.get_file_view_url(settings.PHOTO_BUCKET, photo)
        except Exception as e:
            logger.warning(f"Photo {photo} could not be resolved: {e}")
            failed += 1
            continue

        if not url:
            failed += 1
            continue

        links.append(PhotoLink(file_id=photo, url=url))

    notice = None
    if failed:
        notice = f"{failed} photo(s) found but unable to load preview"

    return links, notice
