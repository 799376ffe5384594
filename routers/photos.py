# routers/photos.py

from fastapi import APIRouter, Depends, HTTPException

from core.config import settings
from core.errors import FileStoreError
from core.logging_config import logger
from core.permission_helpers import requires_capability
from dependencies.stores import get_file_store
from models.enums import Capability
from services.file_store import FileStore


router = APIRouter(
    prefix="/photos",
    tags=["Photos"],
)


# -----------------------------------------------------
#  LIST PHOTO BUCKET
# -----------------------------------------------------
@router.get(
    "",
    summary="List files in the property photo bucket",
    dependencies=[Depends(requires_capability(Capability.can_read))],
)
def list_photos(files: FileStore = Depends(get_file_store)):
    try:
        items = files.list_files(settings.PHOTO_BUCKET)
    except FileStoreError as e:
        logger.error(e.message)
        raise HTTPException(status_code=500, detail="Photo listing failed")

    return {
        "bucket": settings.PHOTO_BUCKET,
        "total_files": len(items),
        "files": items,
    }
