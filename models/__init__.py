# -------------------------
# Enums
# -------------------------
# Request/response models live in models.auth, models.property and
# models.admin; import them from there (models.auth depends on core).
from .enums import (
    Role,
    Capability,
    PropertyStatus,
    ListingFlag,
    PropertyType,
    ListingType,
    Facing,
)

__all__ = [
    "Role",
    "Capability",
    "PropertyStatus",
    "ListingFlag",
    "PropertyType",
    "ListingType",
    "Facing",
]
