from enum import Enum


class BaseStrEnum(str, Enum):
    """
    Base enum that serializes cleanly to a string
    and provides a .list() method for UI dropdowns.
    """

    def __str__(self):
        return str(self.value)

    @classmethod
    def list(cls):
        return [item.value for item in cls]


# -----------------------------------------------------
# ROLE
# -----------------------------------------------------
class Role(BaseStrEnum):
    """Back-office roles, highest privilege first."""

    super_admin = "super_admin"
    admin = "admin"
    user = "user"


# -----------------------------------------------------
# CAPABILITY
# -----------------------------------------------------
class Capability(BaseStrEnum):
    """
    The seven permission flags. Values are the wire names the
    admin panel uses (``hasPermission("canEdit")``).
    """

    can_read = "canRead"
    can_edit = "canEdit"
    can_delete = "canDelete"
    can_approve = "canApprove"
    can_list_users = "canListUsers"
    can_manage_admins = "canManageAdmins"
    can_view_analytics = "canViewAnalytics"


# -----------------------------------------------------
# PROPERTY STATUS
# -----------------------------------------------------
class PropertyStatus(BaseStrEnum):
    """Approval workflow state of a listing."""

    pending = "Pending"
    approved = "Approved"
    rejected = "Rejected"


# -----------------------------------------------------
# LISTED FLAG
# -----------------------------------------------------
class ListingFlag(BaseStrEnum):
    yes = "Yes"
    no = "No"


# -----------------------------------------------------
# PROPERTY TYPE
# -----------------------------------------------------
class PropertyType(BaseStrEnum):
    apartment = "Apartment"
    villa = "Villa"
    house = "House"
    commercial = "Commercial"


# -----------------------------------------------------
# LISTING TYPE
# -----------------------------------------------------
class ListingType(BaseStrEnum):
    rent = "Rent"
    sale = "Sale"
    lease = "Lease"


# -----------------------------------------------------
# FACING
# -----------------------------------------------------
class Facing(BaseStrEnum):
    north = "North"
    south = "South"
    east = "East"
    west = "West"
