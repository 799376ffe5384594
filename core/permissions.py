# core/permissions.py

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from models.enums import Capability, Role


# ============================================
# PERMISSION SET: one fixed record per role
# ============================================
class PermissionSet(BaseModel):
    """
    Seven independent capability flags.
    Serialized with the panel's camelCase names (canRead, canEdit, ...).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    can_read: bool = Field(False, alias="canRead")
    can_edit: bool = Field(False, alias="canEdit")
    can_delete: bool = Field(False, alias="canDelete")
    can_approve: bool = Field(False, alias="canApprove")
    can_list_users: bool = Field(False, alias="canListUsers")
    can_manage_admins: bool = Field(False, alias="canManageAdmins")
    can_view_analytics: bool = Field(False, alias="canViewAnalytics")

    def has(self, capability: Union[Capability, str]) -> bool:
        cap = parse_capability(capability)
        if cap is None:
            return False
        return bool(getattr(self, cap.name))

    def granted(self) -> set:
        return {cap for cap in Capability if getattr(self, cap.name)}


# ============================================
# CENTRALIZED ROLE → PERMISSIONS MAP
# ============================================
ROLE_PERMISSIONS = {

    # =====================================================
    # SUPER ADMIN: Full access to everything
    # =====================================================
    Role.super_admin: PermissionSet(
        can_read=True,
        can_edit=True,
        can_delete=True,
        can_approve=True,
        can_list_users=True,
        can_manage_admins=True,
        can_view_analytics=True,
    ),

    # =====================================================
    # ADMIN: read + edit listings, no approvals
    # =====================================================
    Role.admin: PermissionSet(
        can_read=True,
        can_edit=True,
    ),

    # =====================================================
    # USER: read only (fallback)
    # =====================================================
    Role.user: PermissionSet(
        can_read=True,
    ),
}


def coerce_role(value) -> Optional[Role]:
    """Return the matching Role, or None for anything that isn't one."""
    if isinstance(value, Role):
        return value
    try:
        return Role(value)
    except ValueError:
        return None


def permissions_for(role: Union[Role, str]) -> PermissionSet:
    """Static lookup. Anything that isn't a known role gets the user set."""
    resolved = coerce_role(role) or Role.user
    return ROLE_PERMISSIONS[resolved]


def _normalize(name: str) -> str:
    return name.replace("_", "").replace("-", "").lower()


# "canedit" / "edit" → Capability.can_edit
_CAPABILITY_NAMES = {}
for _cap in Capability:
    _CAPABILITY_NAMES[_normalize(_cap.value)] = _cap
    _CAPABILITY_NAMES[_normalize(_cap.value)[3:]] = _cap


def parse_capability(name: Union[Capability, str]) -> Optional[Capability]:
    """
    Accepts the enum, the wire name ("canEdit"), the attribute name
    ("can_edit") or the short form ("edit", "list-users").
    Returns None for unknown names.
    """
    if isinstance(name, Capability):
        return name
    if not isinstance(name, str):
        return None
    return _CAPABILITY_NAMES.get(_normalize(name.strip()))
