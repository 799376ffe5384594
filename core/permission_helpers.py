from typing import Iterable, Mapping, Union

from fastapi import Depends, HTTPException

from core.permissions import PermissionSet, parse_capability
from core.session import SessionController
from dependencies.auth import require_session
from models.enums import Capability


CapabilityName = Union[Capability, str]


# -----------------------------------------------------
# Collect granted capabilities from any supported shape:
#   • PermissionSet
#   • {"canEdit": True, "edit": False, ...}
#   • ["canRead", "edit", Capability.can_approve]
# Unknown names are ignored.
# -----------------------------------------------------
def granted_capabilities(granted) -> set:
    if granted is None:
        return set()

    if isinstance(granted, PermissionSet):
        return granted.granted()

    result = set()

    if isinstance(granted, Mapping):
        for name, allowed in granted.items():
            cap = parse_capability(name)
            if cap is not None and allowed:
                result.add(cap)
        return result

    for name in granted:
        cap = parse_capability(name)
        if cap is not None:
            result.add(cap)
    return result


# -----------------------------------------------------
# Access evaluation
# -----------------------------------------------------
def can_access(granted, required: Iterable[CapabilityName], require_all: bool = False) -> bool:
    """
    Empty ``required`` means no restriction.
    ``require_all`` picks ALL vs ANY. Unknown required names never match.
    """
    required = list(required or [])
    if not required:
        return True

    have = granted_capabilities(granted)
    checks = [parse_capability(name) in have for name in required]

    return all(checks) if require_all else any(checks)


def describe(required: Iterable[CapabilityName], require_all: bool) -> str:
    names = [str(parse_capability(n) or n) for n in required]
    joiner = " and " if require_all else " or "
    return joiner.join(f"'{n}'" for n in names)


# -----------------------------------------------------
# FastAPI dependency wrappers
# -----------------------------------------------------
def requires_capabilities(*required: CapabilityName, require_all: bool = False):
    """
    Usage:
        @router.get("/", dependencies=[Depends(requires_capabilities("canRead"))])
    """

    def dependency(session: SessionController = Depends(require_session)):
        if not can_access(session.permissions, required, require_all):
            raise HTTPException(
                status_code=403,
                detail=f"Insufficient permissions: {describe(required, require_all)} required",
            )
        return session

    return dependency


def requires_capability(capability: CapabilityName):
    return requires_capabilities(capability)


def requires_edit():
    """Shortcut for the most common gate: canEdit."""
    return requires_capabilities(Capability.can_edit)


def requires_super_admin():
    """
    Checks role identity, not a capability flag: admin management
    has no flag of its own beyond the super admin role.
    """

    def dependency(session: SessionController = Depends(require_session)):
        if not session.is_super_admin:
            raise HTTPException(
                status_code=403,
                detail="Only super administrators can manage admin users.",
            )
        return session

    return dependency
