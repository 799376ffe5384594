# core/role_resolver.py

from typing import Callable, Optional

from core.logging_config import logger
from core.permissions import coerce_role
from models.auth import Principal
from models.enums import Role


# Returns the admin record for a principal id. May raise on not-found
# or transport errors; the resolver treats every failure the same way.
AdminRecordLookup = Callable[[str], Optional[dict]]


def resolve_role(principal: Principal, fetch_admin_record: AdminRecordLookup) -> Role:
    """
    Classify a principal. Never raises.

    1. ``preferences["role"]`` when it is one of the three roles
    2. the ``role`` column of the principal's admin record
       (``admin`` when the column is empty, ``user`` when it holds an
       unrecognized value)
    3. ``user``
    """
    try:
        preferences = principal.preferences or {}
        from_prefs = coerce_role(preferences.get("role"))
        if from_prefs is not None:
            return from_prefs
    except Exception as e:
        logger.warning(f"Could not read role preference for {getattr(principal, 'id', '?')}: {e}")

    try:
        record = fetch_admin_record(principal.id)
    except Exception as e:
        # not-found, network and permission errors all land here
        logger.info(f"No admin record for {getattr(principal, 'id', '?')}: {type(e).__name__}")
        return Role.user

    if not record:
        return Role.user

    try:
        raw = record.get("role")
    except Exception:
        return Role.user

    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return Role.admin

    role = coerce_role(raw)
    if role is None:
        logger.warning(f"Admin record for {principal.id} has unknown role {raw!r}")
        return Role.user
    return role
