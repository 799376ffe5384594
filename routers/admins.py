# routers/admins.py

from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from core.config import settings
from core.errors import DocumentNotFound, extract_supabase_error, handle_supabase_error
from core.logging_config import logger
from core.permission_helpers import requires_super_admin
from core.session import SessionController
from dependencies.stores import get_document_store, get_session_store
from models.admin import AdminCreate, AdminRecord
from services.document_store import DocumentStore, order_desc
from services.session_store import SessionStore


router = APIRouter(
    prefix="/admins",
    tags=["Admin Management"],
)


# -----------------------------------------------------
# 1️⃣ LIST ADMINS
# -----------------------------------------------------
@router.get(
    "",
    response_model=List[AdminRecord],
    summary="Super admin: List admin accounts",
    dependencies=[Depends(requires_super_admin())],
)
def list_admins(store: DocumentStore = Depends(get_document_store)):
    try:
        return store.list_documents(settings.ADMINS_TABLE, [order_desc("created_at")])
    except Exception as e:
        raise handle_supabase_error(e, "Admin listing")


# -----------------------------------------------------
# 2️⃣ PROVISION ADMIN
# -----------------------------------------------------
@router.post(
    "",
    response_model=AdminRecord,
    status_code=201,
    summary="Super admin: Create admin account",
)
def create_admin(
    payload: AdminCreate,
    session: SessionController = Depends(requires_super_admin()),
    store: DocumentStore = Depends(get_document_store),
    sessions: SessionStore = Depends(get_session_store),
):
    """
    Creates the auth user, writes its admin record and sends a
    password-setup email. No password is ever returned.
    """
    email = str(payload.email).strip().lower()

    try:
        principal = sessions.provision_principal(email, payload.name, payload.role)
    except Exception as e:
        logger.error(f"Admin provisioning failed for {email}: {extract_supabase_error(e)}")
        raise HTTPException(500, "Admin account creation failed")

    record = {
        "userId": principal.id,
        "email": email,
        "role": payload.role,
        "name": payload.name,
        "created_at": datetime.now(timezone.utc).isoformat(),
        "createdBy": session.principal.id,
    }

    try:
        row = store.create_document(settings.ADMINS_TABLE, principal.id, record)
    except Exception as e:
        raise handle_supabase_error(e, "Admin record creation")

    try:
        sessions.send_password_setup(email)
    except Exception as e:
        # Account exists; the super admin can trigger a reset later
        logger.warning(f"Password setup email to {email} failed: {extract_supabase_error(e)}")

    logger.info(f"Admin {principal.id} ({payload.role}) created by {session.principal.id}")
    return row


# -----------------------------------------------------
# 3️⃣ REMOVE ADMIN
# -----------------------------------------------------
@router.delete(
    "/{admin_id}",
    summary="Super admin: Remove admin record",
)
def remove_admin(
    admin_id: str,
    session: SessionController = Depends(requires_super_admin()),
    store: DocumentStore = Depends(get_document_store),
):
    """Super admin records are never removable."""
    try:
        row = store.get_document(settings.ADMINS_TABLE, admin_id)
    except DocumentNotFound:
        raise HTTPException(404, "Admin not found")
    except Exception as e:
        raise handle_supabase_error(e, "Admin lookup")

    if (row.get("role") or "admin") == "super_admin":
        raise HTTPException(403, "Super admin accounts cannot be removed.")

    try:
        store.delete_document(settings.ADMINS_TABLE, admin_id)
    except Exception as e:
        raise handle_supabase_error(e, "Admin removal")

    logger.info(f"Admin {admin_id} removed by {session.principal.id}")
    return {"success": True, "data": {"admin_id": admin_id}}
