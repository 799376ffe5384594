from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from core.session import SessionController
from dependencies.stores import get_document_store, get_session_store
from services.document_store import DocumentStore
from services.session_store import SessionStore


# Optional so that /auth/login and /auth/logout can run without a token
bearer_scheme = HTTPBearer(auto_error=False)


# ============================================================
# SESSION (one controller per request)
# ============================================================
def get_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    session_store: SessionStore = Depends(get_session_store),
    document_store: DocumentStore = Depends(get_document_store),
) -> SessionController:
    """
    Builds the request's SessionController and runs the initial
    session check. Never raises: a missing or bad token just
    leaves the controller anonymous.
    """
    controller = SessionController(session_store, document_store)
    token = credentials.credentials if credentials else None
    controller.init(token)
    return controller


# ============================================================
# AUTHENTICATED SESSION (401 otherwise)
# ============================================================
def require_session(session: SessionController = Depends(get_session)) -> SessionController:
    if not session.is_authenticated:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired authentication token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return session
