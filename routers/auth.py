from fastapi import APIRouter, HTTPException, Depends

from core.errors import AuthError, extract_supabase_error
from core.logging_config import logger
from core.session import SessionController
from dependencies.auth import get_session, require_session
from models.auth import LoginRequest, LoginResponse, LogoutResponse, SessionRead


router = APIRouter(
    prefix="/auth",
    tags=["Auth"],
)


# ============================================================
# LOGIN (SUPABASE AUTH)
# ============================================================
@router.post("/login", response_model=LoginResponse, summary="Authenticate staff member")
def login(payload: LoginRequest, session: SessionController = Depends(get_session)):
    """
    Creates a session and resolves the caller's role and permissions.
    The store's error message is returned as-is so the sign-in form
    can show it. Failed attempts are not retried.
    """
    email = payload.email.strip().lower()

    try:
        result = session.login(email, payload.password)
    except AuthError as e:
        logger.warning(f"Login attempt failed for {email}: {e.message}")
        raise HTTPException(status_code=401, detail=e.message or "Invalid email or password")
    except Exception as e:
        logger.error(f"Login error for {email}: {type(e).__name__}")
        raise HTTPException(status_code=401, detail=extract_supabase_error(e))

    return LoginResponse(
        access_token=result.token,
        role=result.role,
        permissions=result.permissions,
        redirect_to=result.redirect_to,
    )


# ============================================================
# LOGOUT
# ============================================================
@router.post("/logout", response_model=LogoutResponse, summary="End the current session")
def logout(session: SessionController = Depends(get_session)):
    """
    Always succeeds: local state is cleared even when Supabase
    could not invalidate the token.
    """
    redirect_to = session.logout()
    return LogoutResponse(redirect_to=redirect_to)


# ============================================================
# CURRENT SESSION
# ============================================================
@router.get("/me", response_model=SessionRead, summary="Current principal, role and permissions")
def read_me(session: SessionController = Depends(require_session)):
    return SessionRead(
        state=str(session.state),
        principal=session.principal,
        role=session.role,
        permissions=session.permissions,
        is_super_admin=session.is_super_admin,
        is_admin=session.is_admin,
    )
