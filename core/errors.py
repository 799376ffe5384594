# core/errors.py

from fastapi import HTTPException


# ============================================================
# Domain exceptions raised by the store adapters
# ============================================================
class BackofficeError(Exception):
    """Base class for errors raised by the hosted-store adapters."""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class AuthError(BackofficeError):
    """Credentials rejected by the session store."""


class SessionNotFound(BackofficeError):
    """No valid session for the supplied token."""


class DocumentNotFound(BackofficeError):
    """Requested document does not exist in the collection."""


class FileStoreError(BackofficeError):
    """File listing or URL generation failed."""


def extract_supabase_error(error: Exception) -> str:
    """
    Safely extract readable details from Supabase Python client errors.
    Handles:
      • PostgREST errors
      • GoTrue (Auth) errors
      • Generic Python exceptions
    """

    # Case 1: Supabase Auth / GoTrue errors (and our own BackofficeError)
    if getattr(error, "message", None):
        try:
            return str(error.message)
        except Exception:
            pass

    # Case 2: errors with args (common)
    if getattr(error, "args", None):
        try:
            return str(error.args[0])
        except Exception:
            pass

    # Case 3: Plain string fallback
    try:
        return str(error) or type(error).__name__
    except Exception:
        return "Unknown Supabase error"


def handle_supabase_error(error: Exception, operation: str = "Database operation", status_code: int = 500) -> HTTPException:
    """
    Handle store errors with consistent formatting.
    Returns HTTPException (doesn't raise) so caller can customize or re-raise.

    The client only ever sees a generic "<operation> failed" notice;
    details go to the log.
    """
    from core.logging_config import logger

    if isinstance(error, DocumentNotFound):
        return HTTPException(status_code=404, detail=f"{operation}: Resource not found")

    error_detail = extract_supabase_error(error)
    logger.error(f"{operation} failed: {error_detail}")

    error_lower = error_detail.lower()
    if "not found" in error_lower or "does not exist" in error_lower:
        return HTTPException(status_code=404, detail=f"{operation}: Resource not found")

    return HTTPException(status_code=status_code, detail=f"{operation} failed")
