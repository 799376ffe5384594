# dependencies/stores.py

from fastapi import HTTPException

from core.logging_config import logger
from core.s3_client import get_s3
from core.supabase_client import get_supabase_client
from services.document_store import DocumentStore
from services.file_store import FileStore
from services.session_store import SessionStore


def _client():
    client = get_supabase_client()
    if not client:
        raise HTTPException(500, "Supabase client not configured")
    return client


def get_session_store() -> SessionStore:
    return SessionStore(_client())


def get_document_store() -> DocumentStore:
    return DocumentStore(_client())


def get_file_store() -> FileStore:
    try:
        return FileStore(get_s3())
    except RuntimeError as e:
        logger.error(f"Photo storage not configured: {e}")
        raise HTTPException(500, "Photo storage not configured")
