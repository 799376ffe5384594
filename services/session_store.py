# services/session_store.py

"""
Session store backed by Supabase Auth (GoTrue).

Every call goes straight to the hosted service; nothing is cached here.
Supabase ``user_metadata`` plays the role of the principal's preferences.
"""

import secrets
from typing import Optional

from supabase import Client

from core.errors import AuthError, BackofficeError, SessionNotFound, extract_supabase_error
from core.logging_config import logger
from models.auth import Principal, Session


def principal_from_user(user, token: Optional[str] = None) -> Principal:
    """Normalize a GoTrue user object into a Principal."""
    metadata = getattr(user, "user_metadata", None) or {}
    return Principal(
        id=str(user.id),
        email=user.email or "",
        name=metadata.get("full_name") or metadata.get("name"),
        preferences=dict(metadata),
        session_ids=[token] if token else [],
    )


class SessionStore:
    def __init__(self, client: Client):
        self.client = client

    # ------------------------------------------------------------
    # Current session (token → principal)
    # ------------------------------------------------------------
    def get_current_session(self, token: Optional[str]) -> Principal:
        if not token:
            raise SessionNotFound("No session token supplied")

        try:
            resp = self.client.auth.get_user(token)
        except Exception as e:
            raise SessionNotFound(extract_supabase_error(e)) from e

        if not resp or not resp.user or not resp.user.email:
            raise SessionNotFound("Invalid or expired session")

        return principal_from_user(resp.user, token)

    # ------------------------------------------------------------
    # Login
    # ------------------------------------------------------------
    def create_session(self, email: str, password: str) -> Session:
        try:
            resp = self.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except Exception as e:
            raise AuthError(extract_supabase_error(e)) from e

        if not resp or not resp.session or not resp.session.access_token:
            raise AuthError("Invalid login credentials")

        token = resp.session.access_token
        return Session(id=token, principal=principal_from_user(resp.user, token))

    # ------------------------------------------------------------
    # Logout
    # ------------------------------------------------------------
    def delete_session(self, token: str) -> None:
        try:
            self.client.auth.admin.sign_out(token)
        except Exception as e:
            raise BackofficeError(extract_supabase_error(e)) from e

    # ------------------------------------------------------------
    # Admin provisioning
    # ------------------------------------------------------------
    def provision_principal(self, email: str, name: str, role: str) -> Principal:
        """
        Create an auth user with a throwaway random password.
        The password is never returned; the user sets their own
        through the email sent by ``send_password_setup``.
        """
        payload = {
            "email": email,
            "password": secrets.token_urlsafe(32),
            "email_confirm": True,
            "user_metadata": {"full_name": name, "role": role},
        }

        try:
            resp = self.client.auth.admin.create_user(payload)
        except Exception as e:
            raise BackofficeError(extract_supabase_error(e)) from e

        if not resp or not resp.user:
            raise BackofficeError("User creation returned no user")

        logger.info(f"Provisioned auth user {resp.user.id} ({role})")
        return principal_from_user(resp.user)

    def send_password_setup(self, email: str) -> None:
        try:
            self.client.auth.reset_password_for_email(email)
        except Exception as e:
            raise BackofficeError(extract_supabase_error(e)) from e
