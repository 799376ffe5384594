# core/session.py

"""
Session lifecycle for one caller.

    unknown ──init()──> resolving ──> authenticated | anonymous
    login()  : anonymous ──> resolving ──> authenticated  (AuthError propagates)
    logout() : any ──> anonymous  (local state cleared even if the remote call fails)

One controller is built per request by ``dependencies.auth.get_session``.
There is no error state: every failure degrades to ``anonymous``.
"""

from typing import NamedTuple, Optional, Union

from core.config import settings
from core.logging_config import logger
from core.permissions import PermissionSet, parse_capability, permissions_for
from core.role_resolver import resolve_role
from models.auth import Principal
from models.enums import BaseStrEnum, Capability, Role


class SessionState(BaseStrEnum):
    unknown = "unknown"
    resolving = "resolving"
    authenticated = "authenticated"
    anonymous = "anonymous"


class LoginResult(NamedTuple):
    token: str
    role: Role
    permissions: PermissionSet
    redirect_to: str


class SessionController:
    def __init__(self, session_store, document_store):
        self.session_store = session_store
        self.document_store = document_store
        self._reset(SessionState.unknown)

    # ------------------------------------------------------------
    # Read-only view
    # ------------------------------------------------------------
    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def principal(self) -> Optional[Principal]:
        return self._principal

    @property
    def role(self) -> Optional[Role]:
        return self._role

    @property
    def permissions(self) -> Optional[PermissionSet]:
        return self._permissions

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def is_authenticated(self) -> bool:
        return self._state == SessionState.authenticated

    @property
    def is_super_admin(self) -> bool:
        return self.is_authenticated and self._role == Role.super_admin

    @property
    def is_admin(self) -> bool:
        return self.is_authenticated and self._role in (Role.admin, Role.super_admin)

    # ------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------
    def init(self, token: Optional[str]) -> SessionState:
        """Look up an existing session for ``token``."""
        self._state = SessionState.resolving
        try:
            principal = self.session_store.get_current_session(token)
            self._authenticate(principal, token)
        except Exception as e:
            logger.debug(f"No active session: {type(e).__name__}")
            self._reset(SessionState.anonymous)
        return self._state

    def login(self, email: str, password: str) -> LoginResult:
        """
        Create a new session. On failure the controller stays anonymous
        and the store's AuthError reaches the caller untouched.
        """
        self._state = SessionState.resolving
        try:
            session = self.session_store.create_session(email, password)
        except Exception:
            self._reset(SessionState.anonymous)
            raise

        try:
            principal = self.session_store.get_current_session(session.id)
        except Exception as e:
            logger.warning(f"Session lookup after login failed, using login payload: {type(e).__name__}")
            principal = session.principal

        self._authenticate(principal, session.id)
        logger.info(f"Login: {principal.email} as {self._role}")

        return LoginResult(
            token=session.id,
            role=self._role,
            permissions=self._permissions,
            redirect_to=settings.LANDING_PATH,
        )

    def logout(self) -> str:
        """Invalidate the remote session and clear local state. Returns the sign-in path."""
        token = self._token
        if token:
            try:
                self.session_store.delete_session(token)
            except Exception as e:
                logger.warning(f"Remote session invalidation failed, clearing locally: {e}")

        self.teardown()
        return settings.SIGNIN_PATH

    def teardown(self) -> None:
        self._reset(SessionState.anonymous)

    # ------------------------------------------------------------
    # Checks
    # ------------------------------------------------------------
    def has_permission(self, capability: Union[Capability, str]) -> bool:
        if self._state != SessionState.authenticated or self._permissions is None:
            return False
        cap = parse_capability(capability)
        if cap is None:
            return False
        return self._permissions.has(cap)

    # ------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------
    def _fetch_admin_record(self, principal_id: str) -> dict:
        return self.document_store.get_document(settings.ADMINS_TABLE, principal_id)

    def _authenticate(self, principal: Principal, token: Optional[str]) -> None:
        role = resolve_role(principal, self._fetch_admin_record)
        self._principal = principal
        self._role = role
        self._permissions = permissions_for(role)
        self._token = token
        self._state = SessionState.authenticated

    def _reset(self, state: SessionState) -> None:
        self._principal = None
        self._role = None
        self._permissions = None
        self._token = None
        self._state = state
