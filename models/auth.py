from typing import Any, Dict, List, Optional

from pydantic import BaseModel, EmailStr, Field

from core.permissions import PermissionSet
from models.enums import Role


# -----------------------------------------------------
# PRINCIPAL (Supabase auth user, normalized)
# -----------------------------------------------------
class Principal(BaseModel):
    id: str
    email: str
    name: Optional[str] = None
    preferences: Dict[str, Any] = Field(default_factory=dict)   # user_metadata
    session_ids: List[str] = Field(default_factory=list)


# -----------------------------------------------------
# SESSION (returned by create_session)
# -----------------------------------------------------
class Session(BaseModel):
    id: str                   # Supabase access token (JWT)
    principal: Principal


# -----------------------------------------------------
# LOGIN REQUEST (using Supabase email/password)
# -----------------------------------------------------
class LoginRequest(BaseModel):
    email: EmailStr
    password: str


# -----------------------------------------------------
# LOGIN RESPONSE
# -----------------------------------------------------
class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    role: Role
    permissions: PermissionSet
    redirect_to: str


class LogoutResponse(BaseModel):
    success: bool = True
    redirect_to: str


# -----------------------------------------------------
# CURRENT SESSION (GET /auth/me)
# -----------------------------------------------------
class SessionRead(BaseModel):
    state: str
    principal: Principal
    role: Role
    permissions: PermissionSet
    is_super_admin: bool
    is_admin: bool
