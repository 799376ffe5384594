from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class AdminRecord(BaseModel):
    """Row of the admins table, keyed by the admin's auth user id."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    user_id: Optional[str] = Field(None, alias="userId")
    email: Optional[str] = None
    # Shown as stored; only AdminCreate restricts the value
    role: Optional[str] = "admin"
    name: Optional[str] = None
    created_at: Optional[datetime] = None
    created_by: Optional[str] = Field(None, alias="createdBy")

    @field_validator("role", mode="before")
    def default_role(cls, v):
        # Missing role column means a plain admin
        return str(v) if v else "admin"

    @field_validator("created_at", mode="before")
    def normalize_created_at(cls, v):
        if isinstance(v, str) and v.endswith("Z"):
            return v.replace("Z", "+00:00")
        return v


class AdminCreate(BaseModel):
    """
    Payload used by a super admin to provision a new admin.

    No password is accepted or returned: the new account gets a random
    password and a password-setup email.
    """

    email: EmailStr
    name: str = Field(..., min_length=1)
    role: Literal["admin", "super_admin"] = "admin"
