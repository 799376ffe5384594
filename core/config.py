from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    # -------------------------------------------------
    # General
    # -------------------------------------------------
    PROJECT_NAME: str = "Realty Back Office API"
    ENV: str = "development"

    # -------------------------------------------------
    # Admin panel + frontend domains
    # -------------------------------------------------
    ADMIN_PANEL_DOMAIN: Optional[str] = Field(None, env="ADMIN_PANEL_DOMAIN")

    FRONTEND_DOMAINS: List[str] = [
        "http://localhost:3000",
    ]

    # -------------------------------------------------
    # CORS (auto-built below)
    # -------------------------------------------------
    BACKEND_CORS_ORIGINS: List[str] = []

    # -------------------------------------------------
    # Supabase (auth + property/admin tables)
    # -------------------------------------------------
    SUPABASE_URL: Optional[str] = Field(None, env="SUPABASE_URL")
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = Field(None, env="SUPABASE_SERVICE_ROLE_KEY")

    PROPERTIES_TABLE: str = "properties"
    ADMINS_TABLE: str = "admins"

    # -------------------------------------------------
    # Property photos (S3)
    # -------------------------------------------------
    PHOTO_BUCKET: str = "property_photos"
    AWS_ACCESS_KEY_ID: Optional[str] = Field(None, env="AWS_ACCESS_KEY_ID")
    AWS_SECRET_ACCESS_KEY: Optional[str] = Field(None, env="AWS_SECRET_ACCESS_KEY")
    AWS_REGION: str = "us-east-2"
    PHOTO_URL_EXPIRY_SECONDS: int = Field(3600, description="Lifetime of presigned photo URLs")

    # -------------------------------------------------
    # Listing views
    # -------------------------------------------------
    PROPERTY_LIST_LIMIT: int = 100
    RECENT_PROPERTIES_COUNT: int = 5

    # -------------------------------------------------
    # Navigation targets returned after login / logout
    # -------------------------------------------------
    LANDING_PATH: str = "/"
    SIGNIN_PATH: str = "/signin"

    class Config:
        case_sensitive = True


# Instantiate settings
settings = Settings()

# -------------------------------------------------
# Build CORS list dynamically after loading settings
# -------------------------------------------------
cors_origins = []

# 1) admin panel custom domain
if settings.ADMIN_PANEL_DOMAIN:
    domain = settings.ADMIN_PANEL_DOMAIN
    if not domain.startswith("http"):
        domain = f"https://{domain}"
    cors_origins.append(domain.rstrip("/"))

# 2) static frontend domains
cors_origins.extend([d.rstrip("/") for d in settings.FRONTEND_DOMAINS])

# 3) remove duplicates
settings.BACKEND_CORS_ORIGINS = sorted(list(set(cors_origins)))
