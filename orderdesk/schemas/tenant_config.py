from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

from orderdesk.models.tenant import TenantStatus


class PublicConfigRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    business_name: str
    phone: Optional[str] = None
    whatsapp_number: Optional[str] = None
    logo: Optional[str] = None
    banner: Optional[str] = None
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    accent_color: Optional[str] = None
    text_color: Optional[str] = None
    bg_color: Optional[str] = None
    is_open: bool = True
    schedule: Optional[dict[str, Any]] = None


class TenantConfigRead(PublicConfigRead):
    id: int
    slug: str
    status: TenantStatus
    email: Optional[str] = None
    zip_code: Optional[str] = None
    street: Optional[str] = None
    number: Optional[str] = None
    district: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    ai_enabled: bool = False
    ai_key_configured: bool = False
    created_at: datetime
    updated_at: datetime


class ConfigUpdate(BaseModel):
    """
    Settings an admin may change. Anything else in the payload is dropped
    without complaint, and keys sent as null are left untouched.
    """

    model_config = ConfigDict(extra="ignore")

    business_name: Optional[str] = None
    phone: Optional[str] = None
    whatsapp_number: Optional[str] = None
    logo: Optional[str] = None
    banner: Optional[str] = None
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    accent_color: Optional[str] = None
    text_color: Optional[str] = None
    bg_color: Optional[str] = None
    zip_code: Optional[str] = None
    street: Optional[str] = None
    number: Optional[str] = None
    district: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    schedule: Optional[dict[str, Any]] = None
    is_open: Optional[bool] = None
    ai_api_key: Optional[str] = None
    ai_enabled: Optional[bool] = None


class UploadResult(BaseModel):
    url: str
    type: str
    message: str = "Image uploaded successfully"
