import logging

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from orderdesk.auth.dependencies import get_admin_tenant
from orderdesk.core.constants import IMAGE_FIELDS
from orderdesk.core.errors import ValidationError
from orderdesk.crud import tenant as tenant_crud
from orderdesk.db import get_db
from orderdesk.models.tenant import Tenant
from orderdesk.schemas.tenant_config import ConfigUpdate, TenantConfigRead, UploadResult
from orderdesk.utils.security import generate_safe_filename, validate_and_read_image
from orderdesk.utils.storage import ImageStorage, get_storage

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/config", tags=["config"])


@router.get("", response_model=TenantConfigRead)
async def get_config(tenant: Tenant = Depends(get_admin_tenant)):
    return tenant


@router.put("", response_model=TenantConfigRead)
async def update_config(
    updates: ConfigUpdate,
    tenant: Tenant = Depends(get_admin_tenant),
    db: AsyncSession = Depends(get_db),
):
    return await tenant_crud.update_config(db, tenant, updates)


@router.post("/upload", response_model=UploadResult)
async def upload_image(
    file: UploadFile = File(None),
    image_type: str = Form(None, alias="type"),
    tenant: Tenant = Depends(get_admin_tenant),
    db: AsyncSession = Depends(get_db),
    storage: ImageStorage = Depends(get_storage),
):
    """Store a logo or banner and point the tenant at it."""
    if image_type not in IMAGE_FIELDS:
        raise ValidationError('Invalid type. Use "logo" or "banner"')

    body = await validate_and_read_image(file)

    previous = getattr(tenant, image_type)
    url = await storage.save(generate_safe_filename(file.filename), body, file.content_type)
    await tenant_crud.set_image(db, tenant, image_type, url)

    if previous and previous != url:
        await storage.delete(previous)

    log.info("tenant %s %s replaced: %s", tenant.id, image_type, url)
    return UploadResult(url=url, type=image_type)
