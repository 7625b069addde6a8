# orderdesk/auth/dependencies.py
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from orderdesk.auth.routes import current_active_user
from orderdesk.crud.tenant import get_tenant
from orderdesk.db import get_db
from orderdesk.models.tenant import Tenant


async def get_admin_tenant(user=Depends(current_active_user), db: AsyncSession = Depends(get_db)) -> Tenant:
    """The restaurant the signed-in admin manages."""
    return await get_tenant(db, user.tenant_id)
