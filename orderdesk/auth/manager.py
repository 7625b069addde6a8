import logging
import uuid
from typing import Optional

from fastapi import Request
from fastapi_users import BaseUserManager, UUIDIDMixin

from orderdesk.auth.config import auth_config
from orderdesk.models.user import User

log = logging.getLogger(__name__)


class UserManager(UUIDIDMixin, BaseUserManager[User, uuid.UUID]):
    reset_password_token_secret = auth_config.secret
    verification_token_secret = auth_config.secret

    async def on_after_register(self, user: User, request: Optional[Request] = None):
        log.info("admin user registered: %s (tenant %s)", user.email, user.tenant_id)

    async def on_after_login(self, user: User, request: Optional[Request] = None, response=None):
        log.info("admin login: %s (tenant %s)", user.email, user.tenant_id)
