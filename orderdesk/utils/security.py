# orderdesk/utils/security.py

import base64
import logging
import os
import uuid
from typing import Optional

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
from fastapi import UploadFile

from orderdesk.core.config import get_settings
from orderdesk.core.constants import ALLOWED_IMAGE_TYPES
from orderdesk.core.errors import UploadTooLarge, ValidationError

log = logging.getLogger(__name__)


def _get_encryption_key(master_key: Optional[str] = None) -> bytes:
    """Derive the Fernet key from the configured master key"""
    master_key = master_key or get_settings().encryption_master_key

    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=32,
        salt=b"orderdesk-salt-v1",
        iterations=100000,
    )
    return base64.urlsafe_b64encode(kdf.derive(master_key.encode()))


def encrypt_api_key(plain_key: str) -> str:
    """Encrypt an API key for storage in database"""
    if not plain_key:
        return ""

    fernet = Fernet(_get_encryption_key())
    return fernet.encrypt(plain_key.encode()).decode()


def decrypt_api_key(encrypted_key: str) -> str:
    """Decrypt an API key from database storage; empty string if it cannot be read"""
    if not encrypted_key:
        return ""

    try:
        fernet = Fernet(_get_encryption_key())
        return fernet.decrypt(encrypted_key.encode()).decode()
    except InvalidToken:
        log.warning("Stored API key could not be decrypted (master key changed?)")
        return ""


async def validate_and_read_image(file: Optional[UploadFile], max_bytes: Optional[int] = None) -> bytes:
    if file is None or not file.filename:
        raise ValidationError("No file uploaded")

    if file.content_type not in ALLOWED_IMAGE_TYPES:
        raise ValidationError(
            "File type not allowed. Only images are accepted.",
            details={"content_type": file.content_type, "allowed": ALLOWED_IMAGE_TYPES},
        )

    max_bytes = max_bytes or get_settings().max_upload_bytes
    contents = await file.read()

    if len(contents) > max_bytes:
        raise UploadTooLarge(f"File too large. Maximum {max_bytes // (1024 * 1024)}MB.")

    return contents


def generate_safe_filename(original_filename: str) -> str:
    stem, ext = os.path.splitext(original_filename or "")
    ext = ext.lower() or ".bin"
    return f"{uuid.uuid4()}{ext}"
