import logging
import os
import uuid

import aioboto3

from caterhub.core.config import settings
from caterhub.core.constants import ALLOWED_IMAGE_EXTS, MAX_IMAGE_BYTES

log = logging.getLogger(__name__)

_session = aioboto3.Session()


def spaces_configured() -> bool:
    return all([
        settings.do_spaces_key,
        settings.do_spaces_secret,
        settings.do_spaces_bucket,
        settings.do_spaces_endpoint,
        settings.do_spaces_cdn_base,
    ])


def public_url(key: str) -> str:
    key = key.lstrip("/")
    return f"{settings.do_spaces_cdn_base.rstrip('/')}/{key}"


async def put_public_object(*, key: str, body: bytes, content_type: str) -> str:
    """
    Uploads a public-read object to Spaces and returns the object key.
    """
    if not spaces_configured():
        raise RuntimeError("Spaces env vars not fully configured")

    key = key.lstrip("/")
    async with _session.client(
        "s3",
        region_name=settings.do_spaces_region,
        endpoint_url=settings.do_spaces_endpoint,
        aws_access_key_id=settings.do_spaces_key,
        aws_secret_access_key=settings.do_spaces_secret,
    ) as s3:
        await s3.put_object(
            Bucket=settings.do_spaces_bucket,
            Key=key,
            Body=body,
            ContentType=content_type or "application/octet-stream",
            ACL="public-read",
        )
    return key


def validate_image(filename: str, content_type: str, size: int) -> str:
    """Returns the lower-cased extension or raises ValueError."""
    if not (content_type or "").startswith("image/"):
        raise ValueError("Please select an image file")

    ext = os.path.splitext(filename or "")[1].lower()
    if ext not in ALLOWED_IMAGE_EXTS:
        raise ValueError("Invalid image type. Allowed: jpg, jpeg, png, webp")

    if size > MAX_IMAGE_BYTES:
        raise ValueError("Image must be 5 MB or smaller")
    if size == 0:
        raise ValueError("Image file is empty")
    return ext


async def upload_menu_item_photo(menu_item_id: str, filename: str, content_type: str, body: bytes) -> str:
    """Stores a menu item photo and returns its public URL."""
    ext = validate_image(filename, content_type, len(body))

    prefix = settings.do_spaces_prefix.strip("/")
    key = f"{prefix}/menu-items/{menu_item_id}/{uuid.uuid4()}{ext}"

    await put_public_object(key=key, body=body, content_type=content_type)
    log.info("uploaded menu item photo %s (%s bytes)", key, len(body))
    return public_url(key)
