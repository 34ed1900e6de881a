from __future__ import annotations

import logging
from pathlib import Path

import boto3

from core.config import settings

logger = logging.getLogger(__name__)


def _s3_client():
    return boto3.client("s3", region_name=settings.s3_region)


def _put_s3(key: str, data: bytes, content_type: str) -> str:
    if not settings.s3_bucket:
        raise RuntimeError("S3 storage selected but S3_BUCKET is not set")
    _s3_client().put_object(
        Bucket=settings.s3_bucket,
        Key=key,
        Body=data,
        ContentType=content_type,
    )
    base = settings.s3_public_base_url or f"https://{settings.s3_bucket}.s3.amazonaws.com"
    return f"{base.rstrip('/')}/{key}"


def _put_local(key: str, data: bytes) -> str:
    path = Path(settings.media_dir) / key
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return f"{settings.media_url_prefix.rstrip('/')}/{key}"


def storage_put(key: str, data: bytes, content_type: str) -> dict:
    """Store bytes under key and return {"key", "url"}."""
    if settings.storage_backend == "s3":
        url = _put_s3(key, data, content_type)
    else:
        url = _put_local(key, data)
    logger.info("stored %s (%d bytes) via %s", key, len(data), settings.storage_backend)
    return {"key": key, "url": url}
