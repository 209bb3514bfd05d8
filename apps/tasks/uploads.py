"""Attachment upload checks: image data URLs only, bounded size and count."""

import re
from typing import Optional
from framework.config import settings
from framework.exceptions.handler import BusinessException

IMAGE_DATA_URL = re.compile(r"^data:image/(png|jpeg|jpg|webp|gif);base64,")


def decoded_size(data_base64: str) -> int:
    """Byte size of the payload behind a data URL: len * 3 / 4 minus base64 padding."""
    _, _, payload = data_base64.partition(",")
    payload = payload.strip()
    padding = len(payload) - len(payload.rstrip("="))
    return max((len(payload) * 3) // 4 - padding, 0)


def image_mime_type(data_base64: str) -> Optional[str]:
    match = IMAGE_DATA_URL.match(data_base64)
    if match is None:
        return None
    subtype = match.group(1)
    return "image/jpeg" if subtype == "jpg" else f"image/{subtype}"


def validate_image_upload(data_base64: str, existing_count: int) -> int:
    """Check an upload and return its decoded size in bytes.

    Raises BusinessException for a non-image payload, an oversized payload, or
    a task that already holds the maximum number of attachments.
    """
    if image_mime_type(data_base64) is None:
        raise BusinessException("Unsupported file type - images only", code=400)

    size = decoded_size(data_base64)
    if size > settings.MAX_ATTACHMENT_BYTES:
        limit_mb = settings.MAX_ATTACHMENT_BYTES // (1024 * 1024)
        raise BusinessException(f"File exceeds the {limit_mb}MB limit", code=400)

    if existing_count >= settings.MAX_ATTACHMENTS_PER_TASK:
        raise BusinessException(
            f"Attachment limit reached ({settings.MAX_ATTACHMENTS_PER_TASK})", code=400
        )
    return size
