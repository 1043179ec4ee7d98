"""Image attachment encoding.

Validates uploaded image bytes and encodes them as an inline base64 part.
"""

import base64
import logging

from gemini_chat.models import InlineImagePart

logger = logging.getLogger(__name__)

# Constants
MAX_IMAGE_SIZE = 20 * 1024 * 1024  # 20MB, the Gemini inline data limit


class ImageParseError(Exception):
    """Raised when an uploaded image cannot be attached."""

    pass


def _validate_image_bytes(file_content: bytes, mime_type: str | None) -> str:
    """Validate image content before encoding.

    Args:
        file_content: Raw bytes of the image.
        mime_type: Declared MIME type from the upload.

    Returns:
        The normalized MIME type.

    Raises:
        ImageParseError: If validation fails.
    """
    if not file_content:
        raise ImageParseError("Empty file provided")

    normalized = (mime_type or "").split(";")[0].strip().lower()
    if not normalized.startswith("image/"):
        raise ImageParseError(f"Unsupported file type: {mime_type or 'unknown'}")

    if len(file_content) > MAX_IMAGE_SIZE:
        size_mb = len(file_content) / (1024 * 1024)
        raise ImageParseError(f"Image size ({size_mb:.1f}MB) exceeds maximum allowed (20MB)")

    return normalized


def parse_image(file_content: bytes, mime_type: str | None) -> InlineImagePart:
    """Encode an uploaded image as an inline part.

    Args:
        file_content: Raw bytes of the image.
        mime_type: Declared MIME type, e.g. ``image/png``.

    Returns:
        InlineImagePart carrying the base64 data.

    Raises:
        ImageParseError: If the file is empty, too large, or not an image.
    """
    normalized = _validate_image_bytes(file_content, mime_type)
    data = base64.b64encode(file_content).decode("ascii")
    logger.debug(f"Encoded {len(file_content)} byte {normalized} attachment")
    return InlineImagePart(mime_type=normalized, data=data)
