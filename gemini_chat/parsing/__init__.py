"""Attachment parsing.

Turns uploaded files into conversation parts. Only images are supported;
they are validated and base64-encoded for inline transmission.
"""

from gemini_chat.parsing.image_parser import MAX_IMAGE_SIZE, ImageParseError, parse_image

__all__ = ["MAX_IMAGE_SIZE", "ImageParseError", "parse_image"]
