import asyncio
import base64
import mimetypes
from typing import Optional, Tuple

from models.editor import UploadedImage
from models.image_edit import EncodedImage

READ_ERROR_MESSAGE = "Could not read the file data."
DEFAULT_MIME_TYPE = "application/octet-stream"


class ImageDecodeError(Exception):
    """Raised when an uploaded file yields no usable base64 payload."""

    def __init__(self, message: str = READ_ERROR_MESSAGE):
        super().__init__(message)
        self.message = message


def guess_mime_type(filename: Optional[str], content_type: Optional[str]) -> str:
    """Pick the reported content type, falling back to the filename extension"""
    if content_type:
        return content_type
    if filename:
        guessed, _ = mimetypes.guess_type(filename)
        if guessed:
            return guessed
    return DEFAULT_MIME_TYPE


def to_data_url(mime_type: str, data: str) -> str:
    return f"data:{mime_type};base64,{data}"


def bytes_to_data_url(data: bytes, mime_type: str) -> str:
    return to_data_url(mime_type, base64.b64encode(data).decode("ascii"))


def parse_data_url(data_url: str) -> Tuple[str, str]:
    """
    Split a data URL into (mime_type, base64_data).

    Args:
        data_url: A string like "data:image/png;base64,iVBORw0KGg..."

    Returns:
        Tuple of the MIME type and the base64 payload with the prefix stripped

    Raises:
        ImageDecodeError: If the string is not a base64 data URL or has no payload
    """
    if not data_url.startswith("data:") or "," not in data_url:
        raise ImageDecodeError("Invalid data URL format - must be a data:<mime>;base64 URL")

    header, base64_data = data_url.split(",", 1)
    if ";base64" not in header:
        raise ImageDecodeError("Invalid data URL format - payload must be base64 encoded")

    mime_type = header[len("data:"):].split(";")[0] or DEFAULT_MIME_TYPE
    if not base64_data:
        raise ImageDecodeError()

    return mime_type, base64_data


async def encode_image(image: UploadedImage) -> EncodedImage:
    """Read the whole upload and return its MIME type and base64 payload"""
    data_url = await asyncio.to_thread(bytes_to_data_url, image.data, image.content_type)
    data = data_url.split(",", 1)[1]
    if not data:
        raise ImageDecodeError()

    return EncodedImage(data=data, mime_type=image.content_type)
