"""
Binary-to-payload encoder tests
"""
import base64
import pytest

from models.editor import UploadedImage
from services.image_encoder import (
    ImageDecodeError,
    encode_image,
    guess_mime_type,
    parse_data_url,
)


def make_upload(data: bytes, content_type: str = "image/png") -> UploadedImage:
    return UploadedImage(
        filename="photo.png",
        content_type=content_type,
        size=len(data),
        data=data,
        preview_url="data:image/png;base64,"
    )


@pytest.mark.unit
@pytest.mark.asyncio
class TestEncodeImage:
    async def test_encodes_bytes_without_prefix(self, png_bytes):
        encoded = await encode_image(make_upload(png_bytes))

        assert encoded.mime_type == "image/png"
        assert not encoded.data.startswith("data:")
        assert base64.b64decode(encoded.data) == png_bytes

    async def test_keeps_reported_mime_type(self, png_bytes):
        encoded = await encode_image(make_upload(png_bytes, "image/webp"))
        assert encoded.mime_type == "image/webp"

    async def test_empty_file_fails(self):
        with pytest.raises(ImageDecodeError) as exc_info:
            await encode_image(make_upload(b""))

        assert exc_info.value.message == "Could not read the file data."


@pytest.mark.unit
class TestParseDataUrl:
    def test_valid_data_url(self):
        mime_type, data = parse_data_url("data:image/jpeg;base64,QUJD")
        assert mime_type == "image/jpeg"
        assert data == "QUJD"

    @pytest.mark.parametrize("value", [
        "QUJD",
        "data:image/png;base64",
        "data:image/png,QUJD",
        "data:image/png;base64,",
    ])
    def test_invalid_data_urls(self, value):
        with pytest.raises(ImageDecodeError):
            parse_data_url(value)


@pytest.mark.unit
class TestGuessMimeType:
    def test_reported_type_wins(self):
        assert guess_mime_type("photo.jpg", "image/png") == "image/png"

    def test_falls_back_to_extension(self):
        assert guess_mime_type("photo.jpg", None) == "image/jpeg"

    def test_unknown(self):
        assert guess_mime_type("blob", "") == "application/octet-stream"
        assert guess_mime_type(None, None) == "application/octet-stream"
