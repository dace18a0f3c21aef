from pydantic import BaseModel
from typing import Optional

class ImageEditRequest(BaseModel):
    image_data: str  # Base64 encoded image or data:image/...;base64 URL
    prompt: str
    mime_type: Optional[str] = None  # Required when image_data is raw base64

class EncodedImage(BaseModel):
    data: str  # Base64 payload without the data URL prefix
    mime_type: str

class EditRequest(BaseModel):
    image: EncodedImage
    prompt: str

class ImageEditResponse(BaseModel):
    success: bool
    image_url: Optional[str] = None
    error: Optional[str] = None
