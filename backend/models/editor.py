from pydantic import BaseModel
from typing import Optional
from enum import Enum

class UIState(str, Enum):
    IDLE_NO_IMAGE = "idle_no_image"
    IMAGE_LOADED_IDLE = "image_loaded_idle"
    LOADING = "loading"
    ERROR = "error"

class UploadedImage(BaseModel):
    filename: str
    content_type: str
    size: int
    data: bytes
    preview_url: str

class EditResult(BaseModel):
    image_url: str  # data:<mime>;base64,<payload>

class EditorState(BaseModel):
    state: UIState
    has_image: bool = False
    filename: Optional[str] = None
    original_image_url: Optional[str] = None
    edited_image_url: Optional[str] = None
    prompt: str = ""
    error: Optional[str] = None
    is_loading: bool = False
    can_submit: bool = False

class PromptPayload(BaseModel):
    prompt: str = ""

class SubmitPayload(BaseModel):
    prompt: Optional[str] = None
