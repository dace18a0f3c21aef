"""
Editor state controller.

Owns the state of one editing session (uploaded image, prompt, result, error,
loading flag) and runs the upload -> encode -> edit sequence. Nothing else
mutates this state; the API layer only calls the methods below and renders
snapshot().
"""
from typing import Optional

from config.settings import settings
from models.editor import EditorState, EditResult, UIState, UploadedImage
from models.image_edit import EditRequest
from services.gemini_service import EDIT_FAILED_MESSAGE, GeminiService
from services.image_encoder import (
    ImageDecodeError,
    bytes_to_data_url,
    encode_image,
    guess_mime_type,
)

FILE_TOO_LARGE_MESSAGE = "The file is too large. The maximum allowed size is 20MB."
MISSING_INPUT_MESSAGE = "Please provide an image and an instruction."
UNKNOWN_ERROR_MESSAGE = "An unknown error occurred."


class EditorController:
    def __init__(self, gemini_service: Optional[GeminiService] = None, max_upload_size: Optional[int] = None):
        self.gemini_service = gemini_service or GeminiService()
        self.max_upload_size = max_upload_size or settings.MAX_UPLOAD_SIZE

        self.image: Optional[UploadedImage] = None
        self.result: Optional[EditResult] = None
        self.prompt: str = ""
        self.error: Optional[str] = None
        self.is_loading: bool = False
        # Bumped by reset() so a submit still in flight cannot write into a fresh session
        self._generation: int = 0

    @property
    def state(self) -> UIState:
        if self.is_loading:
            return UIState.LOADING
        if self.error:
            return UIState.ERROR
        if self.image is None:
            return UIState.IDLE_NO_IMAGE
        return UIState.IMAGE_LOADED_IDLE

    @property
    def can_submit(self) -> bool:
        return self.image is not None and bool(self.prompt.strip()) and not self.is_loading

    def _set_error(self, message: str) -> None:
        self.error = message
        self.result = None

    def _set_result(self, image_url: str) -> None:
        self.result = EditResult(image_url=image_url)
        self.error = None

    def upload(self, filename: Optional[str], content_type: Optional[str], data: bytes) -> EditorState:
        """Accept a new source image, or reject it when it exceeds the size limit"""
        if self.is_loading:
            return self.snapshot()

        if len(data) > self.max_upload_size:
            # Prior image, result and prompt stay untouched
            self.error = FILE_TOO_LARGE_MESSAGE
            return self.snapshot()

        mime_type = guess_mime_type(filename, content_type)
        self.image = UploadedImage(
            filename=filename or "upload",
            content_type=mime_type,
            size=len(data),
            data=data,
            preview_url=bytes_to_data_url(data, mime_type)
        )
        self.result = None
        self.error = None
        self.prompt = ""
        print(f"🔍 Image loaded: {self.image.filename} ({mime_type}, {len(data)} bytes)")
        return self.snapshot()

    def set_prompt(self, prompt: str) -> EditorState:
        if not self.is_loading:
            self.prompt = prompt or ""
        return self.snapshot()

    async def submit(self, prompt: Optional[str] = None) -> EditorState:
        """
        Encode the loaded image and send it with the prompt to the edit service.

        A submit while a previous one is pending is ignored. The loading flag is
        always cleared before returning, whatever the outcome.
        """
        if self.is_loading:
            return self.snapshot()

        if prompt is not None:
            self.prompt = prompt

        if self.image is None or not self.prompt.strip():
            self._set_error(MISSING_INPUT_MESSAGE)
            return self.snapshot()

        self.is_loading = True
        self.error = None
        self.result = None
        generation = self._generation

        try:
            encoded = await encode_image(self.image)
            edit_request = EditRequest(image=encoded, prompt=self.prompt)
            success, image_url, error = await self.gemini_service.edit_image(
                edit_request.image.data,
                edit_request.image.mime_type,
                edit_request.prompt
            )

            if generation != self._generation:
                print("⚠️ Session was reset while the edit was pending; discarding result")
            elif success and image_url:
                self._set_result(image_url)
            else:
                self._set_error(error or UNKNOWN_ERROR_MESSAGE)

        except ImageDecodeError as e:
            if generation == self._generation:
                self._set_error(e.message)
        except Exception as e:
            print(f"❌ Unexpected error while editing image: {type(e).__name__}: {e}")
            if generation == self._generation:
                self._set_error(EDIT_FAILED_MESSAGE)
        finally:
            if generation == self._generation:
                self.is_loading = False

        return self.snapshot()

    def reset(self) -> EditorState:
        self._generation += 1
        self.image = None
        self.result = None
        self.prompt = ""
        self.error = None
        self.is_loading = False
        return self.snapshot()

    def snapshot(self) -> EditorState:
        return EditorState(
            state=self.state,
            has_image=self.image is not None,
            filename=self.image.filename if self.image else None,
            original_image_url=self.image.preview_url if self.image else None,
            edited_image_url=self.result.image_url if self.result else None,
            prompt=self.prompt,
            error=self.error,
            is_loading=self.is_loading,
            can_submit=self.can_submit
        )
