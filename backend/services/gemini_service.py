import httpx
from typing import Any, Dict, List, Optional, Tuple

from config.settings import settings
from services.image_encoder import to_data_url

EDIT_FAILED_MESSAGE = "Failed to edit the image. Please check your instruction and try again."
MISSING_INPUT_MESSAGE = "Image data, MIME type and prompt are required"


class NoImageInResponseError(Exception):
    """The service answered but none of the returned parts carried image data."""

    def __init__(self):
        super().__init__("No image data found in the API response.")


class GeminiAPIError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(f"Gemini API request failed ({status_code}): {message}")
        self.status_code = status_code


def get_response_parts(response: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Return the content parts of the first candidate, or [] when absent"""
    candidates = response.get("candidates") or []
    if not candidates:
        return []
    content = candidates[0].get("content") or {}
    return content.get("parts") or []


def find_inline_image(parts: List[Dict[str, Any]]) -> Optional[Dict[str, str]]:
    """
    Scan response parts in order for the first one carrying inline binary data.

    Both the REST casing (inlineData/mimeType) and the snake_case variant used
    by some proxies are accepted. Inline parts with an empty data field are
    skipped rather than returned as an empty image.

    Returns:
        {"data": ..., "mime_type": ...} for the first inline part, None otherwise
    """
    for part in parts:
        inline_data = part.get("inlineData") or part.get("inline_data")
        if not inline_data or not inline_data.get("data"):
            continue
        mime_type = inline_data.get("mimeType") or inline_data.get("mime_type") or "image/png"
        return {"data": inline_data["data"], "mime_type": mime_type}
    return None


def build_edit_payload(base64_data: str, mime_type: str, prompt: str) -> Dict[str, Any]:
    return {
        "contents": [{
            "parts": [
                {
                    "inlineData": {
                        "data": base64_data,
                        "mimeType": mime_type
                    }
                },
                {
                    "text": prompt
                }
            ]
        }],
        "generationConfig": {
            "responseModalities": ["IMAGE"]
        }
    }


class GeminiService:
    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.api_key = api_key if api_key is not None else settings.API_KEY
        self.model = model or settings.GEMINI_MODEL
        self.base_url = (base_url or settings.GEMINI_BASE_URL).rstrip('/')
        self.timeout = timeout if timeout is not None else settings.GEMINI_TIMEOUT
        self.transport = transport

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    async def edit_image(self, base64_data: str, mime_type: str, prompt: str) -> Tuple[bool, Optional[str], Optional[str]]:
        """Edit an image with a text instruction using Gemini's image model"""
        if not base64_data or not mime_type or not prompt or not prompt.strip():
            return False, None, MISSING_INPUT_MESSAGE

        try:
            if not self.api_key:
                raise RuntimeError("Gemini API key not configured")

            payload = build_edit_payload(base64_data, mime_type, prompt)
            headers = {
                "x-goog-api-key": self.api_key,
                "Content-Type": "application/json"
            }

            print(f"🔍 Sending image edit request to {self.model} ({mime_type}, {len(base64_data)} base64 chars)")
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(self.endpoint, json=payload, headers=headers)

                if response.status_code != 200:
                    try:
                        error_data = response.json() if response.content else {}
                    except ValueError:
                        error_data = {}
                    error_message = (error_data.get('error') or {}).get('message') or response.text[:200]
                    raise GeminiAPIError(response.status_code, error_message)

                data = response.json()

            image = find_inline_image(get_response_parts(data))
            if image is None:
                raise NoImageInResponseError()

            print(f"✅ Received edited image ({image['mime_type']})")
            return True, to_data_url(image['mime_type'], image['data']), None

        except Exception as error:
            # Callers only ever see the generic message; the cause stays in the logs
            print(f"❌ Error editing image with Gemini: {type(error).__name__}: {error}")
            return False, None, EDIT_FAILED_MESSAGE
