from fastapi import APIRouter
from models.image_edit import ImageEditRequest, ImageEditResponse
from services.gemini_service import GeminiService
from services.image_encoder import ImageDecodeError, parse_data_url
import time

router = APIRouter(prefix="/image-edit", tags=["image-edit"])

def get_gemini_service():
    return GeminiService()

@router.post("/", response_model=ImageEditResponse)
async def edit_image(edit_request: ImageEditRequest):
    """Edit an image with Gemini and return the result as a data URL"""
    start_time = time.time()

    # Step 1: Normalise the input to (mime_type, base64 payload)
    if edit_request.image_data.startswith("data:"):
        try:
            mime_type, base64_data = parse_data_url(edit_request.image_data)
        except ImageDecodeError as e:
            return ImageEditResponse(success=False, error=e.message)
    else:
        mime_type, base64_data = edit_request.mime_type, edit_request.image_data

    if not mime_type:
        return ImageEditResponse(
            success=False,
            error="mime_type is required when image_data is raw base64"
        )

    # Step 2: Generate edited image
    gemini_service = get_gemini_service()
    edit_success, result_image_url, edit_error = await gemini_service.edit_image(
        base64_data,
        mime_type,
        edit_request.prompt
    )

    if not edit_success or not result_image_url:
        return ImageEditResponse(
            success=False,
            error=edit_error or "Image generation failed"
        )

    processing_time = time.time() - start_time
    print(f"✅ Image edit completed in {processing_time:.1f}s")

    return ImageEditResponse(
        success=True,
        image_url=result_image_url,
        error=None
    )

@router.get("/health")
async def check_gemini_config():
    """Check if Gemini is properly configured"""
    gemini_service = get_gemini_service()
    has_key = bool(gemini_service.api_key)

    return {
        "configured": has_key,
        "model": gemini_service.model,
        "message": "Gemini API key configured" if has_key else "Gemini API key not set"
    }
