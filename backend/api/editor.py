from fastapi import APIRouter, File, Request, Response, UploadFile
from typing import Optional

from config.settings import settings
from core import sessions
from models.editor import EditorState, PromptPayload, SubmitPayload
from services.editor_controller import EditorController

router = APIRouter(prefix="/editor", tags=["editor"])

def get_controller(request: Request, response: Response) -> EditorController:
    """Resolve the caller's editor session and make sure the cookie points at it"""
    cookie_id: Optional[str] = request.cookies.get(settings.SESSION_COOKIE_NAME)
    session_id, controller = sessions.get_or_create(cookie_id)
    if session_id != cookie_id:
        response.set_cookie(
            settings.SESSION_COOKIE_NAME,
            session_id,
            max_age=settings.SESSION_TTL_SECONDS,
            httponly=True,
            samesite="lax"
        )
    return controller

@router.get("/state", response_model=EditorState)
async def get_state(request: Request, response: Response):
    """Current editor state for this session"""
    return get_controller(request, response).snapshot()

@router.post("/upload", response_model=EditorState)
async def upload_image(request: Request, response: Response, file: UploadFile = File(...)):
    """Load a new source image into the session"""
    controller = get_controller(request, response)
    # At most limit + 1 bytes; anything longer counts as oversized
    data = await file.read(controller.max_upload_size + 1)
    return controller.upload(file.filename, file.content_type, data)

@router.post("/prompt", response_model=EditorState)
async def update_prompt(payload: PromptPayload, request: Request, response: Response):
    return get_controller(request, response).set_prompt(payload.prompt)

@router.post("/submit", response_model=EditorState)
async def submit_edit(request: Request, response: Response, payload: Optional[SubmitPayload] = None):
    """Run the edit for the loaded image and prompt; failures come back in the state's error field"""
    controller = get_controller(request, response)
    return await controller.submit(payload.prompt if payload else None)

@router.post("/reset", response_model=EditorState)
async def reset_editor(request: Request, response: Response):
    return get_controller(request, response).reset()
