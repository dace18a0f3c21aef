"""
Shared pytest fixtures and configuration for all tests
"""
import os
import pytest
import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

# Settings refuse to load without a credential; give the test run a fake one
os.environ.setdefault("API_KEY", "test-api-key")

# Add backend to Python path for imports
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32
EDITED_DATA_URL = "data:image/png;base64,ZWRpdGVk"

@pytest.fixture
def png_bytes():
    """Small fake PNG payload"""
    return PNG_BYTES

@pytest.fixture
def fake_gemini_service():
    """GeminiService stand-in whose edit_image succeeds with a fixed data URL"""
    service = MagicMock()
    service.edit_image = AsyncMock(return_value=(True, EDITED_DATA_URL, None))
    return service

@pytest.fixture
def controller(fake_gemini_service):
    """Provide an EditorController wired to the fake edit service"""
    from services.editor_controller import EditorController
    return EditorController(gemini_service=fake_gemini_service)

@pytest.fixture
def gemini_response():
    """Build a generateContent response body from a list of parts"""
    def _build(parts):
        return {
            "candidates": [{
                "content": {"role": "model", "parts": parts},
                "finishReason": "STOP"
            }]
        }
    return _build
