"""
Mapping of request-level failures to user-facing error responses.
"""
import logging
import traceback
from typing import Any, Dict

from fastapi.responses import JSONResponse
from PIL import Image, UnidentifiedImageError

from texture_optimizer import config

# Set up logging
logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "Failed to process texture pack"
DEFAULT_SUGGESTION = "Try: Potato Mode + 256x resolution + Quality 75%"

IMAGE_ERROR_MESSAGE = "Image processing error. Please try again or use smaller resolution."
TIMEOUT_ERROR_MESSAGE = "Processing timeout. Try Potato Mode or smaller file."
MEMORY_ERROR_MESSAGE = "Out of memory. Try reducing quality or resolution."
INVALID_ERROR_MESSAGE = "Invalid ZIP file or corrupted textures detected."

IMAGE_LIBRARY_KEYWORDS = ("sharp", "pillow")


def _is_image_library_error(exc: Exception, message: str) -> bool:
    if isinstance(exc, (UnidentifiedImageError, Image.DecompressionBombError)):
        return True
    if type(exc).__module__.startswith("PIL"):
        return True
    return any(keyword in message for keyword in IMAGE_LIBRARY_KEYWORDS)


def user_facing_message(exc: Exception) -> str:
    """
    Pick a user-facing error message for an exception.

    Args:
        exc: The exception that aborted the request

    Returns:
        One of the canned messages, or the generic failure message
    """
    message = str(exc).lower()

    if _is_image_library_error(exc, message):
        return IMAGE_ERROR_MESSAGE
    if isinstance(exc, TimeoutError) or "timeout" in message:
        return TIMEOUT_ERROR_MESSAGE
    if isinstance(exc, MemoryError) or "memory" in message:
        return MEMORY_ERROR_MESSAGE
    if "invalid" in message:
        return INVALID_ERROR_MESSAGE
    return DEFAULT_ERROR_MESSAGE


def error_payload(exc: Exception) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "error": user_facing_message(exc),
        "suggestion": DEFAULT_SUGGESTION
    }
    if config.is_development():
        payload["details"] = {
            "message": str(exc),
            "stack": "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
            "name": type(exc).__name__
        }
    return payload


def error_response(exc: Exception, status_code: int = 500) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=error_payload(exc))
