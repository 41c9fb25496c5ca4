"""
API module for the texture pack optimizer.
"""
import io
import logging
import platform
import time

import psutil
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from PIL import Image, features
from starlette.exceptions import HTTPException as StarletteHTTPException

from texture_optimizer import config
from texture_optimizer.api.errors import error_response
from texture_optimizer.api.optimize import router as optimize_router
from texture_optimizer.utils.metrics import get_cpu_mem, get_process_memory_mb

# Set up logging
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Minecraft Texture Pack Optimizer API",
    description="""
    API for shrinking Minecraft resource packs:
    - Downscales HD textures based on folder priority
    - Recompresses PNG textures (optionally to WebP)
    - Repackages the archive with maximum DEFLATE compression

    Savings statistics are returned in the X-Stats response header.
    """,
    version=config.API_VERSION
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Stats", "Content-Disposition"],
)

# Include routers
app.include_router(optimize_router, prefix="/api")


# Unrouted methods get the same 405 body as the explicit ones
@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 405:
        return JSONResponse(
            status_code=405,
            content={"error": "Method not allowed"},
            headers=exc.headers
        )
    return await http_exception_handler(request, exc)


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unexpected errors."""
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
    return error_response(exc)


def _check_codec(image_format: str) -> dict:
    """Encode a tiny image to confirm Pillow can write the format."""
    try:
        buffer = io.BytesIO()
        Image.new("RGBA", (8, 8), (255, 0, 0, 128)).save(buffer, format=image_format)
        return {"status": "ok", "test_size": len(buffer.getvalue())}
    except Exception as e:
        return {"status": "error", "message": str(e)}


# Health check endpoints
@app.get("/health")
async def health_check():
    """Check if the API is running."""
    return {"status": "healthy", "version": config.API_VERSION}


@app.get("/health/detailed")
async def detailed_health_check():
    """
    Provides detailed health information including system metrics and codec status.
    """
    # System info
    system_info = {
        **get_cpu_mem(),
        "disk_usage": psutil.disk_usage("/").percent,
        "process_memory_mb": get_process_memory_mb(),
        "python_version": platform.python_version(),
        "platform": platform.platform()
    }

    imaging_status = {
        "pillow_version": Image.__version__,
        "webp_support": features.check("webp"),
        "zlib_support": features.check("zlib"),
        "codecs": {
            "png": _check_codec("PNG"),
            "webp": _check_codec("WEBP")
        }
    }

    return {
        "status": "healthy",
        "version": config.API_VERSION,
        "environment": config.get_environment(),
        "max_upload_mb": config.MAX_UPLOAD_SIZE // (1024 * 1024),
        "system": system_info,
        "imaging": imaging_status,
        "timestamp": time.time()
    }
