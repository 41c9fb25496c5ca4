"""
Minecraft Texture Pack Optimizer API Entry Point

This file serves as the main entry point for the application,
importing and running the FastAPI application defined in the
texture_optimizer package.

Run with uvicorn:
    uvicorn main:app --reload
"""
import os
import logging
import sys
from texture_optimizer import app, config

# Configure logging based on environment variables
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Configure root logger
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format=LOG_FORMAT,
    stream=sys.stdout,
    force=True
)

# Set up logger
logger = logging.getLogger(__name__)

# Check that required dependencies are installed
try:
    import psutil
    import python_multipart
    from PIL import features
except ImportError as e:
    logger.critical(f"Missing required dependency: {str(e)}")
    logger.critical("Please install all dependencies: pip install -e .")
    sys.exit(1)

# PNG output needs zlib; WebP output is optional
if not features.check("zlib"):
    logger.critical("Pillow was built without zlib, so PNG textures cannot be written")
    sys.exit(1)
if not features.check("webp"):
    logger.warning("Pillow was built without WebP support. format=webp requests will keep the original textures.")

logger.info(
    f"Environment: {config.get_environment()}, upload limit {config.MAX_UPLOAD_SIZE // (1024 * 1024)} MB, "
    f"{psutil.cpu_count()} CPUs"
)

# Entry point for running with uvicorn
if __name__ == "__main__":
    import uvicorn

    # Get configuration from environment variables
    port = int(os.environ.get("PORT", 8000))
    workers = int(os.environ.get("WORKERS", 1))
    debug = os.environ.get("DEBUG", "").lower() in ("true", "1", "yes")

    logger.info(f"Starting Texture Pack Optimizer API on port {port} with {workers} workers")

    uvicorn.run(
        "texture_optimizer:app",
        host="0.0.0.0",
        port=port,
        workers=workers,
        reload=debug
    )
