"""
Minecraft Texture Pack Optimizer Application

This package implements a FastAPI application that shrinks Minecraft
resource packs:
- Classifies archive entries (critical files, sounds, images, other)
- Picks a resolution cap per texture from its folder priority
- Downscales and recompresses textures with Pillow
- Repackages the archive with maximum DEFLATE compression

Per-pack savings statistics are returned alongside the optimized archive.
"""
# Export the app instance
from texture_optimizer.api import app

__all__ = ['app']
