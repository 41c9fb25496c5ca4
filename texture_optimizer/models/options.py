"""
Models for the options accepted by the optimize endpoint.
"""
from enum import Enum

from pydantic import BaseModel, Field


class OutputFormat(str, Enum):
    """Encoding used for recompressed textures"""
    PNG = "png"
    WEBP = "webp"


class DeviceMode(str, Enum):
    """Quality/performance profile selected by the caller"""
    POTATO = "potato"
    BALANCED = "balanced"
    QUALITY = "quality"


class ProcessingOptions(BaseModel):
    """Options controlling how images in a pack are recompressed"""
    target_resolution: int = Field(
        256, gt=0,
        description="Base maximum texture dimension in pixels"
    )
    quality: int = Field(
        85, ge=1, le=100,
        description="Encoder quality (1-100)"
    )
    output_format: OutputFormat = Field(
        OutputFormat.PNG,
        description="Output image format (png or webp)"
    )
    aggressive_mode: bool = Field(
        False,
        description="Reduce PNG textures to an indexed palette"
    )
    device_mode: DeviceMode = Field(
        DeviceMode.POTATO,
        description="Device profile; potato forces aggressive settings"
    )
