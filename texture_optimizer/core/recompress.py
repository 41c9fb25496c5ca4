"""
Image recompression for resource-pack textures.

Textures are optionally downscaled and re-encoded with Pillow. The original
bytes are returned whenever recompression fails or would not make the file
smaller, so callers can always write the result straight into the archive.
"""
import logging
import math
from dataclasses import dataclass
from enum import Enum
from io import BytesIO
from typing import Optional, Tuple

from PIL import Image, ImageOps, UnidentifiedImageError

from texture_optimizer.core.classify import ImageSettings
from texture_optimizer.models.options import OutputFormat

# Set up logging
logger = logging.getLogger(__name__)

# Images at or below this size in both dimensions are left alone
MIN_OPTIMIZE_DIMENSION = 32
# Images at or above this size in either dimension count as HD and get resized
HD_DIMENSION = 512

PALETTE_MAX_COLORS = 128
AGGRESSIVE_QUALITY_PENALTY = 5
PNG_COMPRESS_LEVEL = 9
WEBP_METHOD = 6
WEBP_ALPHA_QUALITY = 95


class RecompressionStatus(str, Enum):
    OPTIMIZED = "optimized"
    UNCHANGED = "unchanged"
    FAILED = "failed"


@dataclass(frozen=True)
class RecompressionResult:
    """Outcome of recompressing a single image."""
    data: bytes
    status: RecompressionStatus
    original_dimensions: Optional[Tuple[int, int]] = None
    dimensions: Optional[Tuple[int, int]] = None
    error: Optional[str] = None

    @property
    def optimized(self) -> bool:
        return self.status == RecompressionStatus.OPTIMIZED

    @property
    def failed(self) -> bool:
        return self.status == RecompressionStatus.FAILED


def is_hd_texture(width: int, height: int) -> bool:
    return width >= HD_DIMENSION or height >= HD_DIMENSION


def read_image_dimensions(data: bytes) -> Tuple[int, int]:
    """
    Read width and height from an image header.

    Raises:
        UnidentifiedImageError: If Pillow cannot identify the image
    """
    with Image.open(BytesIO(data)) as img:
        return img.size


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_target_size(width: int, height: int, max_dimension: int) -> Tuple[int, int]:
    """
    Compute a downscaled size that keeps the aspect ratio.

    The longer side is capped at max_dimension; the result is never larger
    than the original.
    """
    if width == height:
        side = min(max_dimension, width)
        return side, side

    aspect_ratio = width / height
    if width > height:
        new_width = min(max_dimension, width)
        new_height = _round_half_up(new_width / aspect_ratio)
    else:
        new_height = min(max_dimension, height)
        new_width = _round_half_up(new_height * aspect_ratio)

    return max(1, new_width), max(1, new_height)


def _to_working_mode(img: Image.Image) -> Image.Image:
    """Convert to RGB or RGBA so resizing and encoding behave uniformly."""
    if img.mode in ("RGB", "RGBA"):
        return img
    if img.mode in ("LA", "PA", "RGBa") or "transparency" in img.info:
        return img.convert("RGBA")
    return img.convert("RGB")


def _resize_contain(img: Image.Image, size: Tuple[int, int]) -> Image.Image:
    if size[0] >= img.width and size[1] >= img.height:
        # Never enlarge
        return img
    background = (0, 0, 0, 0) if img.mode == "RGBA" else (0, 0, 0)
    return ImageOps.pad(img, size, method=Image.Resampling.LANCZOS, color=background)


def palette_colors(quality: int) -> int:
    """Palette size for aggressive PNG encoding; scales with quality, capped at 128."""
    return max(2, min(PALETTE_MAX_COLORS, _round_half_up(256 * quality / 100)))


def _encode(img: Image.Image, settings: ImageSettings) -> bytes:
    buffer = BytesIO()

    if settings.output_format == OutputFormat.WEBP:
        img.save(
            buffer,
            format="WEBP",
            quality=settings.quality,
            method=WEBP_METHOD,
            alpha_quality=WEBP_ALPHA_QUALITY
        )
    elif settings.aggressive:
        quality = max(1, settings.quality - AGGRESSIVE_QUALITY_PENALTY)
        quantized = img.quantize(
            colors=palette_colors(quality),
            method=Image.Quantize.FASTOCTREE
        )
        quantized.save(buffer, format="PNG", optimize=True, compress_level=PNG_COMPRESS_LEVEL)
    else:
        img.save(buffer, format="PNG", optimize=True, compress_level=PNG_COMPRESS_LEVEL)

    return buffer.getvalue()


def optimize_image(data: bytes, filename: str, settings: ImageSettings) -> RecompressionResult:
    """
    Downscale and re-encode a texture.

    Args:
        data: Raw image bytes
        filename: Entry name, used for log messages only
        settings: Effective resolution, quality, format and aggressive flag

    Returns:
        RecompressionResult; its data is the original bytes unless the
        re-encoded image is strictly smaller
    """
    if not data:
        logger.warning(f"Empty image buffer for {filename}")
        return RecompressionResult(data, RecompressionStatus.FAILED, error="Empty image buffer")

    try:
        with Image.open(BytesIO(data)) as img:
            width, height = img.size
            original_dimensions = (width, height)

            if not width or not height:
                logger.warning(f"Invalid metadata for {filename}")
                return RecompressionResult(
                    data, RecompressionStatus.FAILED, error="Invalid image metadata"
                )

            if width <= MIN_OPTIMIZE_DIMENSION and height <= MIN_OPTIMIZE_DIMENSION:
                return RecompressionResult(
                    data, RecompressionStatus.UNCHANGED,
                    original_dimensions=original_dimensions,
                    dimensions=original_dimensions
                )

            working = _to_working_mode(img)

            if is_hd_texture(width, height):
                target = compute_target_size(width, height, settings.max_dimension)
                working = _resize_contain(working, target)
                logger.debug(f"Resized {filename}: {width}x{height} -> {working.width}x{working.height}")

            dimensions = working.size
            encoded = _encode(working, settings)
    except UnidentifiedImageError as e:
        logger.warning(f"Invalid metadata for {filename}: {str(e)}")
        return RecompressionResult(data, RecompressionStatus.FAILED, error=str(e))
    except Exception as e:
        logger.error(f"Error optimizing {filename}: {str(e)}")
        return RecompressionResult(data, RecompressionStatus.FAILED, error=str(e))

    if len(encoded) < len(data):
        return RecompressionResult(
            encoded, RecompressionStatus.OPTIMIZED,
            original_dimensions=original_dimensions,
            dimensions=dimensions
        )

    return RecompressionResult(
        data, RecompressionStatus.UNCHANGED,
        original_dimensions=original_dimensions,
        dimensions=original_dimensions
    )
