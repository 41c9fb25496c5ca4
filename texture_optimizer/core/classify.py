"""
Path-based heuristics for resource-pack entries.

All functions here are pure: they only look at the entry name and never
touch archive or image data.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from texture_optimizer.models.options import DeviceMode, OutputFormat, ProcessingOptions

# Files the game or plugins parse directly; never modified
CRITICAL_NAMES = ("pack.mcmeta", "pack.png")
CRITICAL_SUFFIXES = (".mcmeta", ".json", ".bbmodel", ".txt", ".properties")
CRITICAL_SEGMENTS = ("font/",)

SOUND_SUFFIXES = (".ogg", ".wav", ".mp3")
IMAGE_SUFFIXES = (".png", ".jpg", ".jpeg")

# Custom character/mob packs usually ship HD textures
HIGH_PRIORITY_KEYWORDS = (
    "ninja", "samurai", "warrior", "mage", "assassin",
    "paladin", "reaper", "dragon", "awakened",
)

HIGH_PRIORITY_MAX_RESOLUTION = 256
LOW_PRIORITY_MAX_RESOLUTION = 512
LOW_PRIORITY_SCALE = 1.5

POTATO_MAX_RESOLUTION = 256
POTATO_QUALITY_PENALTY = 10


class EntryKind(str, Enum):
    CRITICAL = "critical"
    SOUND = "sound"
    IMAGE = "image"
    OTHER = "other"


class PriorityTier(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class ImageSettings:
    """Effective recompression parameters for one image."""
    max_dimension: int
    quality: int
    output_format: OutputFormat = OutputFormat.PNG
    aggressive: bool = False


def is_critical_file(name: str) -> bool:
    lowered = name.lower()
    return (
        lowered in CRITICAL_NAMES
        or lowered.endswith(CRITICAL_SUFFIXES)
        or any(segment in lowered for segment in CRITICAL_SEGMENTS)
    )


def is_sound_file(name: str) -> bool:
    return name.lower().endswith(SOUND_SUFFIXES)


def is_image_file(name: str) -> bool:
    return name.lower().endswith(IMAGE_SUFFIXES)


def classify_entry(name: str) -> EntryKind:
    """
    Classify an archive entry by its name.

    Critical patterns win over sound, sound over image, image over other.
    """
    if is_critical_file(name):
        return EntryKind.CRITICAL
    if is_sound_file(name):
        return EntryKind.SOUND
    if is_image_file(name):
        return EntryKind.IMAGE
    return EntryKind.OTHER


def get_folder_priority(name: str) -> PriorityTier:
    """
    Pick an optimization priority from the texture path.

    Args:
        name: Entry path inside the archive

    Returns:
        HIGH for ModelEngine and custom mob textures, LOW for vanilla
        textures, MEDIUM otherwise
    """
    path = name.lower()

    if "modelengine" in path:
        return PriorityTier.HIGH
    if any(keyword in path for keyword in HIGH_PRIORITY_KEYWORDS):
        return PriorityTier.HIGH
    if "items" in path or "weapons" in path:
        return PriorityTier.MEDIUM
    if "assets/minecraft/textures/" in path:
        return PriorityTier.LOW

    return PriorityTier.MEDIUM


def get_optimal_resolution(base_resolution: int, priority: PriorityTier) -> int:
    """
    Derive the resolution cap for a texture from its priority.

    Args:
        base_resolution: Resolution requested by the caller
        priority: Tier returned by get_folder_priority

    Returns:
        Maximum dimension in pixels
    """
    if priority == PriorityTier.HIGH:
        return min(base_resolution, HIGH_PRIORITY_MAX_RESOLUTION)
    if priority == PriorityTier.LOW:
        return int(min(base_resolution * LOW_PRIORITY_SCALE, LOW_PRIORITY_MAX_RESOLUTION))
    return base_resolution


def resolve_image_settings(options: ProcessingOptions, priority: PriorityTier) -> ImageSettings:
    """
    Combine caller options, priority and device mode into image settings.

    Potato mode caps the resolution at 256, drops quality by 10 and always
    turns aggressive mode on.
    """
    resolution = get_optimal_resolution(options.target_resolution, priority)
    quality = options.quality
    aggressive = options.aggressive_mode

    if options.device_mode == DeviceMode.POTATO:
        resolution = min(resolution, POTATO_MAX_RESOLUTION)
        quality = max(1, quality - POTATO_QUALITY_PENALTY)
        aggressive = True

    return ImageSettings(
        max_dimension=resolution,
        quality=quality,
        output_format=options.output_format,
        aggressive=aggressive,
    )


def savings_bucket(name: str) -> Optional[str]:
    """Stats category for an image, matched against its original path."""
    if "modelengine" in name:
        return "modelengine"
    if "items" in name or "weapons" in name:
        return "items"
    if "assets/minecraft" in name:
        return "vanilla"
    return None
