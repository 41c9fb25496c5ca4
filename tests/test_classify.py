"""Entry classification, folder priority and settings resolution."""

from __future__ import annotations

import pytest

from texture_optimizer.core.classify import (
    EntryKind,
    PriorityTier,
    classify_entry,
    get_folder_priority,
    get_optimal_resolution,
    resolve_image_settings,
    savings_bucket,
)
from texture_optimizer.models.options import DeviceMode, OutputFormat, ProcessingOptions


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("pack.mcmeta", EntryKind.CRITICAL),
        ("PACK.PNG", EntryKind.CRITICAL),
        ("assets/minecraft/textures/block/water_still.png.mcmeta", EntryKind.CRITICAL),
        ("assets/minecraft/models/item/sword.json", EntryKind.CRITICAL),
        ("assets/modelengine/blueprints/dragon.bbmodel", EntryKind.CRITICAL),
        ("credits.TXT", EntryKind.CRITICAL),
        ("optifine/cit/sword.properties", EntryKind.CRITICAL),
        ("assets/minecraft/font/glyphs.png", EntryKind.CRITICAL),
        ("assets/minecraft/sounds/ambient/cave.ogg", EntryKind.SOUND),
        ("sounds/hit.WAV", EntryKind.SOUND),
        ("sounds/theme.mp3", EntryKind.SOUND),
        ("assets/minecraft/textures/block/stone.png", EntryKind.IMAGE),
        ("textures/photo.JPG", EntryKind.IMAGE),
        ("textures/photo.jpeg", EntryKind.IMAGE),
        ("assets/pack.png", EntryKind.IMAGE),
        ("shaders/core/rendertype.fsh", EntryKind.OTHER),
        ("README", EntryKind.OTHER),
        ("", EntryKind.OTHER),
    ],
)
def test_classify_entry(name: str, expected: EntryKind) -> None:
    assert classify_entry(name) == expected
    # Deterministic for repeated calls
    assert classify_entry(name) == expected


def test_critical_patterns_take_precedence_over_images() -> None:
    assert classify_entry("assets/custom/font/default.png") == EntryKind.CRITICAL
    assert classify_entry("pack.png") == EntryKind.CRITICAL


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("assets/ModelEngine/entity/golem.png", PriorityTier.HIGH),
        ("assets/custom/textures/entity/Dragon_boss.png", PriorityTier.HIGH),
        ("assets/custom/textures/awakened_items/orb.png", PriorityTier.HIGH),
        ("assets/custom/textures/items/orb.png", PriorityTier.MEDIUM),
        ("assets/custom/textures/weapons/blade.png", PriorityTier.MEDIUM),
        ("assets/minecraft/textures/block/stone.png", PriorityTier.LOW),
        ("assets/minecraft/textures/item/items_atlas.png", PriorityTier.MEDIUM),
        ("assets/custom/textures/gui/panel.png", PriorityTier.MEDIUM),
    ],
)
def test_get_folder_priority(name: str, expected: PriorityTier) -> None:
    assert get_folder_priority(name) == expected


@pytest.mark.parametrize(
    ("base", "priority", "expected"),
    [
        (512, PriorityTier.HIGH, 256),
        (128, PriorityTier.HIGH, 128),
        (256, PriorityTier.LOW, 384),
        (512, PriorityTier.LOW, 512),
        (255, PriorityTier.LOW, 382),
        (256, PriorityTier.MEDIUM, 256),
        (1024, PriorityTier.MEDIUM, 1024),
    ],
)
def test_get_optimal_resolution(base: int, priority: PriorityTier, expected: int) -> None:
    assert get_optimal_resolution(base, priority) == expected


def test_potato_mode_overrides_caller_flags() -> None:
    options = ProcessingOptions(
        target_resolution=512,
        quality=85,
        aggressive_mode=False,
        device_mode=DeviceMode.POTATO,
    )

    settings = resolve_image_settings(options, PriorityTier.LOW)

    assert settings.aggressive is True
    assert settings.quality == 75
    assert settings.max_dimension == 256


def test_potato_quality_never_drops_below_one() -> None:
    options = ProcessingOptions(quality=5, device_mode=DeviceMode.POTATO)

    assert resolve_image_settings(options, PriorityTier.MEDIUM).quality == 1


@pytest.mark.parametrize("mode", [DeviceMode.BALANCED, DeviceMode.QUALITY])
def test_other_device_modes_keep_caller_settings(mode: DeviceMode) -> None:
    options = ProcessingOptions(
        target_resolution=256,
        quality=90,
        output_format=OutputFormat.WEBP,
        aggressive_mode=False,
        device_mode=mode,
    )

    settings = resolve_image_settings(options, PriorityTier.LOW)

    assert settings.max_dimension == 384
    assert settings.quality == 90
    assert settings.aggressive is False
    assert settings.output_format == OutputFormat.WEBP


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("assets/modelengine/items/golem.png", "modelengine"),
        ("assets/custom/textures/items/orb.png", "items"),
        ("assets/custom/textures/weapons/blade.png", "items"),
        ("assets/minecraft/textures/block/stone.png", "vanilla"),
        ("assets/custom/textures/gui/panel.png", None),
        ("assets/ModelEngine/golem.png", None),
    ],
)
def test_savings_bucket(name: str, expected: str | None) -> None:
    assert savings_bucket(name) == expected
