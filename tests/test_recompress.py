"""Image recompression: size floor, resizing, encoders and fallbacks."""

from __future__ import annotations

import io

import pytest
from PIL import Image

from texture_optimizer.core.classify import ImageSettings
from texture_optimizer.core.recompress import (
    RecompressionStatus,
    compute_target_size,
    optimize_image,
    palette_colors,
    read_image_dimensions,
)
from texture_optimizer.models.options import OutputFormat


def open_image(data: bytes) -> Image.Image:
    image = Image.open(io.BytesIO(data))
    image.load()
    return image


@pytest.mark.parametrize(
    ("size", "max_dimension", "expected"),
    [
        ((1024, 1024), 256, (256, 256)),
        ((600, 600), 1024, (600, 600)),
        ((1024, 512), 256, (256, 128)),
        ((600, 1200), 256, (128, 256)),
        ((1000, 333), 256, (256, 85)),
        ((4096, 1), 256, (256, 1)),
    ],
)
def test_compute_target_size(size, max_dimension, expected) -> None:
    assert compute_target_size(size[0], size[1], max_dimension) == expected


def test_palette_colors_capped_at_128() -> None:
    assert palette_colors(100) == 128
    assert palette_colors(70) == 128
    assert palette_colors(25) == 64
    assert palette_colors(0) == 2


def test_small_images_are_returned_unchanged(png_bytes) -> None:
    data = png_bytes((32, 16), "red")
    settings = ImageSettings(max_dimension=16, quality=50, aggressive=True)

    result = optimize_image(data, "tiny.png", settings)

    assert result.status == RecompressionStatus.UNCHANGED
    assert result.data is data


def test_hd_texture_is_downscaled(noise_png) -> None:
    data = noise_png((1024, 1024))
    settings = ImageSettings(max_dimension=256, quality=85)

    result = optimize_image(data, "dragon.png", settings)

    assert result.status == RecompressionStatus.OPTIMIZED
    assert result.original_dimensions == (1024, 1024)
    assert result.dimensions == (256, 256)
    assert len(result.data) < len(data)
    assert open_image(result.data).size == (256, 256)


def test_non_square_texture_keeps_aspect_ratio(noise_png) -> None:
    data = noise_png((1024, 512), mode="RGBA")
    settings = ImageSettings(max_dimension=256, quality=85)

    result = optimize_image(data, "panorama.png", settings)

    assert result.optimized
    image = open_image(result.data)
    assert image.size == (256, 128)
    assert image.mode == "RGBA"


def test_textures_below_hd_threshold_are_not_resized(noise_png) -> None:
    data = noise_png((300, 300))
    settings = ImageSettings(max_dimension=64, quality=85, aggressive=True)

    result = optimize_image(data, "medium.png", settings)

    assert open_image(result.data).size == (300, 300)


def test_aggressive_png_uses_small_palette(noise_png) -> None:
    data = noise_png((1024, 1024))
    settings = ImageSettings(max_dimension=256, quality=75, aggressive=True)

    result = optimize_image(data, "mob.png", settings)

    assert result.optimized
    image = open_image(result.data)
    assert image.mode == "P"
    assert len(image.getcolors(maxcolors=256)) <= 128


def test_webp_output(noise_png) -> None:
    data = noise_png((1024, 1024))
    settings = ImageSettings(max_dimension=256, quality=80, output_format=OutputFormat.WEBP)

    result = optimize_image(data, "boss.png", settings)

    assert result.optimized
    image = open_image(result.data)
    assert image.format == "WEBP"
    assert image.size == (256, 256)


@pytest.mark.parametrize("aggressive", [True, False])
def test_recompression_never_increases_size(png_bytes, aggressive: bool) -> None:
    # A flat colour PNG is already as small as it gets
    data = png_bytes((128, 128), "green")
    settings = ImageSettings(max_dimension=256, quality=90, aggressive=aggressive)

    result = optimize_image(data, "flat.png", settings)

    assert len(result.data) <= len(data)
    if result.status == RecompressionStatus.UNCHANGED:
        assert result.data == data


def test_empty_buffer_fails_with_original_bytes() -> None:
    result = optimize_image(b"", "empty.png", ImageSettings(max_dimension=256, quality=85))

    assert result.failed
    assert result.data == b""


def test_corrupt_image_fails_with_original_bytes() -> None:
    data = b"definitely not a png"

    result = optimize_image(data, "broken.png", ImageSettings(max_dimension=256, quality=85))

    assert result.failed
    assert result.data == data
    assert result.error


def test_truncated_image_fails_with_original_bytes(noise_png) -> None:
    data = noise_png((600, 600))[:2000]

    result = optimize_image(data, "truncated.png", ImageSettings(max_dimension=256, quality=85))

    assert result.failed
    assert result.data == data


def test_read_image_dimensions(png_bytes) -> None:
    assert read_image_dimensions(png_bytes((40, 20))) == (40, 20)

    with pytest.raises(Exception):
        read_image_dimensions(b"garbage")
