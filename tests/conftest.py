"""Shared fixtures: in-memory images and zip archives."""

from __future__ import annotations

import io
import random
import zipfile
from typing import Callable, Iterable, Optional, Tuple, Union

import pytest
from PIL import Image

ArchiveItem = Tuple[str, Optional[bytes]]


def encode_png(image: Image.Image) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def noise_image(size: Tuple[int, int], mode: str = "RGB", seed: int = 0) -> Image.Image:
    """Random pixels compress badly, so downscaled copies are always smaller."""
    channels = len(mode)
    data = random.Random(seed).randbytes(size[0] * size[1] * channels)
    return Image.frombytes(mode, size, data)


def build_zip(items: Iterable[ArchiveItem]) -> bytes:
    """Build a zip archive; a None payload creates a directory entry."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for name, payload in items:
            if payload is None:
                archive.writestr(zipfile.ZipInfo(name if name.endswith("/") else name + "/"), b"")
            else:
                archive.writestr(name, payload)
    return buffer.getvalue()


def read_zip(data: bytes) -> dict:
    """Map entry names to payloads (None for directories)."""
    with zipfile.ZipFile(io.BytesIO(data)) as archive:
        return {
            info.filename: None if info.is_dir() else archive.read(info)
            for info in archive.infolist()
        }


@pytest.fixture
def png_bytes() -> Callable[..., bytes]:
    def factory(
        size: Tuple[int, int] = (64, 64),
        color: Union[str, Tuple[int, ...]] = "blue",
        mode: str = "RGB",
    ) -> bytes:
        return encode_png(Image.new(mode, size, color))

    return factory


@pytest.fixture
def noise_png() -> Callable[..., bytes]:
    def factory(size: Tuple[int, int] = (1024, 1024), mode: str = "RGB", seed: int = 0) -> bytes:
        return encode_png(noise_image(size, mode, seed))

    return factory
