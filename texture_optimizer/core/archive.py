"""
In-memory zip archive reading and writing.
"""
import logging
import zipfile
import zlib
from dataclasses import dataclass
from io import BytesIO
from typing import Iterator, Optional, Tuple

from texture_optimizer.core.exceptions import InvalidArchiveError

# Set up logging
logger = logging.getLogger(__name__)

DEFLATE_LEVEL = 9
DEFAULT_DATE_TIME = (1980, 1, 1, 0, 0, 0)


@dataclass(frozen=True)
class ArchiveEntry:
    """A file or directory record inside a zip archive."""
    name: str
    is_directory: bool = False
    payload: Optional[bytes] = None
    date_time: Tuple[int, int, int, int, int, int] = DEFAULT_DATE_TIME

    @property
    def size(self) -> int:
        return len(self.payload) if self.payload is not None else 0


def iter_archive_entries(data: bytes) -> Iterator[ArchiveEntry]:
    """
    Yield the entries of a zip archive in directory order.

    Args:
        data: Raw bytes of the uploaded archive

    Raises:
        InvalidArchiveError: If the container or one of its entries cannot be read
    """
    try:
        archive = zipfile.ZipFile(BytesIO(data))
    except (zipfile.BadZipFile, zipfile.LargeZipFile, ValueError) as e:
        raise InvalidArchiveError(f"Invalid ZIP archive: {str(e)}") from e

    with archive:
        for info in archive.infolist():
            if info.is_dir():
                yield ArchiveEntry(name=info.filename, is_directory=True, date_time=info.date_time)
                continue

            try:
                payload = archive.read(info)
            except (zipfile.BadZipFile, RuntimeError, NotImplementedError, zlib.error) as e:
                raise InvalidArchiveError(f"Invalid ZIP entry {info.filename}: {str(e)}") from e

            yield ArchiveEntry(name=info.filename, payload=payload, date_time=info.date_time)


class ArchiveWriter:
    """
    Accumulates entries into a new zip archive compressed with DEFLATE level 9.

    Example:
        writer = ArchiveWriter()
        writer.add_file("pack.mcmeta", data)
        archive_bytes = writer.close()
    """

    def __init__(self, compresslevel: int = DEFLATE_LEVEL):
        self.compresslevel = compresslevel
        self.file_count = 0
        self._buffer = BytesIO()
        self._archive = zipfile.ZipFile(self._buffer, "w", compression=zipfile.ZIP_DEFLATED)
        self._closed = False

    def add_directory(self, name: str, date_time: Tuple[int, ...] = DEFAULT_DATE_TIME) -> None:
        if not name.endswith("/"):
            name += "/"
        info = zipfile.ZipInfo(name, date_time=date_time)
        info.external_attr = (0o40755 << 16) | 0x10
        self._archive.writestr(info, b"")

    def add_file(self, name: str, data: bytes, date_time: Tuple[int, ...] = DEFAULT_DATE_TIME) -> None:
        info = zipfile.ZipInfo(name, date_time=date_time)
        info.compress_type = zipfile.ZIP_DEFLATED
        info.external_attr = 0o644 << 16
        self._archive.writestr(info, data, compresslevel=self.compresslevel)
        self.file_count += 1

    def close(self) -> bytes:
        """Finish the archive and return its serialized bytes."""
        if not self._closed:
            self._archive.close()
            self._closed = True
            logger.debug(f"Serialized archive with {self.file_count} files ({len(self._buffer.getvalue())} bytes)")
        return self._buffer.getvalue()
