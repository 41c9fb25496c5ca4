"""
Per-entry processing and whole-pack assembly.

Every archive entry is turned into an EntryOutcome. Failures are outcomes too,
so a broken texture is copied through unchanged instead of aborting the pack.
"""
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from texture_optimizer.core.archive import (
    DEFAULT_DATE_TIME,
    ArchiveEntry,
    ArchiveWriter,
    iter_archive_entries
)
from texture_optimizer.core.classify import (
    EntryKind,
    classify_entry,
    get_folder_priority,
    resolve_image_settings,
    savings_bucket
)
from texture_optimizer.core.recompress import (
    is_hd_texture,
    optimize_image,
    read_image_dimensions
)
from texture_optimizer.models.options import OutputFormat, ProcessingOptions
from texture_optimizer.models.stats import PackStats
from texture_optimizer.utils.metrics import PerformanceTimer

# Set up logging
logger = logging.getLogger(__name__)

DEFAULT_PACK_NAME = "pack.zip"

_PNG_SUFFIX = re.compile(r"\.png$", re.IGNORECASE)
_ZIP_SUFFIX = re.compile(r"\.zip$", re.IGNORECASE)


class EntryStatus(str, Enum):
    DIRECTORY = "directory"
    COPIED = "copied"
    OPTIMIZED = "optimized"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class EntryOutcome:
    """Result of processing one archive entry."""
    original_name: str
    name: str
    kind: Optional[EntryKind]
    status: EntryStatus
    data: bytes = b""
    original_size: int = 0
    hd_texture: bool = False
    bucket: Optional[str] = None
    date_time: Tuple[int, ...] = DEFAULT_DATE_TIME

    @property
    def is_directory(self) -> bool:
        return self.status == EntryStatus.DIRECTORY

    @property
    def saved(self) -> int:
        return self.original_size - len(self.data)


@dataclass
class PackResult:
    """Serialized archive plus the statistics gathered while building it."""
    data: bytes
    stats: PackStats

    def output_filename(self, original_name: Optional[str] = None) -> str:
        name = original_name or DEFAULT_PACK_NAME
        suffix = f"-optimized-{self.stats.final_zip_size / 1024 / 1024:.2f}mb.zip"
        # Names without a .zip extension are sent back as uploaded
        return _ZIP_SUFFIX.sub(suffix, name)


def converted_name(name: str, output_format: OutputFormat) -> str:
    """Rename a .png entry whose bytes were re-encoded into another format."""
    if output_format == OutputFormat.PNG:
        return name
    return _PNG_SUFFIX.sub(f".{output_format.value}", name)


def _copied(entry: ArchiveEntry, kind: EntryKind) -> EntryOutcome:
    return EntryOutcome(
        original_name=entry.name,
        name=entry.name,
        kind=kind,
        status=EntryStatus.COPIED,
        data=entry.payload or b"",
        original_size=entry.size,
        date_time=entry.date_time
    )


def _skipped(entry: ArchiveEntry, hd_texture: bool = False) -> EntryOutcome:
    return EntryOutcome(
        original_name=entry.name,
        name=entry.name,
        kind=EntryKind.IMAGE,
        status=EntryStatus.SKIPPED,
        data=entry.payload or b"",
        original_size=entry.size,
        hd_texture=hd_texture,
        date_time=entry.date_time
    )


def process_image_entry(entry: ArchiveEntry, options: ProcessingOptions) -> EntryOutcome:
    """
    Recompress one image entry.

    Never raises; any failure is reported as a SKIPPED outcome carrying the
    original bytes.
    """
    data = entry.payload or b""
    hd_texture = False

    try:
        priority = get_folder_priority(entry.name)
        settings = resolve_image_settings(options, priority)
        logger.debug(
            f"{entry.name}: {priority.value} priority, max {settings.max_dimension}px, "
            f"quality {settings.quality}"
        )

        width, height = read_image_dimensions(data)
        hd_texture = is_hd_texture(width, height)

        result = optimize_image(data, entry.name, settings)
        if result.failed:
            logger.warning(f"Skipping {entry.name}: {result.error}")
            return _skipped(entry, hd_texture)

        name = entry.name
        if result.optimized:
            name = converted_name(entry.name, settings.output_format)

        return EntryOutcome(
            original_name=entry.name,
            name=name,
            kind=EntryKind.IMAGE,
            status=EntryStatus.OPTIMIZED,
            data=result.data,
            original_size=len(data),
            hd_texture=hd_texture,
            bucket=savings_bucket(entry.name),
            date_time=entry.date_time
        )
    except Exception as e:
        logger.error(f"Error processing {entry.name}: {str(e)}")
        return _skipped(entry, hd_texture)


def process_entry(entry: ArchiveEntry, options: ProcessingOptions) -> EntryOutcome:
    """Classify an entry and produce its output record."""
    if entry.is_directory:
        return EntryOutcome(
            original_name=entry.name,
            name=entry.name,
            kind=None,
            status=EntryStatus.DIRECTORY,
            date_time=entry.date_time
        )

    kind = classify_entry(entry.name)
    if kind == EntryKind.IMAGE:
        return process_image_entry(entry, options)
    return _copied(entry, kind)


def record_outcome(stats: PackStats, outcome: EntryOutcome) -> PackStats:
    """
    Add one outcome to the running statistics.

    Args:
        stats: Accumulator for the current request
        outcome: Result of process_entry

    Returns:
        The same stats object, for chaining
    """
    if outcome.is_directory:
        return stats

    stats.total_files += 1
    stats.original_size += outcome.original_size
    stats.optimized_size += len(outcome.data)

    if outcome.kind == EntryKind.CRITICAL:
        stats.critical_files += 1
    elif outcome.kind == EntryKind.SOUND:
        stats.sound_files += 1
        stats.add_to_category("sounds", 0)
    elif outcome.kind == EntryKind.IMAGE:
        stats.image_files += 1
        if outcome.hd_texture:
            stats.hd_textures_found += 1
        if outcome.status == EntryStatus.SKIPPED:
            stats.skipped_files += 1
        else:
            stats.optimized_images += 1
            stats.add_to_category(outcome.bucket, outcome.saved)

    return stats


def write_outcome(writer: ArchiveWriter, outcome: EntryOutcome) -> None:
    if outcome.is_directory:
        writer.add_directory(outcome.name, outcome.date_time)
    else:
        writer.add_file(outcome.name, outcome.data, outcome.date_time)


def optimize_pack(archive_data: bytes, options: Optional[ProcessingOptions] = None) -> PackResult:
    """
    Optimize every entry of a resource-pack archive.

    Args:
        archive_data: Raw bytes of the uploaded zip archive
        options: Processing options (defaults used when omitted)

    Returns:
        PackResult with the serialized archive and its statistics

    Raises:
        InvalidArchiveError: If the archive cannot be read
    """
    if options is None:
        options = ProcessingOptions()

    stats = PackStats()
    writer = ArchiveWriter()

    with PerformanceTimer() as timer:
        for entry in iter_archive_entries(archive_data):
            outcome = process_entry(entry, options)
            write_outcome(writer, outcome)
            record_outcome(stats, outcome)

        archive_bytes = writer.close()

    stats.finalize(len(archive_bytes), timer.execution_time)

    logger.info(
        f"Optimized pack: {stats.total_files} files, {stats.optimized_images} images optimized, "
        f"{stats.skipped_files} skipped, {stats.original_size} -> {stats.final_zip_size} bytes "
        f"({stats.saved_percent}% saved) in {stats.processing_time}s"
    )

    return PackResult(data=archive_bytes, stats=stats)
