"""
Core processing for the texture pack optimizer.

This package contains the pieces of the optimization pipeline:
- classify: path heuristics (entry kind, priority tier, resolution cap)
- recompress: Pillow-based downscaling and re-encoding
- archive: in-memory zip reading and writing
- pipeline: per-entry processing and pack assembly
"""
from texture_optimizer.core.archive import (
    ArchiveEntry,
    ArchiveWriter,
    iter_archive_entries
)

from texture_optimizer.core.classify import (
    EntryKind,
    ImageSettings,
    PriorityTier,
    classify_entry,
    get_folder_priority,
    get_optimal_resolution,
    resolve_image_settings,
    savings_bucket
)

from texture_optimizer.core.exceptions import (
    InvalidArchiveError,
    TextureOptimizerError,
    UploadTooLargeError
)

from texture_optimizer.core.pipeline import (
    EntryOutcome,
    EntryStatus,
    PackResult,
    optimize_pack,
    process_entry,
    record_outcome
)

from texture_optimizer.core.recompress import (
    RecompressionResult,
    RecompressionStatus,
    optimize_image,
    read_image_dimensions
)

__all__ = [
    # Archive
    'ArchiveEntry',
    'ArchiveWriter',
    'iter_archive_entries',

    # Classification
    'EntryKind',
    'ImageSettings',
    'PriorityTier',
    'classify_entry',
    'get_folder_priority',
    'get_optimal_resolution',
    'resolve_image_settings',
    'savings_bucket',

    # Errors
    'InvalidArchiveError',
    'TextureOptimizerError',
    'UploadTooLargeError',

    # Pipeline
    'EntryOutcome',
    'EntryStatus',
    'PackResult',
    'optimize_pack',
    'process_entry',
    'record_outcome',

    # Recompression
    'RecompressionResult',
    'RecompressionStatus',
    'optimize_image',
    'read_image_dimensions'
]
