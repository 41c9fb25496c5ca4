"""
Data models for the texture pack optimizer API.

This module provides Pydantic models for request options and the
statistics returned with every optimized pack.
"""
from texture_optimizer.models.options import (
    DeviceMode,
    OutputFormat,
    ProcessingOptions
)

from texture_optimizer.models.stats import (
    CATEGORY_BUCKETS,
    TARGET_PACK_SIZE,
    CategoryStats,
    PackStats
)

__all__ = [
    # Options
    'DeviceMode',
    'OutputFormat',
    'ProcessingOptions',

    # Statistics
    'CATEGORY_BUCKETS',
    'TARGET_PACK_SIZE',
    'CategoryStats',
    'PackStats'
]
