"""
Utility functions for the texture pack optimizer.
"""
import logging

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

from texture_optimizer.utils.metrics import (
    get_cpu_mem,
    get_process_memory_mb,
    PerformanceTimer
)

__all__ = [
    'get_cpu_mem',
    'get_process_memory_mb',
    'PerformanceTimer'
]
