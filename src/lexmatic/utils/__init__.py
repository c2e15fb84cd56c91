"""Utility modules for lexmatic.

Provides:
- hashing: hash_str for cache keys
- logger: get_logger for logging
"""

from lexmatic.utils.hashing import hash_str
from lexmatic.utils.logger import get_logger

__all__ = [
    "get_logger",
    "hash_str",
]
