"""
Filesystem contract and the S3-backed implementation.
"""

from .base import (
    FileSystemService,
    InvalidPathError,
    PathNotFoundError,
    StatResult,
    UnsupportedOperationError,
)
from .s3 import S3FileSystemService, UNSUPPORTED_OPERATIONS, to_key

__all__ = [
    'FileSystemService',
    'InvalidPathError',
    'PathNotFoundError',
    'S3FileSystemService',
    'StatResult',
    'UNSUPPORTED_OPERATIONS',
    'UnsupportedOperationError',
    'to_key',
]
