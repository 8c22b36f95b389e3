"""
Configuration constants for the S3 filesystem adapter.

This module contains all configuration parameters including:
- Cloud credentials, region and endpoint
- Transport settings handed to the botocore client
- Filesystem defaults (ignore patterns, selected files, text encoding)
- Logging levels for the AWS SDK loggers
"""

import os
from typing import List, Optional, Tuple


def _get_list(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


# =============================================================================
# CLOUD STORAGE CONFIGURATION
# =============================================================================

# Object storage configuration
BUCKET_NAME: str = os.getenv("BUCKET_NAME", "")

# AWS credentials and region
AWS_ACCESS_KEY_ID: str = os.getenv("AWS_ACCESS_KEY_ID", "")
AWS_SECRET_ACCESS_KEY: str = os.getenv("AWS_SECRET_ACCESS_KEY", "")
AWS_SESSION_TOKEN: Optional[str] = os.getenv("AWS_SESSION_TOKEN") or None
AWS_REGION: str = os.getenv("AWS_REGION", os.getenv("AWS_DEFAULT_REGION", ""))

# Custom endpoint for S3-compatible stores (MinIO, R2); empty means AWS
S3_ENDPOINT: Optional[str] = os.getenv("S3_ENDPOINT") or None

# =============================================================================
# TRANSPORT CONFIGURATION
# =============================================================================

CONNECT_TIMEOUT_SECONDS: int = int(os.getenv("CONNECT_TIMEOUT_SECONDS", "5"))
READ_TIMEOUT_SECONDS: int = int(os.getenv("READ_TIMEOUT_SECONDS", "60"))
MAX_POOL_CONNECTIONS: int = int(os.getenv("MAX_POOL_CONNECTIONS", "10"))

# Retries are owned by botocore, the adapter never retries on its own
MAX_ATTEMPTS: int = int(os.getenv("MAX_ATTEMPTS", "3"))
RETRY_MODE: str = os.getenv("RETRY_MODE", "standard")

# 'auto', 'virtual' or 'path' ('path' for most S3-compatible stores)
ADDRESSING_STYLE: str = os.getenv("ADDRESSING_STYLE", "auto")

# =============================================================================
# FILESYSTEM DEFAULTS
# =============================================================================

# Always skipped by the default ignore filter
DEFAULT_IGNORE_PATTERNS: Tuple[str, ...] = (
    ".git/",
    "node_modules/",
    "__pycache__/",
    ".DS_Store",
)

# Ignore files read from the filesystem root, in order
IGNORE_FILE_NAMES: Tuple[str, ...] = (".gitignore", ".aiignore")

# Keys selected by default for filesystem consumers
DEFAULT_SELECTED_FILES: List[str] = _get_list(os.getenv("DEFAULT_SELECTED_FILES"))

TEXT_ENCODING: str = "utf-8"

# One key under a prefix is enough to prove a directory exists
DIRECTORY_PROBE_MAX_KEYS: int = 1

# =============================================================================
# LOGGING
# =============================================================================

SDK_LOG_LEVEL: str = os.getenv("SDK_LOG_LEVEL", "WARNING")
SDK_LOGGERS: Tuple[str, ...] = (
    "botocore",
    "botocore.credentials",
    "boto3",
    "aioboto3",
    "aiobotocore",
    "urllib3",
)
