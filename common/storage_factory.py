"""
Factory module for creating the AWS service and S3 filesystem instances.
"""

import logging
from typing import Optional

from configuration import (
    AWS_ACCESS_KEY_ID,
    AWS_SECRET_ACCESS_KEY,
    AWS_SESSION_TOKEN,
    AWS_REGION,
    S3_ENDPOINT,
    BUCKET_NAME,
    DEFAULT_SELECTED_FILES,
    SDK_LOG_LEVEL,
    SDK_LOGGERS,
)

# Quiet the SDK loggers before any client is created
for _name in SDK_LOGGERS:
    logging.getLogger(_name).setLevel(SDK_LOG_LEVEL)

from systems.aws import AWSService
from filesystem.s3 import S3FileSystemService

logger = logging.getLogger(__name__)


def create_aws_service(**overrides) -> AWSService:
    """Create an AWS service from configuration.

    Args:
        **overrides: Values replacing the configured access_key_id,
            secret_access_key, session_token, region or endpoint_url

    Returns:
        AWSService instance
    """
    settings = {
        "access_key_id": AWS_ACCESS_KEY_ID,
        "secret_access_key": AWS_SECRET_ACCESS_KEY,
        "session_token": AWS_SESSION_TOKEN,
        "region": AWS_REGION,
        "endpoint_url": S3_ENDPOINT,
    }
    settings.update(overrides)

    service = AWSService(**settings)
    if not service.is_authenticated():
        logger.warning("AWS credentials or region are not configured")
    return service


def create_filesystem(bucket_name: Optional[str] = None, aws_service: Optional[AWSService] = None) -> S3FileSystemService:
    """Create an S3 filesystem for a bucket.

    Args:
        bucket_name: Bucket to expose (default: BUCKET_NAME)
        aws_service: Credential provider to borrow the client from
            (default: a new one built from configuration)

    Returns:
        S3FileSystemService instance

    Raises:
        ValueError: If no bucket name is given or configured
    """
    bucket_name = bucket_name or BUCKET_NAME
    if not bucket_name:
        raise ValueError("No bucket configured. Pass bucket_name or set BUCKET_NAME.")

    if aws_service is None:
        aws_service = create_aws_service()

    return S3FileSystemService(
        bucket_name=bucket_name,
        aws_service=aws_service,
        default_selected_files=DEFAULT_SELECTED_FILES,
    )
