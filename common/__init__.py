"""
Common utilities for the S3 filesystem adapter.
"""

from .storage_factory import create_aws_service, create_filesystem

__all__ = ['create_aws_service', 'create_filesystem']
