"""
Cloud credential providers.
"""

from .base import CloudService
from .aws import AWSService

__all__ = ['CloudService', 'AWSService']
