"""
Tests for building the AWS service and S3 filesystem from configuration.
"""

import os
import sys
import unittest
from unittest.mock import Mock, patch

# Add the parent directory to Python path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from common.storage_factory import create_aws_service, create_filesystem
from filesystem.s3 import S3FileSystemService
from systems.aws import AWSService


class TestStorageFactory(unittest.TestCase):
    """Test cases for the storage factory."""

    def setUp(self):
        patcher = patch('systems.base.aioboto3.Session')
        self.mock_session_class = patcher.start()
        self.addCleanup(patcher.stop)

    @patch('common.storage_factory.AWS_REGION', 'eu-north-1')
    @patch('common.storage_factory.AWS_SECRET_ACCESS_KEY', 'secret')
    @patch('common.storage_factory.AWS_ACCESS_KEY_ID', 'AKIATEST')
    def test_create_aws_service_from_configuration(self):
        service = create_aws_service()
        self.assertIsInstance(service, AWSService)
        self.assertTrue(service.is_authenticated())
        self.assertEqual(service.region, 'eu-north-1')

    def test_create_aws_service_overrides(self):
        service = create_aws_service(
            access_key_id='AKIAOTHER',
            secret_access_key='other',
            region='us-east-1',
            endpoint_url='http://localhost:9000',
        )
        self.assertEqual(service.access_key_id, 'AKIAOTHER')
        self.assertEqual(service.region, 'us-east-1')
        self.assertEqual(service.endpoint_url, 'http://localhost:9000')

    def test_create_aws_service_without_credentials(self):
        with self.assertLogs('common.storage_factory', level='WARNING'):
            service = create_aws_service(access_key_id='', secret_access_key='', region='')
        self.assertFalse(service.is_authenticated())

    @patch('common.storage_factory.DEFAULT_SELECTED_FILES', ['README.md'])
    def test_create_filesystem(self):
        aws_service = Mock()
        fs = create_filesystem('my-bucket', aws_service=aws_service)
        self.assertIsInstance(fs, S3FileSystemService)
        self.assertEqual(fs.bucket_name, 'my-bucket')
        self.assertIs(fs.aws_service, aws_service)
        self.assertEqual(fs.default_selected_files, ['README.md'])

    @patch('common.storage_factory.BUCKET_NAME', 'configured-bucket')
    def test_create_filesystem_uses_configured_bucket(self):
        fs = create_filesystem()
        self.assertEqual(fs.bucket_name, 'configured-bucket')
        self.assertIsInstance(fs.aws_service, AWSService)

    @patch('common.storage_factory.BUCKET_NAME', '')
    def test_create_filesystem_requires_bucket(self):
        with self.assertRaises(ValueError):
            create_filesystem()


if __name__ == '__main__':
    unittest.main()
