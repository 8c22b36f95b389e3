"""
AWS credential provider with lazily created S3 and STS clients.
"""

import logging
from typing import Any, Dict, List, Optional

from systems.base import CloudService

logger = logging.getLogger(__name__)


class AWSService(CloudService):
    """AWS access key, secret, optional session token and region.

    Hands out cached S3 and STS clients and performs the identity check
    used to report authentication status.
    """

    name = "AWSService"
    description = "Provides AWS functionality"

    def __init__(
        self,
        access_key_id: str,
        secret_access_key: str,
        region: str,
        session_token: Optional[str] = None,
        endpoint_url: Optional[str] = None,
    ):
        super().__init__(
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
            region=region,
            session_token=session_token,
        )
        self.endpoint_url = endpoint_url
        logger.info(f"Initialized AWS service (region={region or '<unset>'})")

    def _client_kwargs(self, service_name: str) -> Dict[str, Any]:
        # The custom endpoint only applies to S3-compatible stores
        if service_name == "s3" and self.endpoint_url:
            return {"endpoint_url": self.endpoint_url}
        return {}

    def is_authenticated(self) -> bool:
        """Check that access key, secret and region are configured."""
        return bool(self.access_key_id and self.secret_access_key and self.region)

    async def get_s3_client(self):
        """Get or create the S3 client."""
        return await self.get_client("s3")

    async def get_sts_client(self):
        """Get or create the STS client."""
        return await self.get_client("sts")

    async def get_caller_identity(self) -> Dict[str, Optional[str]]:
        """Retrieve the caller identity using AWS STS.

        Returns:
            Dictionary with 'Arn', 'Account' and 'UserId'

        Raises:
            RuntimeError: If credentials are not configured
        """
        if not self.is_authenticated():
            raise RuntimeError("AWS credentials are not configured.")

        sts_client = await self.get_sts_client()
        try:
            response = await sts_client.get_caller_identity()
        except Exception as e:
            logger.error(f"Error getting caller identity: {e}")
            raise

        return {
            "Arn": response.get("Arn"),
            "Account": response.get("Account"),
            "UserId": response.get("UserId"),
        }

    async def list_buckets(self) -> List[Dict[str, Any]]:
        """List all S3 buckets visible to the configured account.

        Returns:
            List of dictionaries with 'Name' and 'CreationDate'

        Raises:
            RuntimeError: If credentials are not configured
        """
        if not self.is_authenticated():
            raise RuntimeError("AWS credentials are not configured.")

        s3_client = await self.get_s3_client()
        response = await s3_client.list_buckets()
        return [
            {"Name": bucket.get("Name"), "CreationDate": bucket.get("CreationDate")}
            for bucket in response.get("Buckets", [])
        ]

    async def start(self) -> bool:
        """Start the service and verify the credentials.

        Returns:
            True if the identity check succeeded, False otherwise
        """
        logger.info("AWSService starting")
        try:
            identity = await self.get_caller_identity()
        except Exception as e:
            logger.error(f"AWSService failed to start: {e}")
            return False

        logger.info(f"AWS authentication successful: {identity}")
        return True

    async def stop(self) -> None:
        """Stop the service and release cached clients."""
        logger.info("AWSService stopping")
        await self.close()

    async def status(self) -> Dict[str, Any]:
        """Report whether the service is active and authenticated."""
        try:
            identity = await self.get_caller_identity()
        except Exception as e:
            return {
                "active": False,
                "service": self.name,
                "authenticated": False,
                "error": str(e),
            }

        return {
            "active": True,
            "service": self.name,
            "authenticated": True,
            "account_info": identity,
        }
