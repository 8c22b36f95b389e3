"""
Async base class for cloud services backed by an aioboto3 session.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

import aioboto3
from botocore.config import Config

from configuration import (
    CONNECT_TIMEOUT_SECONDS,
    READ_TIMEOUT_SECONDS,
    MAX_POOL_CONNECTIONS,
    MAX_ATTEMPTS,
    RETRY_MODE,
    ADDRESSING_STYLE,
)

logger = logging.getLogger(__name__)


class CloudService:
    """Holds a credential bundle and lazily creates one client per service.

    Clients are entered on first use and cached for the lifetime of the
    service. Call ``close()`` (or use the service as an async context
    manager) to release their connection pools.
    """

    def __init__(
        self,
        access_key_id: str,
        secret_access_key: str,
        region: str,
        session_token: Optional[str] = None,
    ):
        self.access_key_id = access_key_id
        self.secret_access_key = secret_access_key
        self.session_token = session_token
        self.region = region

        # Single source of truth for config
        self._config = self._create_config()

        self.session = aioboto3.Session(
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
            aws_session_token=session_token,
            region_name=region or None,
        )

        self._clients: Dict[str, Any] = {}
        self._client_contexts: Dict[str, Any] = {}
        self._client_lock = asyncio.Lock()

    def _create_config(self) -> Config:
        """Create the botocore config shared by every client of this service."""
        return Config(
            max_pool_connections=MAX_POOL_CONNECTIONS,
            connect_timeout=CONNECT_TIMEOUT_SECONDS,
            read_timeout=READ_TIMEOUT_SECONDS,
            retries={
                'max_attempts': MAX_ATTEMPTS,
                'mode': RETRY_MODE,
            },
            s3={
                'addressing_style': ADDRESSING_STYLE,
            },
        )

    def _client_kwargs(self, service_name: str) -> Dict[str, Any]:
        """Extra keyword arguments for ``session.client``; subclasses extend."""
        return {}

    async def get_client(self, service_name: str):
        """Return the cached client for ``service_name``, creating it once.

        Args:
            service_name: botocore service name, e.g. 's3' or 'sts'

        Returns:
            The entered aiobotocore client
        """
        client = self._clients.get(service_name)
        if client is not None:
            return client

        async with self._client_lock:
            # Another task may have created it while we waited
            client = self._clients.get(service_name)
            if client is None:
                context = self.session.client(
                    service_name,
                    config=self._config,
                    **self._client_kwargs(service_name),
                )
                client = await context.__aenter__()
                self._client_contexts[service_name] = context
                self._clients[service_name] = client
                logger.info(f"Created {service_name} client for region {self.region or '<unset>'}")
        return client

    async def close(self) -> None:
        """Close every cached client."""
        async with self._client_lock:
            contexts = list(self._client_contexts.items())
            self._client_contexts.clear()
            self._clients.clear()

        for service_name, context in contexts:
            try:
                await context.__aexit__(None, None, None)
            except Exception as e:
                logger.error(f"Failed to close {service_name} client: {e}")
                continue
            logger.debug(f"Closed {service_name} client")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
