"""AWS API provisioner pointed at the local emulator (aioboto3).

Credentials, region and endpoint come from `AppSettings` and are handed to
the session explicitly; `os.environ` is never modified.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import aioboto3

from core.config import AppSettings
from core.interfaces.provisioner import Provisioner

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmulatorCredentials:
    endpoint_url: str
    region_name: str
    aws_access_key_id: str
    aws_secret_access_key: str

    @staticmethod
    def from_settings(settings: AppSettings) -> "EmulatorCredentials":
        return EmulatorCredentials(
            endpoint_url=settings.localstack_url,
            region_name=settings.aws_region,
            aws_access_key_id=settings.aws_access_key_id,
            aws_secret_access_key=settings.aws_secret_access_key,
        )


class AwsEmulatorProvisioner(Provisioner):
    """Runs `<service>.<operation>(**params)` through an aioboto3 client."""

    def __init__(self, credentials: EmulatorCredentials, *, session: Any | None = None) -> None:
        self._credentials = credentials
        self._session = session or aioboto3.Session(
            aws_access_key_id=credentials.aws_access_key_id,
            aws_secret_access_key=credentials.aws_secret_access_key,
            region_name=credentials.region_name,
        )

    def _client(self, service: str) -> Any:
        return self._session.client(
            service,
            endpoint_url=self._credentials.endpoint_url,
            region_name=self._credentials.region_name,
        )

    async def execute(self, service: str, operation: str, params: dict[str, Any]) -> Any:
        logger.debug("aws %s %s %s", service, operation, params)
        client_cm: Any = self._client(service)
        async with client_cm as client:
            method = getattr(client, operation, None)
            if method is None:
                raise ValueError(f"Unknown operation for {service}: {operation}")
            response = await method(**params)

        if isinstance(response, dict):
            response.pop("ResponseMetadata", None)
        return response
