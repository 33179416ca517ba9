from __future__ import annotations

from typing import TYPE_CHECKING, Any

import botocore.exceptions

from .errors import ProviderError

if TYPE_CHECKING:
    import boto3


def create_client(session: boto3.session.Session, service_name: str) -> Any:
    """Create AWS service client from the session.

    Raises:
        ProviderError: If the client cannot be created; e.g. no region configured.
    """
    try:
        return session.client(service_name)  # type: ignore[call-overload]
    except botocore.exceptions.BotoCoreError as err:
        msg = f"Failed to create AWS {service_name} client: {err}"
        raise ProviderError(msg) from err
