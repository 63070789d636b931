"""
Secret retrieval from AWS Secrets Manager.

Secrets Manager returns secrets in two record shapes: the ``GetSecretValue``
response and the ``SecretValues`` entries of ``BatchGetSecretValue``. Each
shape has its own extraction function producing a ``RawSecret``; a single
``normalize`` routine validates it into a ``Secret``.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional

from aws_extras.domain.errors import MissingDataError, WrongSecretTypeError
from aws_extras.domain.models import RawSecret, Secret
from aws_extras.integrations import aws_clients

logger = logging.getLogger(__name__)


# ============================================================================
# Normalization
# ============================================================================

def from_get_secret_value(response: Mapping[str, Any]) -> RawSecret:
    """
    Extract the secret fields from a ``GetSecretValue`` response.

    Args:
        response: Response dict returned by ``client.get_secret_value``

    Returns:
        RawSecret: The four secret fields, each possibly None
    """
    return RawSecret(
        arn=response.get('ARN'),
        name=response.get('Name'),
        secret_string=response.get('SecretString'),
        secret_binary=response.get('SecretBinary')
    )


def from_secret_value_entry(entry: Mapping[str, Any]) -> RawSecret:
    """
    Extract the secret fields from a ``BatchGetSecretValue`` entry.

    Args:
        entry: One item of the response's ``SecretValues`` list

    Returns:
        RawSecret: The four secret fields, each possibly None
    """
    return RawSecret(
        arn=entry.get('ARN'),
        name=entry.get('Name'),
        secret_string=entry.get('SecretString'),
        secret_binary=entry.get('SecretBinary')
    )


def normalize(raw: RawSecret) -> Secret:
    """
    Validate a raw secret.

    The string payload takes priority over the binary payload. Empty values
    count as absent.

    Args:
        raw: Secret fields extracted from a vault response

    Returns:
        Secret: The validated secret

    Raises:
        MissingDataError: If the ARN, the name, or both payloads are missing
    """
    if not raw.arn:
        raise MissingDataError("The secret value is missing its ARN.")
    if not raw.name:
        raise MissingDataError("The secret value is missing its name.")

    if raw.secret_string:
        return Secret(arn=raw.arn, name=raw.name, value=raw.secret_string)
    if raw.secret_binary:
        return Secret(arn=raw.arn, name=raw.name, value=bytes(raw.secret_binary))

    raise MissingDataError()


# ============================================================================
# Capability
# ============================================================================

@dataclass(frozen=True)
class Secrets:
    """
    Retrieves secrets.

    Secret identifiers are ARNs or names.

    Attributes:
        string: Returns the secret string for an identifier
        data: Returns the secret binary for an identifier
        batch: Returns the secrets for a list of identifiers
    """
    string: Callable[[str], Awaitable[str]]
    data: Callable[[str], Awaitable[bytes]]
    batch: Callable[[List[str]], Awaitable[List[Secret]]]

    @classmethod
    def live(cls, client) -> 'Secrets':
        """
        Return an instance reading from Secrets Manager.

        Args:
            client: boto3 Secrets Manager client

        Returns:
            Secrets: The live instance
        """
        async def get_secret_value(secret_id: str) -> Dict[str, Any]:
            logger.debug(f"Getting secret value: secret_id={secret_id}")
            return await asyncio.to_thread(client.get_secret_value, SecretId=secret_id)

        async def string(secret_id: str) -> str:
            value = from_get_secret_value(await get_secret_value(secret_id)).secret_string
            if not value:
                raise WrongSecretTypeError()
            return value

        async def data(secret_id: str) -> bytes:
            value = from_get_secret_value(await get_secret_value(secret_id)).secret_binary
            if not value:
                raise WrongSecretTypeError()
            return value

        async def batch(secret_ids: List[str]) -> List[Secret]:
            secret_ids = list(secret_ids)
            if not secret_ids:
                return []

            secrets = []
            request = {'SecretIdList': secret_ids}
            while True:
                page = await asyncio.to_thread(client.batch_get_secret_value, **request)

                for error in page.get('Errors', []):
                    logger.warning(
                        f"Secret not returned: secret_id={error.get('SecretId')}, "
                        f"error_code={error.get('ErrorCode')}, "
                        f"error_message={error.get('Message')}"
                    )
                for entry in page.get('SecretValues', []):
                    secrets.append(normalize(from_secret_value_entry(entry)))

                next_token = page.get('NextToken')
                if not next_token:
                    break
                request = {'SecretIdList': secret_ids, 'NextToken': next_token}

            logger.info(f"Retrieved {len(secrets)} of {len(secret_ids)} secret(s)")
            return secrets

        return cls(string=string, data=data, batch=batch)


@dataclass(frozen=True)
class SecretsFactory:
    """
    Creates ``Secrets`` instances.

    Attributes:
        make: Async callable taking a region
    """
    make: Callable[[Optional[str]], Awaitable[Secrets]]

    @classmethod
    def live(cls) -> 'SecretsFactory':
        """Return a factory creating Secrets Manager-backed instances, one client per call."""
        async def make(region: Optional[str] = None) -> Secrets:
            client = await asyncio.to_thread(aws_clients.create_client, 'secretsmanager', region)
            return Secrets.live(client)

        return cls(make=make)
