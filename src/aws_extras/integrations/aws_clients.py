"""
boto3 client construction for the live capability implementations.

Every live factory invocation builds its client here, from a fresh
``boto3.session.Session`` so that factory calls never share client state.

Usage:
    from aws_extras.integrations import aws_clients

    ses_client = aws_clients.create_client('ses', region='us-east-1')
"""

import logging
import os
from typing import Optional

import boto3
from botocore.config import Config

from aws_extras.domain.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONNECT_TIMEOUT = 10
DEFAULT_READ_TIMEOUT = 60
DEFAULT_MAX_ATTEMPTS = 3


# ============================================================================
# Configuration
# ============================================================================

def _read_int(name: str, default: int) -> int:
    """
    Read a non-negative integer from the environment.

    Args:
        name: Environment variable name
        default: Value used when the variable is unset or empty

    Returns:
        int: The configured value

    Raises:
        ConfigurationError: If the variable is not a non-negative integer
    """
    raw = os.environ.get(name, '')
    if not raw:
        return default

    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got: '{raw}'")

    if value < 0:
        raise ConfigurationError(f"{name} must not be negative, got: {value}")
    return value


def default_region() -> Optional[str]:
    """
    Region used when a factory is invoked without one.

    Returns:
        AWS_REGION, else AWS_DEFAULT_REGION, else None (boto3 then falls back
        to its own configuration chain)
    """
    return os.environ.get('AWS_REGION') or os.environ.get('AWS_DEFAULT_REGION') or None


def client_config() -> Config:
    """
    Build the botocore client configuration from the environment.

    Timeouts and retries are owned by the botocore client; callers of the
    capability values never retry on their own.

    Returns:
        Config: Client configuration with timeouts and retry policy
    """
    return Config(
        retries={
            'max_attempts': _read_int('AWS_MAX_ATTEMPTS', DEFAULT_MAX_ATTEMPTS),
            'mode': 'standard'
        },
        connect_timeout=_read_int('AWS_CONNECT_TIMEOUT', DEFAULT_CONNECT_TIMEOUT),
        read_timeout=_read_int('AWS_READ_TIMEOUT', DEFAULT_READ_TIMEOUT)
    )


# ============================================================================
# Client Construction
# ============================================================================

def create_client(service_name: str, region: Optional[str] = None):
    """
    Create a boto3 low-level client for the given service.

    Args:
        service_name: boto3 service name (e.g. 'ses', 'dynamodb', 'secretsmanager')
        region: AWS region; falls back to ``default_region()`` when None

    Returns:
        boto3 client for the service

    Raises:
        ConfigurationError: If the timeout/retry environment is invalid
        BotoCoreError: If boto3 cannot build the client (e.g. unknown region)
    """
    region = region or default_region()
    config = client_config()
    # botocore rewrites the retries dict when building the client
    max_attempts = config.retries['max_attempts']

    session = boto3.session.Session()
    client = session.client(service_name, region_name=region, config=config)

    logger.info(
        f"{service_name} client initialized: region={client.meta.region_name}, "
        f"connect_timeout={config.connect_timeout}s, "
        f"read_timeout={config.read_timeout}s, "
        f"max_attempts={max_attempts}"
    )
    return client
