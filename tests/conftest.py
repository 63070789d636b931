"""
Pytest configuration and fixtures for all tests.
"""

import os
import sys
from datetime import datetime, timezone

import pytest

# Add src to Python path before any imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../src'))

# Set up test environment variables before importing any modules
os.environ.setdefault('AWS_DEFAULT_REGION', 'us-west-2')
os.environ.setdefault('AWS_ACCESS_KEY_ID', 'testing')
os.environ.setdefault('AWS_SECRET_ACCESS_KEY', 'testing')

from aws_extras.services.timestamp import TimestampProvider, iso8601  # noqa: E402

EPOCH = datetime.fromtimestamp(0, tz=timezone.utc)


@pytest.fixture
def epoch_timestamp_provider():
    """Timestamp provider whose clock is pinned to the Unix epoch."""
    return TimestampProvider(clock=lambda: EPOCH, formatter=iso8601)


@pytest.fixture
def recorded_items():
    """List collecting the items handed to a fake put_item operation."""
    return []


@pytest.fixture
def recording_put_item(recorded_items):
    """Fake put_item operation appending every item to ``recorded_items``."""
    async def put_item(item):
        recorded_items.append(item)

    return put_item
