"""
Persistence of domain values as DynamoDB items.

``Persistence`` is a capability value: its ``put_item`` operation and its
attribute modifier are plain callables that may be replaced independently.
``PersistenceFactory`` defers construction so callers choose between the
live DynamoDB-backed implementation and a fake.

Usage:
    from aws_extras.services.persistence import PersistenceFactory

    persistence = await PersistenceFactory.live().make('us-east-1', 'Contacts')
    await persistence.put(contact)
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from aws_extras.integrations import aws_clients
from aws_extras.services import attributes as attribute_service
from aws_extras.services.attributes import (
    AttributeMap,
    AttributeModifier,
    AttributeValueConvertible,
    identity_modifier,
)
from aws_extras.services.timestamp import TimestampProvider

logger = logging.getLogger(__name__)

PutItem = Callable[[AttributeMap], Awaitable[None]]


@dataclass(frozen=True)
class Persistence:
    """
    Persists collections of attributes.

    Attributes:
        put_item: Creates a new item or replaces an old item with a new one
        attribute_modifier: Applied to the attributes of every persisted value,
            e.g. to add a timestamp or validate all items
    """
    put_item: PutItem
    attribute_modifier: AttributeModifier = identity_modifier

    async def put(self, value: AttributeValueConvertible) -> None:
        """
        Persist the given value.

        Conversion, modification and write run strictly in that order. If the
        conversion or the modifier raises, the item is never written.

        Args:
            value: The value to persist
        """
        item = self.attribute_modifier(value.attributes)
        await self.put_item(item)

    @classmethod
    def adding_timestamp(
        cls,
        name: str,
        timestamp_provider: TimestampProvider,
        put_item: PutItem
    ) -> 'Persistence':
        """
        Return an instance adding a timestamp attribute to every persisted value.

        Args:
            name: Name of the timestamp attribute
            timestamp_provider: A timestamp provider
            put_item: Persists item attributes

        Returns:
            Persistence: The configured instance
        """
        return cls(
            put_item=put_item,
            attribute_modifier=attribute_service.adding_timestamp(name, timestamp_provider)
        )

    @classmethod
    def live(
        cls,
        dynamodb_client,
        table_name: str,
        attribute_modifier: AttributeModifier = identity_modifier
    ) -> 'Persistence':
        """
        Return an instance writing to a DynamoDB table.

        Args:
            dynamodb_client: boto3 DynamoDB client
            table_name: Name of the table
            attribute_modifier: Modifier applied to all persisted values

        Returns:
            Persistence: The live instance
        """
        async def put_item(item: AttributeMap) -> None:
            logger.debug(f"Putting item: table={table_name}, attributes={sorted(item)}")
            await asyncio.to_thread(
                dynamodb_client.put_item,
                TableName=table_name,
                Item=item
            )

        return cls(put_item=put_item, attribute_modifier=attribute_modifier)


@dataclass(frozen=True)
class PersistenceFactory:
    """
    Creates ``Persistence`` instances.

    Attributes:
        make: Async callable taking a region and a table name
    """
    make: Callable[[Optional[str], str], Awaitable[Persistence]]

    @classmethod
    def live(cls, attribute_modifier: AttributeModifier = identity_modifier) -> 'PersistenceFactory':
        """
        Return a factory creating DynamoDB-backed instances.

        Each call to ``make`` builds its own DynamoDB client.

        Args:
            attribute_modifier: Modifier applied to all persisted values
        """
        async def make(region: Optional[str], table_name: str) -> Persistence:
            client = await asyncio.to_thread(aws_clients.create_client, 'dynamodb', region)
            logger.info(f"Persistence ready: table={table_name}")
            return Persistence.live(client, table_name, attribute_modifier)

        return cls(make=make)
