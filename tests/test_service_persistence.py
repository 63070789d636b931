"""
Tests for the persistence capability.
"""

import dataclasses
from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError

from aws_extras.services import attributes
from aws_extras.services.persistence import Persistence, PersistenceFactory


@dataclasses.dataclass
class Model:
    bool: bool
    string: str

    @property
    def attributes(self):
        return attributes.attribute_values({
            'bool': attributes.boolean(self.bool),
            'string': attributes.s(self.string),
        })


class FailingModel:
    @property
    def attributes(self):
        raise ValueError("cannot convert")


class TestPersistence:
    """Test Persistence.put pipeline."""

    @pytest.mark.asyncio
    async def test_put_adds_timestamp(self, epoch_timestamp_provider, recording_put_item, recorded_items):
        """Test that the converted and stamped item reaches put_item."""
        sut = Persistence.adding_timestamp('CreatedAt', epoch_timestamp_provider, recording_put_item)

        await sut.put(Model(bool=True, string="string"))

        assert recorded_items == [{
            'Bool': {'BOOL': True},
            'CreatedAt': {'S': '1970-01-01T00:00:00Z'},
            'String': {'S': 'string'},
        }]

    @pytest.mark.asyncio
    async def test_put_without_modifier(self, recording_put_item, recorded_items):
        """Test that the default modifier passes the converted item through."""
        sut = Persistence(put_item=recording_put_item)

        await sut.put(Model(bool=False, string="x"))

        assert recorded_items == [{'Bool': {'BOOL': False}, 'String': {'S': 'x'}}]

    @pytest.mark.asyncio
    async def test_modifier_failure_skips_write(self, recording_put_item, recorded_items):
        """Test that put_item is never called when the modifier raises."""
        def reject(item):
            raise ValueError("invalid item")

        sut = Persistence(put_item=recording_put_item, attribute_modifier=reject)

        with pytest.raises(ValueError, match="invalid item"):
            await sut.put(Model(bool=True, string="string"))

        assert recorded_items == []

    @pytest.mark.asyncio
    async def test_conversion_failure_skips_write(self, recording_put_item, recorded_items):
        """Test that put_item is never called when conversion raises."""
        sut = Persistence(put_item=recording_put_item)

        with pytest.raises(ValueError, match="cannot convert"):
            await sut.put(FailingModel())

        assert recorded_items == []

    @pytest.mark.asyncio
    async def test_put_item_error_propagates(self):
        """Test that write failures reach the caller unchanged."""
        error = ClientError({'Error': {'Code': 'ProvisionedThroughputExceededException'}}, 'PutItem')

        async def put_item(item):
            raise error

        with pytest.raises(ClientError) as exc_info:
            await Persistence(put_item=put_item).put(Model(bool=True, string="s"))

        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_replace_single_operation(self, epoch_timestamp_provider, recording_put_item, recorded_items):
        """Test substituting put_item while keeping the modifier."""
        async def unused(item):
            raise AssertionError("original put_item must not be called")

        original = Persistence.adding_timestamp('CreatedAt', epoch_timestamp_provider, unused)
        sut = dataclasses.replace(original, put_item=recording_put_item)

        await sut.put(Model(bool=True, string="string"))

        assert recorded_items[0]['CreatedAt'] == {'S': '1970-01-01T00:00:00Z'}


class TestLivePersistence:
    """Test the DynamoDB-backed implementation."""

    @pytest.mark.asyncio
    async def test_live_put_calls_dynamodb(self):
        """Test that put_item is forwarded to the DynamoDB client."""
        mock_client = MagicMock()
        sut = Persistence.live(mock_client, 'Contacts')

        await sut.put(Model(bool=True, string="string"))

        mock_client.put_item.assert_called_once_with(
            TableName='Contacts',
            Item={'Bool': {'BOOL': True}, 'String': {'S': 'string'}}
        )

    @pytest.mark.asyncio
    async def test_live_put_propagates_client_error(self):
        """Test that DynamoDB errors are not wrapped."""
        mock_client = MagicMock()
        mock_client.put_item.side_effect = ClientError(
            {'Error': {'Code': 'ResourceNotFoundException', 'Message': 'Table not found'}},
            'PutItem'
        )
        sut = Persistence.live(mock_client, 'Missing')

        with pytest.raises(ClientError, match='ResourceNotFoundException'):
            await sut.put(Model(bool=True, string="string"))


class TestPersistenceFactory:
    """Test PersistenceFactory."""

    @pytest.mark.asyncio
    async def test_fake_factory(self, recording_put_item, recorded_items):
        """Test that a factory can produce a fake instance."""
        async def make(region, table_name):
            return Persistence(put_item=recording_put_item)

        persistence = await PersistenceFactory(make=make).make('us-east-1', 'Table')
        await persistence.put(Model(bool=True, string="x"))

        assert len(recorded_items) == 1

    @pytest.mark.asyncio
    @patch('aws_extras.integrations.aws_clients.create_client')
    async def test_live_factory(self, mock_create_client, epoch_timestamp_provider):
        """Test that the live factory builds a client per call and applies the modifier."""
        first_client = MagicMock()
        second_client = MagicMock()
        mock_create_client.side_effect = [first_client, second_client]
        factory = PersistenceFactory.live(
            attribute_modifier=attributes.adding_timestamp('CreatedAt', epoch_timestamp_provider)
        )

        first = await factory.make('us-east-1', 'Contacts')
        second = await factory.make('eu-west-1', 'Orders')
        await first.put(Model(bool=True, string="string"))

        mock_create_client.assert_any_call('dynamodb', 'us-east-1')
        mock_create_client.assert_any_call('dynamodb', 'eu-west-1')
        first_client.put_item.assert_called_once_with(
            TableName='Contacts',
            Item={
                'Bool': {'BOOL': True},
                'String': {'S': 'string'},
                'CreatedAt': {'S': '1970-01-01T00:00:00Z'},
            }
        )
        second_client.put_item.assert_not_called()
        assert first is not second

    @pytest.mark.asyncio
    @patch('aws_extras.integrations.aws_clients.create_client')
    async def test_live_factory_propagates_construction_error(self, mock_create_client):
        """Test that client construction failures surface from make."""
        mock_create_client.side_effect = ValueError("bad region")

        with pytest.raises(ValueError, match="bad region"):
            await PersistenceFactory.live().make('nowhere', 'Contacts')

    @pytest.mark.asyncio
    async def test_live_factory_builds_real_client(self):
        """Test that the live factory builds an instance with a real DynamoDB client."""
        persistence = await PersistenceFactory.live().make('us-east-1', 'Contacts')

        assert isinstance(persistence, Persistence)
        assert persistence.attribute_modifier is attributes.identity_modifier
