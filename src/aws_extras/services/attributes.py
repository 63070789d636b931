"""
Attribute maps for DynamoDB items.

An attribute map is a ``dict`` from attribute name to a tagged attribute value
in the low-level DynamoDB shape that boto3 clients accept, for example
``{'S': 'text'}``, ``{'BOOL': True}`` or ``{'B': b'...'}``.

This module provides:
- Constructors for tagged attribute values
- Key normalization for table attribute names
- The ``AttributeValueConvertible`` protocol implemented by domain types
- Attribute modifiers, composable transforms applied before an item is written
"""

import re
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Protocol, Union, runtime_checkable

from boto3.dynamodb.types import TypeSerializer

from aws_extras.services.timestamp import TimestampProvider

AttributeValue = Dict[str, Any]
AttributeMap = Dict[str, AttributeValue]
AttributeModifier = Callable[[AttributeMap], AttributeMap]

_serializer = TypeSerializer()


# ============================================================================
# Attribute Values
# ============================================================================

def s(value: Union[str, Enum]) -> AttributeValue:
    """
    Return a string attribute.

    String-valued enum members are stored by their value.

    Example:
        >>> s("string")
        {'S': 'string'}
    """
    if isinstance(value, Enum):
        value = value.value
    if not isinstance(value, str):
        raise TypeError(f"String attribute requires str, got: {type(value).__name__}")
    return {'S': value}


def n(value: Union[int, float, str]) -> AttributeValue:
    """Return a number attribute. DynamoDB transmits numbers as strings."""
    if isinstance(value, bool):
        raise TypeError("Number attribute does not accept bool, use boolean()")
    return {'N': str(value)}


def boolean(value: bool) -> AttributeValue:
    """Return a boolean attribute."""
    return {'BOOL': bool(value)}


def b(value: bytes) -> AttributeValue:
    """Return a binary attribute."""
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise TypeError(f"Binary attribute requires bytes, got: {type(value).__name__}")
    return {'B': bytes(value)}


def null() -> AttributeValue:
    """Return a null attribute."""
    return {'NULL': True}


def serialize(value: Any) -> AttributeValue:
    """
    Return the attribute for an arbitrary Python value.

    Delegates to boto3's ``TypeSerializer``, so lists, maps, sets and
    ``Decimal`` numbers are supported. Floats must be passed as ``Decimal``.
    """
    return _serializer.serialize(value)


# ============================================================================
# Attribute Names
# ============================================================================

def attribute_name(key: str) -> str:
    """
    Convert a field name into a table attribute name.

    Snake case and camel case keys both map to an upper camel case name.

    Example:
        >>> attribute_name("bool")
        'Bool'
        >>> attribute_name("created_at")
        'CreatedAt'
        >>> attribute_name("createdAt")
        'CreatedAt'
    """
    parts = [part for part in re.split(r'_+', key) if part]
    return ''.join(part[:1].upper() + part[1:] for part in parts)


def attribute_values(values: Mapping[Union[str, Enum], AttributeValue]) -> AttributeMap:
    """
    Build an attribute map keyed by table attribute names.

    Args:
        values: Mapping of field names (or enum members naming fields) to attributes

    Returns:
        A new attribute map

    Raises:
        ValueError: If two keys map to the same attribute name
    """
    result: AttributeMap = {}
    for key, value in values.items():
        if isinstance(key, Enum):
            key = key.value
        name = attribute_name(key)
        if name in result:
            raise ValueError(f"Duplicate attribute name: {name}")
        result[name] = value
    return result


@runtime_checkable
class AttributeValueConvertible(Protocol):
    """
    A type that may be represented as an attribute map.

    ``attributes`` must build a new map on every access and must not depend
    on anything but the instance itself.
    """

    @property
    def attributes(self) -> AttributeMap:
        ...


# ============================================================================
# Attribute Modifiers
# ============================================================================

def identity_modifier(attributes: AttributeMap) -> AttributeMap:
    """Return the attributes unchanged."""
    return attributes


def merging(extra: Mapping[str, AttributeValue]) -> AttributeModifier:
    """
    Return a modifier merging ``extra`` into every map it receives.

    Keys from ``extra`` replace keys already present in the map.
    """
    def modifier(attributes: AttributeMap) -> AttributeMap:
        return {**attributes, **extra}

    return modifier


def adding_timestamp(name: str, timestamp_provider: TimestampProvider) -> AttributeModifier:
    """
    Return a modifier adding a string attribute holding the current timestamp.

    The timestamp is read when the modifier is applied and replaces any value
    the map already holds under ``name``.

    Args:
        name: Name of the timestamp attribute (e.g. "CreatedAt")
        timestamp_provider: Source of the formatted timestamp

    Returns:
        An attribute modifier
    """
    def modifier(attributes: AttributeMap) -> AttributeMap:
        return {**attributes, name: s(timestamp_provider.timestamp())}

    return modifier


def compose(*modifiers: AttributeModifier) -> AttributeModifier:
    """
    Return a modifier applying ``modifiers`` in the given order.

    With no modifiers the result behaves like ``identity_modifier``.
    """
    def modifier(attributes: AttributeMap) -> AttributeMap:
        for apply in modifiers:
            attributes = apply(attributes)
        return attributes

    return modifier
