"""
Data models for the email and secrets capabilities.

These immutable structures define the contracts between application code
and the capability values in ``aws_extras.services``.
"""

from dataclasses import dataclass
from typing import List, Optional, Union


@dataclass(frozen=True)
class TextBody:
    """A message containing only text content."""
    text: str


@dataclass(frozen=True)
class HtmlBody:
    """A message containing only HTML content."""
    html: str


@dataclass(frozen=True)
class CombinedBody:
    """
    A message containing both text and HTML content.

    Sending both parts supports the widest variety of email clients.

    Attributes:
        text: Plain text alternative
        html: HTML alternative
    """
    text: str
    html: str


Body = Union[TextBody, HtmlBody, CombinedBody]


@dataclass(frozen=True)
class EmailMessage:
    """
    An email ready to be handed to an ``EmailSender``.

    Attributes:
        recipients: Destination addresses, in order
        sender: Source address
        subject: Subject line
        body: Text, HTML or combined body
    """
    recipients: List[str]
    sender: str
    subject: str
    body: Body


@dataclass(frozen=True)
class RawSecret:
    """
    The structural shape shared by every secret result the vault returns.

    Secrets Manager answers ``GetSecretValue`` and ``BatchGetSecretValue``
    with different records; both expose these four optional fields.

    Attributes:
        arn: ARN of the secret
        name: Friendly name of the secret
        secret_string: Decrypted value if it was stored as a string
        secret_binary: Decrypted value if it was stored as binary data
    """
    arn: Optional[str] = None
    name: Optional[str] = None
    secret_string: Optional[str] = None
    secret_binary: Optional[bytes] = None


@dataclass(frozen=True)
class Secret:
    """
    A validated secret stored by AWS Secrets Manager.

    The type of ``value`` tells which payload the secret carries: ``str`` for
    secrets stored as strings (including console-created JSON secrets),
    ``bytes`` for secrets stored as binary data.

    Attributes:
        arn: ARN of the secret
        name: Friendly name of the secret
        value: Decrypted secret value
    """
    arn: str
    name: str
    value: Union[str, bytes]

    @property
    def is_binary(self) -> bool:
        """Check if the secret carries a binary payload."""
        return isinstance(self.value, bytes)

    def __repr__(self) -> str:
        """Representation for logging that never includes the payload."""
        kind = 'binary' if self.is_binary else 'string'
        return f"Secret(arn={self.arn}, name={self.name}, kind={kind})"
