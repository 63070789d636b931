"""
Email delivery through Amazon SES.

``EmailSender`` is a capability value holding a single ``send`` operation;
``EmailSenderFactory`` defers its construction so application code never
knows whether it talks to SES or to a fake.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional

from aws_extras.domain.models import Body, CombinedBody, EmailMessage, HtmlBody, TextBody
from aws_extras.integrations import aws_clients

logger = logging.getLogger(__name__)

Send = Callable[[List[str], str, str, Body], Awaitable[Optional[str]]]


def ses_body(body: Body) -> Dict[str, Any]:
    """
    Convert a message body into the SES ``Message.Body`` structure.

    Args:
        body: Text, HTML or combined body

    Returns:
        Dict with 'Text' and/or 'Html' content

    Example:
        >>> ses_body(CombinedBody(text="Hi", html="<p>Hi</p>"))
        {'Text': {'Data': 'Hi'}, 'Html': {'Data': '<p>Hi</p>'}}
    """
    if isinstance(body, TextBody):
        return {'Text': {'Data': body.text}}
    if isinstance(body, HtmlBody):
        return {'Html': {'Data': body.html}}
    if isinstance(body, CombinedBody):
        return {
            'Text': {'Data': body.text},
            'Html': {'Data': body.html}
        }
    raise TypeError(f"Unsupported email body: {type(body).__name__}")


@dataclass(frozen=True)
class EmailSender:
    """
    Sends emails.

    Attributes:
        send: Async callable taking recipients, sender, subject and body and
            returning the message ID assigned by the provider, if any
    """
    send: Send

    async def send_message(self, message: EmailMessage) -> Optional[str]:
        """
        Send a prepared message.

        Args:
            message: The message to send

        Returns:
            The message ID, if the provider returned one
        """
        return await self.send(message.recipients, message.sender, message.subject, message.body)

    @classmethod
    def live(cls, ses_client) -> 'EmailSender':
        """
        Return an instance sending through SES.

        Args:
            ses_client: boto3 SES client

        Returns:
            EmailSender: The live instance
        """
        async def send(recipients: List[str], sender: str, subject: str, body: Body) -> Optional[str]:
            logger.info(f"Sending email: recipients={len(recipients)}, subject_length={len(subject)}")

            response = await asyncio.to_thread(
                ses_client.send_email,
                Source=sender,
                Destination={'ToAddresses': list(recipients)},
                Message={
                    'Subject': {'Data': subject},
                    'Body': ses_body(body)
                }
            )

            message_id = response.get('MessageId')
            logger.info(f"Email sent: message_id={message_id}")
            return message_id

        return cls(send=send)


@dataclass(frozen=True)
class EmailSenderFactory:
    """
    Creates ``EmailSender`` instances.

    Attributes:
        make: Async callable taking an optional region
    """
    make: Callable[[Optional[str]], Awaitable[EmailSender]]

    @classmethod
    def live(cls) -> 'EmailSenderFactory':
        """Return a factory creating SES-backed senders, one client per call."""
        async def make(region: Optional[str] = None) -> EmailSender:
            client = await asyncio.to_thread(aws_clients.create_client, 'ses', region)
            return EmailSender.live(client)

        return cls(make=make)
