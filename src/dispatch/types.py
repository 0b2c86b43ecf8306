"""Type definitions for the mail dispatch module."""

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class Attachment:
    """One email attachment.

    Attributes:
        filename: Attachment filename shown to the recipient
        content_type: MIME type (e.g., "image/jpeg")
        content: Raw attachment bytes
    """

    filename: str
    content_type: str
    content: bytes

    @property
    def maintype(self) -> str:
        """MIME main type (e.g., "image")."""
        return self.content_type.split("/", 1)[0]

    @property
    def subtype(self) -> str:
        """MIME subtype (e.g., "jpeg")."""
        parts = self.content_type.split("/", 1)
        return parts[1] if len(parts) == 2 else "octet-stream"


@dataclass
class OutboundMessage:
    """Structured outbound email.

    Attributes:
        subject: Subject line
        recipient: Recipient address
        text_body: Plain-text body
        html_body: HTML body
        attachments: Attachments in display order
    """

    subject: str
    recipient: str
    text_body: str
    html_body: str
    attachments: List[Attachment] = field(default_factory=list)

    @property
    def attachment_bytes(self) -> int:
        """Total size of all attachments in bytes."""
        return sum(len(a.content) for a in self.attachments)


@dataclass(frozen=True)
class DispatchResult:
    """Successful dispatch receipt.

    Attributes:
        message_id: Message-ID header of the sent email
        recipient: Recipient address
    """

    message_id: str
    recipient: str
