"""Reissue request email composer.

Builds the plain-text body, the HTML body and the attachment list for one
submission. Label photos are shrunk for email; the original bytes are
attached when shrinking fails.
"""

import base64
import html
import logging
from datetime import datetime
from typing import List, Optional, Sequence

from src.dispatch.types import Attachment, OutboundMessage
from src.imaging.codec import ImageCodec
from src.intake.types import IntakeItem

from .config_loader import SubmissionModuleConfig
from .form import RequesterInfo

logger = logging.getLogger(__name__)

NOT_RECOGNIZED = "Not recognized"
QR_ATTACHMENT_NAME = "barcode_qr_code.png"

_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def build_subject(requester: RequesterInfo, prefix: str = "[Reissue Request]") -> str:
    """Subject line, e.g. ``[Reissue Request] A1234/Jane Doe``."""
    return f"{prefix} {requester.employee_id}/{requester.name}"


def attachment_filename(position: int, code: Optional[str]) -> str:
    """Attachment filename for the item at 1-based ``position``."""
    return f"barcode_{position}_{code or 'unknown'}.jpg"


def build_text_body(
    requester: RequesterInfo,
    items: Sequence[IntakeItem],
    sent_at: datetime,
) -> str:
    """Plain-text body of the request email."""
    codes = [item.code for item in items if item.is_recognized()]

    lines = [
        "Reissue Request",
        "",
        f"Employee ID: {requester.employee_id}",
        f"Name: {requester.name}",
        f"Email: {requester.email}",
        f"Sent at: {sent_at.strftime(_TIME_FORMAT)}",
        "",
        f"Label codes ({len(items)} images, {len(codes)} recognized):",
    ]
    for position, item in enumerate(items, start=1):
        lines.append(f"{position}. {item.code or NOT_RECOGNIZED}")

    if codes:
        lines += ["", "All codes:"]
        lines += codes

    return "\n".join(lines) + "\n"


def build_html_body(
    requester: RequesterInfo,
    items: Sequence[IntakeItem],
    sent_at: datetime,
    qr_png: Optional[bytes] = None,
) -> str:
    """HTML body of the request email, with the QR code embedded inline."""
    esc = html.escape
    codes = [item.code for item in items if item.is_recognized()]

    rows = []
    for item in items:
        if item.is_recognized():
            rows.append(f"<li><code>{esc(item.code)}</code></li>")
        else:
            rows.append(f'<li><span style="color:#999">{NOT_RECOGNIZED}</span></li>')

    parts = [
        "<html><body>",
        "<h2>Reissue Request</h2>",
        "<table>",
        f"<tr><th align=\"left\">Employee ID</th><td>{esc(requester.employee_id)}</td></tr>",
        f"<tr><th align=\"left\">Name</th><td>{esc(requester.name)}</td></tr>",
        f"<tr><th align=\"left\">Email</th><td>{esc(requester.email)}</td></tr>",
        f"<tr><th align=\"left\">Sent at</th><td>{sent_at.strftime(_TIME_FORMAT)}</td></tr>",
        "</table>",
        f"<h3>Label codes ({len(items)} images, {len(codes)} recognized)</h3>",
        "<ol>",
        *rows,
        "</ol>",
    ]

    if codes:
        parts += [
            "<h3>All codes</h3>",
            f"<pre>{esc(chr(10).join(codes))}</pre>",
        ]

    if qr_png:
        encoded = base64.b64encode(qr_png).decode("ascii")
        parts += [
            "<h3>QR code</h3>",
            f'<img src="data:image/png;base64,{encoded}" alt="QR code of all label codes">',
        ]

    parts.append("</body></html>")
    return "\n".join(parts)


def build_attachments(
    items: Sequence[IntakeItem],
    codec: ImageCodec,
    config: SubmissionModuleConfig,
    qr_png: Optional[bytes] = None,
) -> List[Attachment]:
    """Shrunk label photos in list order, then the QR image if present."""
    settings = config.attachments
    attachments = []

    for position, item in enumerate(items, start=1):
        content = codec.compress_or_original(
            item.image_ref.data,
            max_width=settings.max_width,
            max_height=settings.max_height,
            quality=settings.jpeg_quality,
        )
        attachments.append(
            Attachment(
                filename=attachment_filename(position, item.code),
                content_type="image/jpeg",
                content=content,
            )
        )

    if qr_png:
        attachments.append(
            Attachment(filename=QR_ATTACHMENT_NAME, content_type="image/png", content=qr_png)
        )

    return attachments


def compose_message(
    requester: RequesterInfo,
    items: Sequence[IntakeItem],
    qr_png: Optional[bytes],
    codec: ImageCodec,
    config: SubmissionModuleConfig,
    sent_at: Optional[datetime] = None,
) -> OutboundMessage:
    """Compose the reissue request email.

    Args:
        requester: Validated requester
        items: Intake list snapshot, in list order
        qr_png: Rendered QR code, or None to send without one
        codec: Codec used to shrink attachments
        config: Submission settings
        sent_at: Send time shown in the body. Defaults to now (local time).

    Returns:
        OutboundMessage addressed to the requester.
    """
    if sent_at is None:
        sent_at = datetime.now()

    message = OutboundMessage(
        subject=build_subject(requester, config.subject_prefix),
        recipient=requester.email,
        text_body=build_text_body(requester, items, sent_at),
        html_body=build_html_body(requester, items, sent_at, qr_png),
        attachments=build_attachments(items, codec, config, qr_png),
    )

    logger.debug(
        f"Composed '{message.subject}': {len(message.attachments)} attachments, "
        f"{round(message.attachment_bytes / 1024)}KB"
    )
    return message
