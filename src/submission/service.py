"""Submission service: validate, render QR, compose and send.

Only a mail dispatch failure is terminal. A QR rendering failure is logged
and the email goes out without the QR code.
"""

import asyncio
import logging
from datetime import datetime
from typing import Optional, Sequence

from src.common.errors import QRRenderError
from src.dispatch.smtp import SMTPMailer
from src.dispatch.types import DispatchResult
from src.imaging.codec import ImageCodec
from src.imaging.qr import QRCodeRenderer
from src.intake.types import IntakeItem

from .composer import compose_message
from .config_loader import Config, get_default_config
from .form import RequesterInfo, validate_items

logger = logging.getLogger(__name__)


class SubmissionService:
    """Sends the accumulated intake list as a reissue request email.

    Args:
        mailer: Mail dispatch collaborator
        codec: Image codec for attachments (default: ImageCodec())
        qr_renderer: QR renderer (default: built from config)
        config: Submission configuration (default: bundled config.yaml)

    Example:
        >>> service = SubmissionService(mailer=SMTPMailer())
        >>> result = await service.submit(requester, intake_list.snapshot())
    """

    def __init__(
        self,
        mailer: SMTPMailer,
        codec: Optional[ImageCodec] = None,
        qr_renderer: Optional[QRCodeRenderer] = None,
        config: Optional[Config] = None,
    ):
        self.config = config if config is not None else get_default_config()
        self.mailer = mailer
        self.codec = codec if codec is not None else ImageCodec()

        qr_config = self.config.submission.qr
        if qr_renderer is None and qr_config.enabled:
            qr_renderer = QRCodeRenderer(width=qr_config.width, border=qr_config.border)
        self.qr_renderer = qr_renderer

    async def submit(
        self,
        requester: RequesterInfo,
        items: Sequence[IntakeItem],
        sent_at: Optional[datetime] = None,
    ) -> DispatchResult:
        """Validate and send one request.

        Args:
            requester: Validated requester
            items: Intake list snapshot
            sent_at: Send time shown in the email (default: now)

        Returns:
            DispatchResult of the sent email.

        Raises:
            SubmissionError: If the items cannot be submitted.
            MailDispatchError: If the email could not be sent.
            CollaboratorTimeout: If sending timed out.
        """
        items = list(items)
        validate_items(items)

        codes = [item.code for item in items if item.is_recognized()]
        qr_png = await self._render_qr(codes)

        message = await asyncio.to_thread(
            compose_message,
            requester,
            items,
            qr_png,
            self.codec,
            self.config.submission,
            sent_at,
        )

        logger.info(
            f"Submitting {len(items)} items ({len(codes)} recognized) "
            f"for {requester.employee_id} to {requester.email}"
        )
        return await self.mailer.send_async(message)

    async def _render_qr(self, codes: Sequence[str]) -> Optional[bytes]:
        if self.qr_renderer is None:
            return None
        try:
            return await asyncio.to_thread(self.qr_renderer.render, codes)
        except QRRenderError as e:
            logger.warning(f"QR code generation failed, sending without it: {e}")
            return None
