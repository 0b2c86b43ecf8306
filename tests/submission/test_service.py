"""Unit tests for the submission service."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.common.errors import MailAuthError, QRRenderError, SubmissionError
from src.dispatch.types import DispatchResult
from src.submission.config_loader import Config, QRConfig, SubmissionModuleConfig
from src.submission.form import RequesterInfo
from src.submission.service import SubmissionService

CODE_A = "1AAAAAAAAAAAAAAAAAAAAA"
CODE_B = "2BBBBBBBBBBBBBBBBBBBBB"


@pytest.fixture
def requester():
    """Provide a valid requester."""
    return RequesterInfo(employee_id="A1234", name="Jane Doe", email="jane@example.com")


@pytest.fixture
def mailer():
    """Provide a mailer whose send_async succeeds."""
    mock = MagicMock()
    mock.send_async = AsyncMock(
        return_value=DispatchResult(message_id="<1@example.com>", recipient="jane@example.com")
    )
    return mock


def sent_message(mailer):
    """Return the OutboundMessage passed to the mailer."""
    return mailer.send_async.call_args[0][0]


class TestSubmit:
    """Test the submit flow."""

    def test_sends_with_qr(self, mailer, requester, make_item):
        """Test a normal submission attaches photos and the QR code."""
        service = SubmissionService(mailer=mailer)

        result = asyncio.run(
            service.submit(requester, [make_item(CODE_A), make_item(None), make_item(CODE_B)])
        )

        assert result.message_id == "<1@example.com>"
        message = sent_message(mailer)
        assert [a.filename for a in message.attachments] == [
            f"barcode_1_{CODE_A}.jpg",
            "barcode_2_unknown.jpg",
            f"barcode_3_{CODE_B}.jpg",
            "barcode_qr_code.png",
        ]

    def test_qr_encodes_recognized_codes_only(self, mailer, requester, make_item):
        """Test null codes are left out of the QR payload."""
        renderer = MagicMock()
        renderer.render.return_value = b"\x89PNGqr"
        service = SubmissionService(mailer=mailer, qr_renderer=renderer)

        asyncio.run(service.submit(requester, [make_item(None), make_item(CODE_B)]))

        renderer.render.assert_called_once_with([CODE_B])

    def test_qr_failure_is_not_terminal(self, mailer, requester, make_item):
        """Test the email is still sent when the QR code fails."""
        renderer = MagicMock()
        renderer.render.side_effect = QRRenderError("overflow")
        service = SubmissionService(mailer=mailer, qr_renderer=renderer)

        asyncio.run(service.submit(requester, [make_item(CODE_A)]))

        message = sent_message(mailer)
        assert [a.filename for a in message.attachments] == [f"barcode_1_{CODE_A}.jpg"]

    def test_qr_disabled(self, mailer, requester, make_item):
        """Test the QR code can be turned off in configuration."""
        config = Config(submission=SubmissionModuleConfig(qr=QRConfig(enabled=False)))
        service = SubmissionService(mailer=mailer, config=config)

        asyncio.run(service.submit(requester, [make_item(CODE_A)]))

        assert service.qr_renderer is None
        assert "barcode_qr_code.png" not in [a.filename for a in sent_message(mailer).attachments]

    def test_invalid_items_not_sent(self, mailer, requester, make_item):
        """Test validation failures stop before dispatch."""
        service = SubmissionService(mailer=mailer)

        with pytest.raises(SubmissionError):
            asyncio.run(service.submit(requester, [make_item(None)]))

        mailer.send_async.assert_not_called()

    def test_mail_failure_is_terminal(self, mailer, requester, make_item):
        """Test dispatch errors propagate to the caller."""
        mailer.send_async.side_effect = MailAuthError("rejected", help_text="hint")
        service = SubmissionService(mailer=mailer)

        with pytest.raises(MailAuthError):
            asyncio.run(service.submit(requester, [make_item(CODE_A)]))
