"""Reissue request submission.

Core Components:
    - form: RequesterInfo and item validation
    - composer: Email subject, bodies and attachments
    - service: SubmissionService (QR -> compose -> dispatch)
    - config_loader: Configuration loading with Pydantic validation

Example:
    >>> from src.submission import SubmissionService, validate_requester
    >>> requester = validate_requester("A1234", "Jane Doe", "jane@example.com")
    >>> result = await SubmissionService(mailer).submit(requester, items)
"""

from .composer import attachment_filename, build_subject, compose_message
from .config_loader import (
    AttachmentConfig,
    Config,
    QRConfig,
    SubmissionModuleConfig,
    get_default_config,
    load_config,
)
from .form import RequesterInfo, validate_items, validate_requester
from .service import SubmissionService

__all__ = [
    # Form
    "RequesterInfo",
    "validate_requester",
    "validate_items",
    # Configuration
    "Config",
    "SubmissionModuleConfig",
    "AttachmentConfig",
    "QRConfig",
    "load_config",
    "get_default_config",
    # Components
    "attachment_filename",
    "build_subject",
    "compose_message",
    "SubmissionService",
]
