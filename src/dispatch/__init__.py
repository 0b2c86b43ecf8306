"""Outbound mail dispatch.

Core Components:
    - types: Attachment, OutboundMessage, DispatchResult
    - config_loader: SMTP settings (environment) and dispatch config (YAML)
    - smtp: SMTPMailer with error mapping and timeout

Example:
    >>> from src.dispatch import SMTPMailer
    >>> mailer = SMTPMailer()
    >>> result = await mailer.send_async(message)
"""

from .config_loader import (
    Config,
    DispatchModuleConfig,
    SMTPSettings,
    get_default_config,
    load_config,
)
from .smtp import SMTPMailer
from .types import Attachment, DispatchResult, OutboundMessage

__all__ = [
    # Types
    "Attachment",
    "OutboundMessage",
    "DispatchResult",
    # Configuration
    "Config",
    "DispatchModuleConfig",
    "SMTPSettings",
    "load_config",
    "get_default_config",
    # Components
    "SMTPMailer",
]
