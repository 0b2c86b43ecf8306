"""
Common types and utilities shared across all modules.

This module provides the image handle, size constants and the exception
hierarchy used by extraction, intake, OCR, imaging and dispatch modules.
"""

from src.common.errors import (
    CapacityExceeded,
    CollaboratorFailure,
    CollaboratorTimeout,
    DispatchConfigError,
    DuplicateCode,
    ExtractionMiss,
    ImageCodecError,
    IndexOutOfRange,
    IntakeError,
    MailAuthError,
    MailConnectionError,
    MailDispatchError,
    OCREngineError,
    QRRenderError,
    SubmissionError,
)
from src.common.types import CODE_LENGTH, MAX_ITEMS, ImageRef

__all__ = [
    "ImageRef",
    "MAX_ITEMS",
    "CODE_LENGTH",
    # Errors
    "IntakeError",
    "ExtractionMiss",
    "DuplicateCode",
    "CapacityExceeded",
    "IndexOutOfRange",
    "CollaboratorFailure",
    "CollaboratorTimeout",
    "OCREngineError",
    "ImageCodecError",
    "QRRenderError",
    "MailDispatchError",
    "MailAuthError",
    "MailConnectionError",
    "DispatchConfigError",
    "SubmissionError",
]
