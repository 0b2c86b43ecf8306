"""Exception hierarchy shared by the intake pipeline and its collaborators."""

from typing import List


class IntakeError(Exception):
    """Base exception for the label code intake pipeline."""

    pass


class ExtractionMiss(IntakeError):
    """Raised when no valid 22-character code could be found for an image."""

    pass


class DuplicateCode(IntakeError):
    """Raised when one or more codes are already present in the intake list.

    Attributes:
        codes: Offending codes, in the order they were rejected.
    """

    def __init__(self, codes: List[str]):
        self.codes = list(codes)
        super().__init__(f"Duplicate codes: {', '.join(self.codes)}")


class CapacityExceeded(IntakeError):
    """Raised when an append would grow the intake list past its ceiling."""

    pass


class IndexOutOfRange(IntakeError, IndexError):
    """Raised when removing an item at an index that does not exist."""

    pass


class CollaboratorFailure(IntakeError):
    """Raised when an external collaborator (OCR, codec, QR, mail) fails."""

    pass


class CollaboratorTimeout(CollaboratorFailure):
    """Raised when an outbound collaborator call exceeds its time budget."""

    pass


class OCREngineError(CollaboratorFailure):
    """Raised when the OCR engine cannot produce text blocks for an image."""

    pass


class ImageCodecError(CollaboratorFailure):
    """Raised when an image cannot be decoded, resized or re-encoded."""

    pass


class QRRenderError(CollaboratorFailure):
    """Raised when the summary QR image cannot be rendered."""

    pass


class MailDispatchError(CollaboratorFailure):
    """Raised when the outbound email cannot be delivered to the SMTP server.

    Attributes:
        help_text: Optional actionable hint for the operator.
    """

    def __init__(self, message: str, help_text: str = ""):
        self.help_text = help_text
        super().__init__(message)


class MailAuthError(MailDispatchError):
    """Raised when the SMTP server rejects the configured credentials."""

    pass


class MailConnectionError(MailDispatchError):
    """Raised when the SMTP server cannot be reached."""

    pass


class DispatchConfigError(MailDispatchError):
    """Raised when required SMTP settings are missing."""

    pass


class SubmissionError(IntakeError):
    """Raised when a submission fails validation before anything is sent."""

    pass
