"""Type definitions for the intake module.

This module defines the intake item kept in the session list, the per-batch
outcome returned by the coordinator, and the structured reasons attached to
per-image processing errors.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from src.common.types import ImageRef
from src.extraction.validator import is_valid_code


class Admission(Enum):
    """Decision of the capacity & duplicate guard."""

    ACCEPT = "accept"
    REJECT_DUPLICATE = "reject_duplicate"
    REJECT_CAPACITY = "reject_capacity"


class ProcessingStage(Enum):
    """Per-image stage of the batch intake state machine."""

    PREPROCESS = "preprocess"
    RECOGNIZE = "recognize"
    EXTRACT = "extract"
    ADMIT = "admit"


@dataclass
class RejectionReason:
    """Structured reason with error code and context.

    Attributes:
        code: Error code (e.g., "INT-E001")
        constant: String constant for programmatic checking (e.g., "OCR_FAILED")
        message: Human-readable explanation naming the image
        stage: Stage where the failure occurred
        severity: Error severity level ("ERROR" or "WARNING")
    """

    code: str
    constant: str
    message: str
    stage: ProcessingStage
    severity: str = "ERROR"


@dataclass(frozen=True)
class IntakeItem:
    """One accepted image and its extracted code.

    Attributes:
        image_ref: Handle to the original image
        code: Extracted 22-character code, or None if recognition failed

    Raises:
        ValueError: If ``code`` is not None and not a valid code.
    """

    image_ref: ImageRef
    code: Optional[str] = None

    def __post_init__(self):
        if self.code is not None and not is_valid_code(self.code):
            raise ValueError(f"Invalid code for intake item: {self.code!r}")

    def is_recognized(self) -> bool:
        """Check if the item carries a code.

        Returns:
            True if a code was extracted, False otherwise.
        """
        return self.code is not None


@dataclass
class ProcessingError:
    """Failure attached to one image of a batch.

    Attributes:
        image_ref: Image that failed
        index: 0-based position of the image in the submitted batch
        reason: Structured failure reason
    """

    image_ref: ImageRef
    index: int
    reason: RejectionReason

    @property
    def message(self) -> str:
        """Human-readable failure message."""
        return self.reason.message


@dataclass
class BatchOutcome:
    """Aggregate result of one batch submission.

    Attributes:
        accepted: Items to append to the intake list, in submission order
        rejected_duplicates: Codes rejected as duplicates, in rejection order
        processing_errors: Per-image OCR / extraction failures
        not_attempted: Images skipped because the list reached capacity
        truncated: Whether the batch was cut short by the capacity ceiling
    """

    accepted: List[IntakeItem] = field(default_factory=list)
    rejected_duplicates: List[str] = field(default_factory=list)
    processing_errors: List[ProcessingError] = field(default_factory=list)
    not_attempted: List[ImageRef] = field(default_factory=list)
    truncated: bool = False

    @property
    def recognized_count(self) -> int:
        """Number of accepted items carrying a code."""
        return sum(1 for item in self.accepted if item.is_recognized())

    def summary(self) -> str:
        """Build a one-paragraph summary for display.

        Returns:
            Summary string listing accepted, duplicate, failed and skipped images.
        """
        parts = [f"{len(self.accepted)} added ({self.recognized_count} recognized)"]
        if self.rejected_duplicates:
            parts.append(f"duplicate codes: {', '.join(self.rejected_duplicates)}")
        if self.processing_errors:
            parts.append(f"{len(self.processing_errors)} not recognized")
        if self.truncated:
            parts.append(f"{len(self.not_attempted)} skipped (list is full)")
        return "; ".join(parts)


@dataclass(frozen=True)
class ProgressEvent:
    """Progress notification emitted for each stage of each image.

    Attributes:
        index: 0-based position of the image in the batch
        total: Number of images in the batch
        filename: Image filename
        stage: Stage about to run
    """

    index: int
    total: int
    filename: str
    stage: ProcessingStage

    def describe(self) -> str:
        """Format the event as a status line (e.g. "recognize 2/5 - a.jpg")."""
        return f"{self.stage.value} {self.index + 1}/{self.total} - {self.filename}"
