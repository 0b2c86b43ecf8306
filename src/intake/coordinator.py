"""Batch intake coordinator.

This module drives one submitted group of images through the intake pipeline,
strictly one image at a time:

    0. CAPACITY PRE-CHECK: stop if the list is already full
    1. PREPROCESS: downscale payloads above 1 MiB (codec collaborator)
    2. RECOGNIZE: OCR with a per-call timeout (OCR collaborator)
    3. EXTRACT: layered code extraction
    4. VALIDATE: re-check the code shape
    5. ADMIT: capacity & duplicate guard

Images are never overlapped: the batch-local set of seen codes is built
incrementally and per-image progress can be reported as it happens. A
recognition failure never discards the user's photograph; the image is kept
with ``code=None`` and the failure is attached to the outcome.

Example:
    >>> coordinator = BatchIntakeCoordinator(ocr_engine=create_engine(ocr_config))
    >>> outcome = await coordinator.process_batch(images, intake_list)
    >>> intake_list.merge(outcome)
    >>> print(outcome.summary())
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Callable, Collection, List, Optional, Sequence, Set

from src.common.errors import CollaboratorFailure, CollaboratorTimeout, ExtractionMiss
from src.common.types import ImageRef
from src.extraction.extractor import CodeExtractor
from src.extraction.types import RecognizedTextBlock
from src.extraction.validator import is_valid_code, normalize_code
from src.imaging.codec import ImageCodec
from src.ocr.engine import OCREngine

from .config_loader import Config, get_default_config
from .guard import admit
from .intake_list import IntakeList
from .types import (
    Admission,
    BatchOutcome,
    IntakeItem,
    ProcessingError,
    ProcessingStage,
    ProgressEvent,
    RejectionReason,
)

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[ProgressEvent], None]


@dataclass
class _BatchState:
    """Cursor and accumulators of one running batch."""

    images: List[ImageRef]
    max_items: int
    on_progress: Optional[ProgressCallback] = None
    cursor: int = 0
    accepted: List[IntakeItem] = field(default_factory=list)
    rejected_duplicates: List[str] = field(default_factory=list)
    processing_errors: List[ProcessingError] = field(default_factory=list)
    batch_seen: Set[str] = field(default_factory=set)
    truncated: bool = False

    @property
    def current(self) -> ImageRef:
        return self.images[self.cursor]

    def to_outcome(self) -> BatchOutcome:
        return BatchOutcome(
            accepted=list(self.accepted),
            rejected_duplicates=list(self.rejected_duplicates),
            processing_errors=list(self.processing_errors),
            not_attempted=list(self.images[self.cursor :]) if self.truncated else [],
            truncated=self.truncated,
        )


class BatchIntakeCoordinator:
    """Sequential batch intake state machine.

    Args:
        ocr_engine: OCR collaborator.
        codec: Image codec collaborator. Defaults to ImageCodec().
        config: Intake configuration. If None, uses the bundled defaults.
        extractor: Code extractor. Defaults to one built from config.
        on_progress: Default callback receiving a ProgressEvent per stage.

    Attributes:
        config: Full intake configuration
        ocr_engine: OCR collaborator
        codec: Image codec collaborator
        extractor: Code extractor
    """

    def __init__(
        self,
        ocr_engine: OCREngine,
        codec: Optional[ImageCodec] = None,
        config: Optional[Config] = None,
        extractor: Optional[CodeExtractor] = None,
        on_progress: Optional[ProgressCallback] = None,
    ):
        self.config: Config = config if config is not None else get_default_config()
        self.ocr_engine = ocr_engine
        self.codec = codec if codec is not None else ImageCodec()
        self.extractor = (
            extractor
            if extractor is not None
            else CodeExtractor(strategies=self.config.intake.extraction.strategies)
        )
        self.on_progress = on_progress

        logger.info(
            f"BatchIntakeCoordinator initialized: engine={ocr_engine.name}, "
            f"max_items={self.max_items}, ocr_timeout={self.config.intake.ocr_timeout_s}s"
        )

    @property
    def max_items(self) -> int:
        """Capacity ceiling applied to the intake list."""
        return self.config.intake.capacity.max_items

    async def process_batch(
        self,
        images: Sequence[ImageRef],
        existing: Collection[IntakeItem],
        max_items: Optional[int] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> BatchOutcome:
        """Run one batch of images through the intake pipeline.

        ``existing`` is only read; the caller merges ``outcome.accepted`` into
        the intake list after the whole batch completes.

        Args:
            images: Images in submission order.
            existing: Current intake list contents.
            max_items: Capacity ceiling for this batch. Never raises the
                configured ceiling, only lowers it.
            on_progress: Callback for this batch only. Defaults to the
                callback given at construction.

        Returns:
            BatchOutcome aggregating every per-image disposition.
        """
        ceiling = self.max_items if max_items is None else min(self.max_items, max_items)
        state = _BatchState(
            images=list(images),
            max_items=ceiling,
            on_progress=on_progress if on_progress is not None else self.on_progress,
        )
        logger.info(
            f"Batch started: {len(state.images)} images, "
            f"list holds {len(existing)}/{ceiling}"
        )

        while state.cursor < len(state.images):
            if self._at_capacity(state, existing):
                state.truncated = True
                break

            admission = await self._process_current(state, existing)
            if admission == Admission.REJECT_CAPACITY:
                state.truncated = True
                break

            state.cursor += 1

        outcome = state.to_outcome()
        if outcome.truncated:
            logger.warning(
                f"Batch truncated at capacity {state.max_items}: "
                f"{len(outcome.not_attempted)} images not attempted"
            )
        logger.info(f"Batch finished: {outcome.summary()}")
        return outcome

    async def process_and_merge(
        self,
        images: Sequence[ImageRef],
        intake_list: IntakeList,
        on_progress: Optional[ProgressCallback] = None,
    ) -> BatchOutcome:
        """Process a batch and merge its accepted items into the list.

        The batch is cut off at the lower of the configured ceiling and the
        list's own ``max_items``.

        Args:
            images: Images in submission order.
            intake_list: Session list to read and then update.
            on_progress: Callback for this batch only.

        Returns:
            BatchOutcome of the batch.
        """
        outcome = await self.process_batch(
            images,
            intake_list,
            max_items=intake_list.max_items,
            on_progress=on_progress,
        )
        intake_list.merge(outcome)
        return outcome

    def _at_capacity(self, state: _BatchState, existing: Collection[IntakeItem]) -> bool:
        """Check whether the list plus pending accepts is already full."""
        decision = admit(
            None,
            existing,
            state.batch_seen,
            pending_count=len(state.accepted),
            max_items=state.max_items,
        )
        return decision == Admission.REJECT_CAPACITY

    async def _process_current(
        self, state: _BatchState, existing: Collection[IntakeItem]
    ) -> Admission:
        """Run every stage for the image under the cursor."""
        image_ref = state.current

        self._notify(state, ProcessingStage.PREPROCESS)
        payload = await self._preprocess(image_ref)

        self._notify(state, ProcessingStage.RECOGNIZE)
        blocks = await self._recognize(state, payload)

        code: Optional[str] = None
        if blocks is not None:
            self._notify(state, ProcessingStage.EXTRACT)
            code = self._extract(state, blocks)

        self._notify(state, ProcessingStage.ADMIT)
        admission = admit(
            code,
            existing,
            state.batch_seen,
            pending_count=len(state.accepted),
            max_items=state.max_items,
        )

        if admission == Admission.ACCEPT:
            state.accepted.append(IntakeItem(image_ref=image_ref, code=code))
            if code is not None:
                state.batch_seen.add(normalize_code(code))
        elif admission == Admission.REJECT_DUPLICATE:
            state.rejected_duplicates.append(normalize_code(code))
            logger.warning(
                f"Image {state.cursor + 1} ({image_ref.filename}): "
                f"duplicate code {code} rejected"
            )

        return admission

    async def _preprocess(self, image_ref: ImageRef) -> bytes:
        """Downscale large payloads; small ones are forwarded unmodified."""
        preprocessing = self.config.intake.preprocessing
        if image_ref.size_bytes <= preprocessing.compress_threshold_bytes:
            return image_ref.data

        payload = await asyncio.to_thread(
            self.codec.compress_or_original,
            image_ref.data,
            preprocessing.max_width,
            preprocessing.max_height,
            preprocessing.jpeg_quality,
        )
        logger.info(
            f"Compressed {image_ref.filename} for OCR: "
            f"{round(image_ref.size_bytes / 1024)}KB -> {round(len(payload) / 1024)}KB"
        )
        return payload

    async def _recognize(
        self, state: _BatchState, payload: bytes
    ) -> Optional[List[RecognizedTextBlock]]:
        """Call the OCR collaborator; record and swallow per-image failures."""
        timeout_s = self.config.intake.ocr_timeout_s

        try:
            blocks = await asyncio.wait_for(
                self.ocr_engine.recognize(payload), timeout=timeout_s
            )
        except (asyncio.TimeoutError, CollaboratorTimeout) as e:
            detail = str(e) or f"no response within {timeout_s}s"
            self._record_error(
                state, "INT-E002", "OCR_TIMEOUT", f"OCR timed out: {detail}",
                ProcessingStage.RECOGNIZE,
            )
            return None
        except CollaboratorFailure as e:
            self._record_error(
                state, "INT-E001", "OCR_FAILED", f"OCR failed: {e}",
                ProcessingStage.RECOGNIZE,
            )
            return None
        except Exception as e:
            logger.error(f"Unexpected OCR engine error: {e}", exc_info=True)
            self._record_error(
                state, "INT-E001", "OCR_FAILED", f"OCR failed unexpectedly: {e}",
                ProcessingStage.RECOGNIZE,
            )
            return None

        if not blocks:
            self._record_error(
                state, "INT-E001", "OCR_FAILED", "OCR found no text in the image",
                ProcessingStage.RECOGNIZE,
            )
            return None

        return list(blocks)

    def _extract(
        self, state: _BatchState, blocks: List[RecognizedTextBlock]
    ) -> Optional[str]:
        """Extract a code and re-validate its shape."""
        try:
            result = self.extractor.require(blocks)
        except ExtractionMiss as e:
            self._record_error(
                state, "INT-E003", "NO_CODE_FOUND", str(e),
                ProcessingStage.EXTRACT, severity="WARNING",
            )
            return None

        if not is_valid_code(result.code):
            self._record_error(
                state, "INT-E004", "INVALID_CODE_SHAPE",
                f"Recognized '{result.code}' ({len(result.code)} characters) "
                f"is not a digit-led 22-character code",
                ProcessingStage.EXTRACT, severity="WARNING",
            )
            return None

        return result.code

    def _record_error(
        self,
        state: _BatchState,
        code: str,
        constant: str,
        detail: str,
        stage: ProcessingStage,
        severity: str = "ERROR",
    ) -> None:
        """Attach a failure to the image under the cursor."""
        image_ref = state.current
        message = f"Image {state.cursor + 1} ({image_ref.filename}): {detail}"
        logger.warning(message)
        state.processing_errors.append(
            ProcessingError(
                image_ref=image_ref,
                index=state.cursor,
                reason=RejectionReason(
                    code=code,
                    constant=constant,
                    message=message,
                    stage=stage,
                    severity=severity,
                ),
            )
        )

    def _notify(self, state: _BatchState, stage: ProcessingStage) -> None:
        """Emit a progress event if the batch has a callback."""
        if state.on_progress is None:
            return

        state.on_progress(
            ProgressEvent(
                index=state.cursor,
                total=len(state.images),
                filename=state.current.filename,
                stage=stage,
            )
        )
