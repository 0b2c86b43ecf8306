"""Batch intake of label images.

This module accumulates images and their extracted codes into a bounded,
duplicate-free session list.

Core Components:
    - types: IntakeItem, BatchOutcome, ProcessingError, Admission, ...
    - config_loader: Configuration loading with Pydantic validation
    - guard: Capacity & duplicate admission rules
    - intake_list: Session-scoped bounded list
    - coordinator: Sequential batch intake state machine

Example:
    >>> from src.intake import BatchIntakeCoordinator, IntakeList
    >>> intake_list = IntakeList()
    >>> coordinator = BatchIntakeCoordinator(ocr_engine=engine)
    >>> outcome = await coordinator.process_and_merge(images, intake_list)
    >>> print(outcome.summary())
"""

from .config_loader import (
    CapacityConfig,
    Config,
    ExtractionConfig,
    IntakeModuleConfig,
    PreprocessingConfig,
    get_default_config,
    load_config,
)
from .coordinator import BatchIntakeCoordinator
from .guard import admit, existing_codes
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

__all__ = [
    # Types
    "Admission",
    "BatchOutcome",
    "IntakeItem",
    "ProcessingError",
    "ProcessingStage",
    "ProgressEvent",
    "RejectionReason",
    # Configuration
    "Config",
    "IntakeModuleConfig",
    "PreprocessingConfig",
    "CapacityConfig",
    "ExtractionConfig",
    "load_config",
    "get_default_config",
    # Components
    "admit",
    "existing_codes",
    "IntakeList",
    "BatchIntakeCoordinator",
]
