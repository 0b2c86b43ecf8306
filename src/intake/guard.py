"""Capacity & duplicate guard for the intake list.

Rules, evaluated in order:

1. The list (plus items already accepted earlier in the same batch) is full
   -> REJECT_CAPACITY, whatever the candidate. A full list rejects every
   further image uniformly.
2. The candidate equals, after trimming, a code already in the list
   -> REJECT_DUPLICATE.
3. The candidate was already accepted earlier in the same batch
   -> REJECT_DUPLICATE.
4. Otherwise ACCEPT. A None candidate (no code recognized) is always
   eligible unless capacity blocks it.

Comparison is exact and case-sensitive apart from surrounding whitespace.
"""

from typing import AbstractSet, Collection, Iterable, Optional, Set

from src.common.types import MAX_ITEMS
from src.extraction.validator import normalize_code

from .types import Admission, IntakeItem


def existing_codes(existing: Iterable[IntakeItem]) -> Set[str]:
    """Collect the trimmed, non-null codes of the given items.

    Args:
        existing: Intake items (an IntakeList or a sequence).

    Returns:
        Set of normalized codes.
    """
    return {normalize_code(item.code) for item in existing if item.code is not None}


def admit(
    candidate: Optional[str],
    existing: Collection[IntakeItem],
    batch_seen: AbstractSet[str],
    pending_count: int = 0,
    max_items: int = MAX_ITEMS,
) -> Admission:
    """Decide whether a candidate may join the intake list.

    Args:
        candidate: Extracted code, or None if nothing was recognized.
        existing: Current intake list contents.
        batch_seen: Normalized codes accepted earlier in the same batch.
        pending_count: Items accepted earlier in the same batch and not yet
            merged into ``existing``.
        max_items: Capacity ceiling.

    Returns:
        ACCEPT, REJECT_DUPLICATE or REJECT_CAPACITY.

    Example:
        >>> admit(None, [], set())
        <Admission.ACCEPT: 'accept'>
    """
    if len(existing) + pending_count >= max_items:
        return Admission.REJECT_CAPACITY

    if candidate is None:
        return Admission.ACCEPT

    normalized = normalize_code(candidate)

    if normalized in existing_codes(existing):
        return Admission.REJECT_DUPLICATE

    if normalized in batch_seen:
        return Admission.REJECT_DUPLICATE

    return Admission.ACCEPT
