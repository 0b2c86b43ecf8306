"""Session-scoped, bounded, ordered list of accepted intake items.

The list is owned by one session and has a single writer: the coordinator's
accepted items are merged once per batch, and the user removes items by
index. Insertion order is the display and email order.
"""

import logging
from typing import Iterable, Iterator, List, Tuple

from src.common.errors import CapacityExceeded, DuplicateCode, IndexOutOfRange
from src.common.types import MAX_ITEMS

from .guard import existing_codes
from .types import BatchOutcome, IntakeItem

logger = logging.getLogger(__name__)


class IntakeList:
    """Ordered collection of IntakeItem with a capacity ceiling.

    Args:
        max_items: Capacity ceiling (default 30).
        items: Optional initial items.

    Example:
        >>> intake_list = IntakeList()
        >>> intake_list.merge(outcome)
        >>> for item in intake_list.snapshot():
        ...     print(item.code)
    """

    def __init__(self, max_items: int = MAX_ITEMS, items: Iterable[IntakeItem] = ()):
        if max_items <= 0:
            raise ValueError(f"max_items must be positive, got {max_items}")

        self._max_items = max_items
        self._items: List[IntakeItem] = []
        self.append(items)

    @property
    def max_items(self) -> int:
        """Capacity ceiling."""
        return self._max_items

    @property
    def remaining_slots(self) -> int:
        """Number of items that can still be appended."""
        return self._max_items - len(self._items)

    @property
    def is_full(self) -> bool:
        """Whether the list has reached its ceiling."""
        return len(self._items) >= self._max_items

    def append(self, items: Iterable[IntakeItem]) -> None:
        """Append items at the end, all or nothing.

        The list never holds two items with the same non-null code.

        Args:
            items: Items to append, in order.

        Raises:
            CapacityExceeded: If the resulting length would exceed max_items.
            DuplicateCode: If a code is already listed or repeated in ``items``.
            TypeError: If any element is not an IntakeItem.
        """
        items = list(items)
        for item in items:
            if not isinstance(item, IntakeItem):
                raise TypeError(f"Expected IntakeItem, got {type(item).__name__}")

        if len(self._items) + len(items) > self._max_items:
            raise CapacityExceeded(
                f"Cannot add {len(items)} items: list holds {len(self._items)} "
                f"of maximum {self._max_items}"
            )

        seen = existing_codes(self._items)
        duplicates = []
        for item in items:
            if item.code is None:
                continue
            if item.code in seen:
                duplicates.append(item.code)
            seen.add(item.code)
        if duplicates:
            raise DuplicateCode(duplicates)

        self._items.extend(items)
        if items:
            logger.debug(f"Appended {len(items)} items ({len(self._items)}/{self._max_items})")

    def merge(self, outcome: BatchOutcome) -> None:
        """Append a batch's accepted items in one step.

        Args:
            outcome: Completed batch outcome.

        Raises:
            CapacityExceeded, DuplicateCode: If the list changed since the batch
                started and can no longer take the accepted items.
        """
        self.append(outcome.accepted)

    def remove_at(self, index: int) -> IntakeItem:
        """Remove and return the item at a 0-based index.

        Args:
            index: Position of the item. Negative indices are not accepted.

        Returns:
            The removed item.

        Raises:
            IndexOutOfRange: If no item exists at ``index``.
        """
        if not isinstance(index, int) or not 0 <= index < len(self._items):
            raise IndexOutOfRange(
                f"No item at index {index} (list holds {len(self._items)} items)"
            )

        item = self._items.pop(index)
        logger.debug(f"Removed item {index} ({item.image_ref.filename}, code={item.code})")
        return item

    def snapshot(self) -> Tuple[IntakeItem, ...]:
        """Get a read-only ordered copy of the list.

        Returns:
            Tuple of items in insertion order.
        """
        return tuple(self._items)

    def codes(self) -> List[str]:
        """Get the recognized codes in list order.

        Returns:
            Non-null codes, in insertion order.
        """
        return [item.code for item in self._items if item.code is not None]

    def clear(self) -> None:
        """Remove all items (session reset)."""
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[IntakeItem]:
        return iter(self.snapshot())

    def __repr__(self) -> str:
        return f"IntakeList(items={len(self._items)}, max_items={self._max_items})"
