"""Unit tests for the capacity & duplicate guard."""

from src.common.types import MAX_ITEMS
from src.intake.guard import admit, existing_codes
from src.intake.types import Admission

CODE_A = "1AAAAAAAAAAAAAAAAAAAAA"
CODE_B = "2BBBBBBBBBBBBBBBBBBBBB"


def numbered_code(n):
    """Build a distinct valid code for index n."""
    return f"1{n:021d}"


class TestCapacityRule:
    """Test the capacity ceiling takes precedence."""

    def test_full_list_rejects_new_code(self, make_item):
        """Test a full list rejects a code that would otherwise be accepted."""
        existing = [make_item(numbered_code(i)) for i in range(MAX_ITEMS)]
        assert admit(CODE_A, existing, set()) == Admission.REJECT_CAPACITY

    def test_full_list_rejects_null_candidate(self, make_item):
        """Test a full list rejects images without a code too."""
        existing = [make_item(numbered_code(i)) for i in range(MAX_ITEMS)]
        assert admit(None, existing, set()) == Admission.REJECT_CAPACITY

    def test_full_list_rejects_duplicate_as_capacity(self, make_item):
        """Test capacity is checked before duplicates."""
        existing = [make_item(numbered_code(i)) for i in range(MAX_ITEMS)]
        assert admit(numbered_code(0), existing, set()) == Admission.REJECT_CAPACITY

    def test_pending_items_count_toward_capacity(self, make_item):
        """Test items accepted earlier in the batch fill the list."""
        existing = [make_item(numbered_code(i)) for i in range(MAX_ITEMS - 2)]

        assert admit(CODE_A, existing, set(), pending_count=1) == Admission.ACCEPT
        assert admit(CODE_A, existing, set(), pending_count=2) == Admission.REJECT_CAPACITY

    def test_custom_ceiling(self, make_item):
        """Test a smaller ceiling."""
        assert admit(CODE_A, [make_item(CODE_B)], set(), max_items=1) == Admission.REJECT_CAPACITY


class TestDuplicateRule:
    """Test duplicate detection against the list and the batch."""

    def test_duplicate_of_existing(self, make_item):
        """Test a code already in the list is rejected."""
        assert admit(CODE_A, [make_item(CODE_A)], set()) == Admission.REJECT_DUPLICATE

    def test_trimmed_duplicate(self, make_item):
        """Test surrounding whitespace does not make a code distinct."""
        assert admit(f"  {CODE_A} ", [make_item(CODE_A)], set()) == Admission.REJECT_DUPLICATE

    def test_case_difference_is_not_duplicate(self, make_item):
        """Test comparison is case-sensitive."""
        assert admit(CODE_A.lower(), [make_item(CODE_A)], set()) == Admission.ACCEPT

    def test_duplicate_within_batch(self):
        """Test a code seen earlier in the batch is rejected."""
        assert admit(CODE_A, [], {CODE_A}) == Admission.REJECT_DUPLICATE

    def test_null_existing_codes_ignored(self, make_item):
        """Test items without a code never cause duplicates."""
        assert admit(CODE_A, [make_item(None), make_item(None)], set()) == Admission.ACCEPT


class TestAcceptRule:
    """Test acceptance."""

    def test_new_code(self, make_item):
        """Test a new code is accepted."""
        assert admit(CODE_B, [make_item(CODE_A)], {numbered_code(1)}) == Admission.ACCEPT

    def test_null_candidate(self, make_item):
        """Test an image without a code is accepted even if others lack codes."""
        assert admit(None, [make_item(None)], set()) == Admission.ACCEPT

    def test_empty_list(self):
        """Test the first code of a session."""
        assert admit(CODE_A, [], set()) == Admission.ACCEPT


class TestExistingCodes:
    """Test collecting codes from intake items."""

    def test_skips_null_codes(self, make_item):
        """Test only recognized codes are returned."""
        items = [make_item(CODE_A), make_item(None), make_item(CODE_B)]
        assert existing_codes(items) == {CODE_A, CODE_B}
