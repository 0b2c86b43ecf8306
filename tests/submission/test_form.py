"""Unit tests for requester form validation."""

import pytest
from pydantic import ValidationError

from src.common.errors import SubmissionError
from src.submission.form import RequesterInfo, validate_items, validate_requester

CODE_A = "1AAAAAAAAAAAAAAAAAAAAA"


class TestRequesterInfo:
    """Test requester field rules."""

    def test_valid_requester(self):
        """Test a well-formed requester, with whitespace trimmed."""
        requester = validate_requester(" A1234 ", " Jane Doe ", "jane@example.com ")

        assert requester == RequesterInfo(
            employee_id="A1234", name="Jane Doe", email="jane@example.com"
        )

    @pytest.mark.parametrize("employee_id", ["A-1234", "12 34", "사번1", ""])
    def test_invalid_employee_id(self, employee_id):
        """Test employee IDs must be non-empty ASCII alphanumerics."""
        with pytest.raises(SubmissionError, match="Employee ID"):
            validate_requester(employee_id, "Jane Doe", "jane@example.com")

    def test_blank_name(self):
        """Test a whitespace-only name is rejected."""
        with pytest.raises(SubmissionError, match="Name is required"):
            validate_requester("A1234", "   ", "jane@example.com")

    @pytest.mark.parametrize("email", ["jane", "jane@example", "jane @example.com", "@example.com"])
    def test_invalid_email(self, email):
        """Test malformed email addresses are rejected."""
        with pytest.raises(SubmissionError, match="Email address is not valid"):
            validate_requester("A1234", "Jane Doe", email)

    def test_all_problems_reported(self):
        """Test every invalid field is listed in one error."""
        with pytest.raises(SubmissionError) as exc_info:
            validate_requester("", "", "")

        message = str(exc_info.value)
        assert "Employee ID is required" in message
        assert "Name is required" in message
        assert "Email is required" in message

    def test_model_raises_validation_error(self):
        """Test the model itself raises pydantic errors."""
        with pytest.raises(ValidationError):
            RequesterInfo(employee_id="A1", name="", email="a@b.c")


class TestValidateItems:
    """Test submission preconditions on the item list."""

    def test_empty_list(self):
        """Test at least one image is required."""
        with pytest.raises(SubmissionError, match="at least one"):
            validate_items([])

    def test_no_recognized_code(self, make_item):
        """Test at least one item must carry a code."""
        with pytest.raises(SubmissionError, match="No label code"):
            validate_items([make_item(None), make_item(None)])

    def test_valid_items(self, make_item):
        """Test a list with one recognized code passes."""
        validate_items([make_item(None), make_item(CODE_A)])
