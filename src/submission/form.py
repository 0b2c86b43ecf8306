"""Requester form validation.

A reissue request needs a requester (employee ID, name, email) and at least
one intake item with a recognized code.
"""

import re
from typing import Sequence

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from src.common.errors import SubmissionError
from src.intake.types import IntakeItem

EMPLOYEE_ID_PATTERN = re.compile(r"^[A-Za-z0-9]+$")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class RequesterInfo(BaseModel):
    """Person submitting the reissue request.

    Attributes:
        employee_id: Alphanumeric employee ID
        name: Display name (non-blank)
        email: Recipient address for the request email
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    employee_id: str
    name: str
    email: str

    @field_validator("employee_id")
    @classmethod
    def _check_employee_id(cls, v: str) -> str:
        if not v:
            raise ValueError("Employee ID is required")
        if not EMPLOYEE_ID_PATTERN.match(v):
            raise ValueError("Employee ID may contain only letters and digits")
        return v

    @field_validator("name")
    @classmethod
    def _check_name(cls, v: str) -> str:
        if not v:
            raise ValueError("Name is required")
        return v

    @field_validator("email")
    @classmethod
    def _check_email(cls, v: str) -> str:
        if not v:
            raise ValueError("Email is required")
        if not EMAIL_PATTERN.match(v):
            raise ValueError("Email address is not valid")
        return v


def validate_requester(employee_id: str, name: str, email: str) -> RequesterInfo:
    """Validate raw form fields.

    Args:
        employee_id: Raw employee ID field
        name: Raw name field
        email: Raw email field

    Returns:
        Validated RequesterInfo with surrounding whitespace stripped.

    Raises:
        SubmissionError: Listing every invalid field.
    """
    try:
        return RequesterInfo(employee_id=employee_id, name=name, email=email)
    except ValidationError as e:
        problems = [err["msg"].removeprefix("Value error, ") for err in e.errors()]
        raise SubmissionError("; ".join(problems)) from e


def validate_items(items: Sequence[IntakeItem]) -> None:
    """Check that a list of intake items can be submitted.

    Raises:
        SubmissionError: If the list is empty or no item has a code.
    """
    if not items:
        raise SubmissionError("Add at least one label image")
    if not any(item.is_recognized() for item in items):
        raise SubmissionError("No label code was recognized in any image")
