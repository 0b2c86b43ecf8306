"""Label code format validation.

A label code is exactly 22 characters drawn from ``[A-Za-z0-9]`` and always
starts with a decimal digit. Letters keep their case: codes mix digits and
letters, so ``1abc...`` and ``1ABC...`` are different codes.
"""

import re
from typing import List, Optional

from src.common.types import CODE_LENGTH

# Digit-led window of CODE_LENGTH alphanumerics, searched anywhere in cleaned text
CODE_SEARCH_PATTERN = re.compile(r"[0-9][A-Za-z0-9]{%d}" % (CODE_LENGTH - 1))

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]")


def clean_text(text: str) -> str:
    """Remove every character that is not an ASCII letter or digit.

    OCR output for printed labels typically carries hyphens, colons, spaces and
    line breaks inside the code; these are stripped before searching.

    Args:
        text: Raw OCR text.

    Returns:
        Text containing only ``[A-Za-z0-9]``.

    Example:
        >>> clean_text("Lot#: 9A1B-2C3D 4E5F")
        'Lot9A1B2C3D4E5F'
    """
    return _NON_ALNUM.sub("", text)


def find_codes(cleaned_text: str) -> List[str]:
    """Find all non-overlapping code windows in cleaned text, left to right.

    Args:
        cleaned_text: Text already passed through :func:`clean_text`.

    Returns:
        List of 22-character digit-led windows in scan order (may be empty).

    Example:
        >>> find_codes("AB1234567890123456789012")
        ['1234567890123456789012']
    """
    return [m.group(0) for m in CODE_SEARCH_PATTERN.finditer(cleaned_text)]


def normalize_code(code: str) -> str:
    """Normalize a code for comparison by trimming surrounding whitespace.

    Args:
        code: Code string, possibly with leading/trailing whitespace.

    Returns:
        Trimmed code. Case and inner characters are untouched.

    Example:
        >>> normalize_code("  1AAAAAAAAAAAAAAAAAAAAA ")
        '1AAAAAAAAAAAAAAAAAAAAA'
    """
    return code.strip()


def is_valid_code(code: Optional[str]) -> bool:
    """Check whether a value has the exact shape of a label code.

    Args:
        code: Candidate value (None is accepted and reported invalid).

    Returns:
        True if ``code`` is exactly 22 ASCII alphanumerics starting with a digit.

    Example:
        >>> is_valid_code("9A1B2C3D4E5F6G7H8I9J0K")
        True
        >>> is_valid_code("A91B2C3D4E5F6G7H8I9J0K")  # Letter first
        False
        >>> is_valid_code("9A1B2C3D4E5F6G7H8I9J0")  # 21 characters
        False
    """
    if not isinstance(code, str) or len(code) != CODE_LENGTH:
        return False

    return CODE_SEARCH_PATTERN.fullmatch(code) is not None
