"""
Null-field helpers.

CloudFront marks a missing column with a hyphen. Every derived field goes
through these helpers so that None, "" and "-" are treated alike.
"""

from typing import Optional

from ..config.constants import NULL_SENTINEL


def is_null_field(value: Optional[str]) -> bool:
    """
    Check whether a raw field value means "absent".

    Args:
        value: Raw token value

    Returns:
        True if the value is None, empty, or the hyphen sentinel

    Examples:
        >>> is_null_field("-")
        True
        >>> is_null_field("")
        True
        >>> is_null_field("http://example.com/")
        False
    """
    return value is None or value == "" or value == NULL_SENTINEL


def to_optional_str(value: Optional[str]) -> Optional[str]:
    """Convert to optional string, treating empty/dash as None."""
    if is_null_field(value):
        return None
    return value
