"""
Text utilities for product descriptions and store search.
"""

from typing import Optional

# Length of the legacy "NNNN - " prefix on SKU descriptions
PLU_PREFIX_LENGTH = 7


def strip_plu_prefix(description: Optional[str]) -> str:
    """
    Remove the PLU prefix from a SKU description.

    Descriptions in the product master are prefixed with the PLU:
    - "1234 - Bananas, Organic" → "Bananas, Organic"
    - "Kiwi" → "Kiwi" (too short to carry a prefix)
    - None → ""

    Args:
        description: Raw SKU_DESCRIPTION value

    Returns:
        Description without prefix, whitespace trimmed
    """
    if not description:
        return ""

    if len(description) > PLU_PREFIX_LENGTH:
        description = description[PLU_PREFIX_LENGTH:]

    return description.strip()


def matches_search(term: Optional[str], *values: Optional[str]) -> bool:
    """
    Case-insensitive substring match of term against any value.

    An empty term matches everything.
    """
    if not term or not term.strip():
        return True

    needle = term.strip().lower()
    return any(needle in (value or "").lower() for value in values)
