"""
Text utilities for customer name matching.

Used when a caller only knows a customer's display name.
"""

import unicodedata
from typing import Optional


def normalize_customer_name(name: Optional[str]) -> Optional[str]:
    """
    Normalize customer name for comparison.

    - "Haji Baba" → "HAJI BABA"
    - "  halalnivore " → "HALALNIVORE"
    - "Café Saffron" → "CAFE SAFFRON"

    Args:
        name: Original customer name (may have accents, mixed case)

    Returns:
        Normalized uppercase ASCII string, or None if input is empty
    """
    if not name:
        return None

    # Strip whitespace
    name = name.strip()

    if not name:
        return None

    # Normalize unicode (NFD decomposition separates base chars from accents)
    normalized = unicodedata.normalize('NFD', name)

    # Remove accent marks (combining characters in Unicode category 'Mn')
    ascii_name = ''.join(
        c for c in normalized
        if unicodedata.category(c) != 'Mn'
    )

    # Collapse inner whitespace, uppercase for consistent comparison
    return ' '.join(ascii_name.split()).upper()
