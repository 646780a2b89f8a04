# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Value normalization for XMP text

Attribute values and element text in XMP are always strings. This module
coerces them into typed scalars (int, float, bool or str) and maps
"empty" spellings to None so they can be dropped from the output.

Copyright 2025 DNAi inc.
"""

import re
from typing import Any, Optional, Union

Scalar = Union[int, float, bool, str]

# Spellings that mean "no value"
UNDEFINABLE_VALUES = ('null', 'undefined')

# Whole-string ASCII numbers only. Python-only spellings such as '1_000',
# 'nan' or 'inf' are deliberately not numbers here.
DECIMAL_INT_PATTERN = re.compile(r'[+-]?[0-9]+', re.ASCII)
DECIMAL_FLOAT_PATTERN = re.compile(r'[+-]?(?:[0-9]+\.[0-9]*|\.[0-9]+|[0-9]+)(?:[eE][+-]?[0-9]+)?', re.ASCII)
RADIX_INT_PATTERN = re.compile(r'0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)', re.ASCII)


def is_undefinable(value: Any) -> bool:
    """Check whether a raw value should be treated as absent."""
    if value is None:
        return True
    if not isinstance(value, str):
        return False
    return value in UNDEFINABLE_VALUES or value.strip() == ''


def to_number(value: str) -> Optional[Union[int, float]]:
    """
    Convert a string to a number only if the whole string is numeric.
    
    Args:
        value: Raw string (surrounding whitespace is allowed)
        
    Returns:
        int or float, or None if the string is not entirely a number
    """
    text = value.strip()
    if DECIMAL_INT_PATTERN.fullmatch(text):
        return int(text)
    if RADIX_INT_PATTERN.fullmatch(text):
        return int(text, 0)
    if DECIMAL_FLOAT_PATTERN.fullmatch(text):
        return float(text)
    return None


def normalize_value(value: Any) -> Optional[Scalar]:
    """
    Coerce a raw XMP string into a typed scalar.
    
    Rules are applied in order:
    1. None, empty, whitespace-only, "null" or "undefined" -> None
    2. A string that is entirely a number -> int or float
    3. "true" / "false" in any case -> bool
    4. Anything else -> the stripped string
    
    Args:
        value: Raw value (usually a string)
        
    Returns:
        Normalized scalar or None
        
    Example:
        >>> normalize_value(' 42 ')
        42
        >>> normalize_value('3 apples')
        '3 apples'
    """
    if is_undefinable(value):
        return None
    if not isinstance(value, str):
        return value
    number = to_number(value)
    if number is not None:
        return number
    lowercase = value.lower()
    if lowercase == 'true':
        return True
    if lowercase == 'false':
        return False
    return value.strip()
