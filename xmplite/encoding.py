# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Text decoding for XMP payloads

XMP is UTF-8 in practice, but payloads written by older tools are not
always valid UTF-8. Bytes are decoded as UTF-8 first, then with the
encoding detected by chardet, and finally as latin-1.

Copyright 2025 DNAi inc.
"""

import logging
from typing import Any, Callable, Optional

import chardet

logger = logging.getLogger(__name__)

# Minimum chardet confidence before its guess is trusted
MIN_DETECTION_CONFIDENCE = 0.5


def decode_bytes(data: bytes) -> str:
    """
    Decode raw payload bytes to text.
    
    Args:
        data: Raw bytes
        
    Returns:
        Decoded text (never raises)
    """
    data = bytes(data)
    try:
        return data.decode('utf-8')
    except UnicodeDecodeError:
        pass
    
    detected = chardet.detect(data)
    encoding = detected.get('encoding')
    confidence = detected.get('confidence') or 0.0
    if encoding and confidence > MIN_DETECTION_CONFIDENCE:
        try:
            logger.debug("Payload is not UTF-8, decoding as %s (confidence %.2f)", encoding, confidence)
            return data.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            pass
    
    logger.debug("Falling back to latin-1 for undecodable payload")
    return data.decode('latin-1')


def normalize_input(value: Any, text_extractor: Optional[Callable[[Any], str]] = None) -> str:
    """
    Turn parser input into text.
    
    Args:
        value: A str, bytes-like object, or any object exposing get_string()
        text_extractor: Optional hook used for inputs that are neither
                       text nor bytes
        
    Returns:
        Text to be matched (empty string for None)
    """
    if value is None:
        return ''
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray, memoryview)):
        return decode_bytes(value)
    if text_extractor is not None:
        return text_extractor(value)
    get_string = getattr(value, 'get_string', None)
    if callable(get_string):
        return get_string()
    return str(value)
