# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
XMP attribute matcher

Extracts namespaced ``ns:name="value"`` pairs from the attribute part of
an XMP element using a regular expression instead of an XML parser.

Copyright 2025 DNAi inc.
"""

import re
from typing import List, Optional

from xmplite.value_normalizer import Scalar, normalize_value

# ns:name="value" or ns:name='value'
ATTRIBUTE_PATTERN = re.compile(r'''([a-zA-Z0-9-]+):([a-zA-Z0-9-]+)=("[^"]*"|'[^']*')''', re.MULTILINE)


class XmlAttr:
    """
    A single namespaced attribute of an XMP element.
    
    The value is normalized once at construction time; ``serialize()``
    simply returns it.
    """
    
    def __init__(self, ns: str, name: str, value: Optional[Scalar]):
        self.ns = ns
        self.name = name
        self.value = value
    
    @classmethod
    def find_all(cls, string: Optional[str]) -> List['XmlAttr']:
        """
        Find all namespaced attributes in an attribute string.
        
        Args:
            string: Text between the tag name and the closing '>' or '/>'
            
        Returns:
            Attributes in document order (empty if string is empty or None)
        """
        if not string:
            return []
        return [cls.unpack_match(match) for match in ATTRIBUTE_PATTERN.finditer(string)]
    
    @classmethod
    def unpack_match(cls, match: 're.Match') -> 'XmlAttr':
        # Strip exactly the matched quote pair
        value = normalize_value(match.group(3)[1:-1])
        return cls(match.group(1), match.group(2), value)
    
    def serialize(self) -> Optional[Scalar]:
        return self.value
    
    def __repr__(self) -> str:
        return f"XmlAttr({self.ns}:{self.name}={self.value!r})"
