# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Parser options

Copyright 2025 DNAi inc.
"""

from typing import Any, Callable, Dict, Optional


def to_bool(value: Any) -> bool:
    """Interpret an option value as a boolean; "false", "0", "no" and "off" are False."""
    if isinstance(value, str):
        return value.strip().lower() not in ('', 'false', '0', 'no', 'off')
    return bool(value)


class XMPOptions:
    """
    Configuration for XMP parsing.
    
    Attributes:
        group_by_namespace: Nest properties under their namespace prefix
                            instead of flattening them by local name
        multi_segment: Merge extended XMP segments into the main packet
        text_extractor: Hook turning non-text, non-bytes input into text
    """
    
    # camelCase spellings accepted by from_dict()
    KEY_ALIASES = {
        'groupByNamespace': 'group_by_namespace',
        'multiSegment': 'multi_segment',
        'textExtractor': 'text_extractor',
    }
    
    def __init__(self, group_by_namespace: bool = False, multi_segment: bool = True,
                 text_extractor: Optional[Callable[[Any], str]] = None):
        self.group_by_namespace = group_by_namespace
        self.multi_segment = multi_segment
        self.text_extractor = text_extractor
    
    @classmethod
    def from_dict(cls, values: Optional[Dict[str, Any]] = None) -> 'XMPOptions':
        """
        Build options from a plain dictionary.
        
        Args:
            values: Option values keyed by snake_case or camelCase names.
                    Unknown keys are ignored.
            
        Returns:
            XMPOptions instance
        """
        options = cls()
        for key, value in (values or {}).items():
            key = cls.KEY_ALIASES.get(key, key)
            if key in ('group_by_namespace', 'multi_segment'):
                setattr(options, key, to_bool(value))
            elif key == 'text_extractor':
                options.text_extractor = value
        return options
    
    def __repr__(self) -> str:
        return (f"XMPOptions(group_by_namespace={self.group_by_namespace}, "
                f"multi_segment={self.multi_segment})")
