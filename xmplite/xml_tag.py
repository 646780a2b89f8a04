# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
XMP tag matcher and serializer

This module finds namespaced XMP elements with regular expressions and
turns them into plain Python values (scalars, lists and dicts).

Matching is intentionally loose. Opening and closing tags are paired by
their captured namespace and name, and the inner text is matched
non-greedily, so the shortest span wins. Nested elements that share the
same qualified name are therefore not balanced the way a conforming XML
parser would balance them. Malformed payloads that are common in the
wild (missing xpacket wrappers, stray text) still parse.

RDF containers are unwrapped:
- <rdf:Seq>, <rdf:Bag> and <rdf:Alt> become lists
- a list with a single item becomes that item
- a property whose only child is a list becomes the list itself

Copyright 2025 DNAi inc.
"""

import re
from typing import Any, Dict, List, Optional

from xmplite.value_normalizer import normalize_value
from xmplite.xml_attr import XmlAttr

# Key used for element text when the element also has attributes
VALUE_PROP = 'value'

# RDF container element names
RDF_NAMESPACE = 'rdf'
RDF_LIST_NAMES = ('Seq', 'Bag', 'Alt')

TAG_NAME_PART = r'[A-Za-z0-9_-]+'

# Groups: 1 namespace, 2 name, 3 attribute string, 7 inner text
# (group 7 is None for self-closing tags)
TAG_PATTERN_TEMPLATE = (
    r'''<({ns}):({name})((\s+?[A-Za-z0-9_:-]+=("[^"]*"|'[^']*'))*\s*)'''
    r'''(/>|>([\s\S]*?)</\1:\2>)'''
)

ANY_TAG_PATTERN = re.compile(
    TAG_PATTERN_TEMPLATE.format(ns=TAG_NAME_PART, name=TAG_NAME_PART),
    re.MULTILINE | re.ASCII,
)


def tag_pattern(ns: Optional[str] = None, name: Optional[str] = None) -> 're.Pattern':
    """
    Build the element pattern, optionally restricted to a namespace and/or name.
    
    Args:
        ns: Namespace prefix to match (any prefix if None)
        name: Local name to match (any name if None)
        
    Returns:
        Compiled regular expression
    """
    if ns is None and name is None:
        return ANY_TAG_PATTERN
    ns = re.escape(ns) if ns else TAG_NAME_PART
    name = re.escape(name) if name else TAG_NAME_PART
    return re.compile(TAG_PATTERN_TEMPLATE.format(ns=ns, name=name), re.MULTILINE | re.ASCII)


class XmlTag:
    """
    A namespaced XMP element and everything matched inside it.
    
    Attributes and child elements are both "properties" of the tag and
    are kept in document order, attributes first. A tag either has child
    elements or a scalar value taken from its inner text, never both.
    """
    
    def __init__(self, ns: str, name: str, attr_string: Optional[str] = None,
                 inner_xml: Optional[str] = None):
        """
        Initialize a tag and match its attributes and children.
        
        Args:
            ns: Namespace prefix (e.g. 'dc')
            name: Local name (e.g. 'creator')
            attr_string: Raw attribute text of the opening tag
            inner_xml: Text between the opening and closing tag
                      (None for self-closing tags)
        """
        self.ns = ns
        self.name = name
        self.attr_string = attr_string
        self.inner_xml = inner_xml
        self.attrs = XmlAttr.find_all(attr_string)
        self.children = XmlTag.find_all(inner_xml)
        self.value = normalize_value(inner_xml) if not self.children else None
        self.properties = [*self.attrs, *self.children]
    
    @classmethod
    def find_all(cls, xmp_string: Optional[str], ns: Optional[str] = None,
                 name: Optional[str] = None) -> List['XmlTag']:
        """
        Find all top-level namespaced elements in a text fragment.
        
        Handles both paired (<ns:name>...</ns:name>) and self-closing
        (<ns:name/>) elements.
        
        Args:
            xmp_string: Text to search
            ns: Only match this namespace prefix
            name: Only match this local name
            
        Returns:
            Matched tags in document order
        """
        if not xmp_string:
            return []
        pattern = tag_pattern(ns, name)
        return [cls.unpack_match(match) for match in pattern.finditer(xmp_string)]
    
    @classmethod
    def unpack_match(cls, match: 're.Match') -> 'XmlTag':
        return cls(match.group(1), match.group(2), match.group(3), match.group(7))
    
    @property
    def is_primitive(self) -> bool:
        """A plain value with no attributes or child elements."""
        return self.value is not None and not self.attrs and not self.children
    
    @property
    def is_list(self) -> bool:
        """An RDF container: <rdf:Seq>, <rdf:Bag> or <rdf:Alt>."""
        return self.ns == RDF_NAMESPACE and self.name in RDF_LIST_NAMES
    
    @property
    def is_list_container(self) -> bool:
        """A property wrapping exactly one RDF container."""
        return len(self.children) == 1 and self.children[0].is_list
    
    def serialize(self) -> Any:
        """
        Convert the tag into a plain Python value.
        
        Returns:
            A scalar, a list, a dict, or None when the tag carries nothing
        """
        # Invalid or empty tag
        if not self.properties and self.value is None:
            return None
        # <ns:tag>value</ns:tag>
        if self.is_primitive:
            return self.value
        # <ns:tag><rdf:Seq>...</rdf:Seq></ns:tag>
        if self.is_list_container:
            return self.children[0].serialize()
        # <rdf:Seq>...</rdf:Seq>
        if self.is_list:
            items = [item for item in (child.serialize() for child in self.children) if item is not None]
            return unwrap_list(items)
        output: Dict[str, Any] = {}
        for prop in self.properties:
            assign_to_object(prop, output)
        if self.value is not None:
            output[VALUE_PROP] = self.value
        return none_if_empty(output)
    
    def __repr__(self) -> str:
        return f"XmlTag({self.ns}:{self.name}, attrs={len(self.attrs)}, children={len(self.children)})"


def assign_to_object(prop: Any, target: Dict[str, Any]) -> None:
    """Store a property's serialized value under its local name, unless absent."""
    serialized = prop.serialize()
    if serialized is not None:
        target[prop.name] = serialized


def unwrap_list(items: List[Any]) -> Any:
    if not items:
        return None
    return items[0] if len(items) == 1 else items


def none_if_empty(value: Any) -> Any:
    if isinstance(value, dict) and not value:
        return None
    return value
