# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
xmplite - A lightweight XMP metadata extractor

Reconstructs XMP packets embedded in JPEG files into plain Python
values (dicts, lists and scalars) using a small regex-based matcher
instead of a full XML/RDF parser. Extended XMP split over several
JPEG segments is reassembled before parsing.

Copyright 2025 DNAi inc.
"""

__version__ = "0.1.0"
__author__ = "DNAi inc."

from xmplite.exceptions import XMPLiteError, MetadataReadError
from xmplite.value_normalizer import normalize_value
from xmplite.xml_attr import XmlAttr
from xmplite.xml_tag import XmlTag
from xmplite.segments import RawSegment, SegmentAssembler
from xmplite.jpeg_segments import JPEGSegmentScanner
from xmplite.options import XMPOptions
from xmplite.xmp_parser import XMPParser, parse_xmp, read_xmp

__all__ = [
    "XMPLiteError",
    "MetadataReadError",
    "normalize_value",
    "XmlAttr",
    "XmlTag",
    "RawSegment",
    "SegmentAssembler",
    "JPEGSegmentScanner",
    "XMPOptions",
    "XMPParser",
    "parse_xmp",
    "read_xmp",
]
