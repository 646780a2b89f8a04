# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
XMP segment classification and assembly

A JPEG APP1 segment holds at most ~64KB, so large XMP packets are split
into a main segment (header "http://ns.adobe.com/xap/1.0/") and any
number of extended segments (header "http://ns.adobe.com/xmp/extension/").

Main segment layout:
    FF E1 | length (2) | "http://ns.adobe.com/xap/1.0/" | 00 | XMP

Extended segment layout:
    FF E1 | length (2) | "http://ns.adobe.com/xmp/extension/" | 00 |
    GUID (32) | full length (4) | chunk offset (4) | XMP chunk

Copyright 2025 DNAi inc.
"""

import struct
from dataclasses import dataclass
from typing import Optional, Sequence, Union

from xmplite.encoding import decode_bytes, normalize_input

XMP_CORE_HEADER = b'http://ns.adobe.com/'
XMP_MAIN_HEADER = b'http://ns.adobe.com/xap/1.0/'
XMP_EXTENDED_HEADER = b'http://ns.adobe.com/xmp/extension/'

APP1_MARKER = 0xE1

# Marker (2) + segment length (2)
TIFF_HEADER_LENGTH = 2 + 2
# Header + NUL terminator between header and data
XMP_MAIN_DATA_OFFSET = TIFF_HEADER_LENGTH + len(XMP_MAIN_HEADER) + 1
# Header + NUL + GUID (32) + full length (4) + chunk offset (4)
XMP_EXTENDED_DATA_OFFSET = 79
GUID_LENGTH = 32

SEGMENT_MAIN = 'main'
SEGMENT_EXTENDED = 'extended'


@dataclass
class RawSegment:
    """One XMP-carrying segment of a container file."""
    payload: Union[bytes, str]
    extended: bool = False
    offset: int = 0
    length: int = 0
    header_length: int = 0
    start: int = 0
    size: int = 0
    guid: Optional[str] = None
    full_length: Optional[int] = None
    chunk_offset: Optional[int] = None
    
    @property
    def end(self) -> int:
        return self.start + self.size
    
    def get_string(self) -> str:
        return normalize_input(self.payload)


class SegmentAssembler:
    """
    Classifies XMP segment headers and merges split payloads.
    
    Segment offsets point at the 0xFF byte of the segment marker.
    """
    
    @staticmethod
    def can_handle(chunk: bytes, offset: int) -> bool:
        """
        Check whether the segment at offset is an XMP segment (main or extended).
        
        Args:
            chunk: Container bytes
            offset: Offset of the segment marker
            
        Returns:
            True for APP1 segments whose header starts with the Adobe namespace
        """
        if offset + 4 + len(XMP_CORE_HEADER) > len(chunk):
            return False
        return (chunk[offset + 1] == APP1_MARKER
                and chunk[offset + 4:offset + 4 + len(XMP_CORE_HEADER)] == XMP_CORE_HEADER)
    
    @staticmethod
    def is_extended(chunk: bytes, offset: int) -> bool:
        header = chunk[offset + 4:offset + 4 + len(XMP_EXTENDED_HEADER)]
        return header == XMP_EXTENDED_HEADER
    
    @classmethod
    def header_length(cls, chunk: bytes, offset: int) -> int:
        """
        Number of bytes between the segment marker and the XMP payload.
        
        Args:
            chunk: Container bytes
            offset: Offset of the segment marker
            
        Returns:
            79 for extended segments, 33 for the main segment
        """
        if cls.is_extended(chunk, offset):
            return XMP_EXTENDED_DATA_OFFSET
        return XMP_MAIN_DATA_OFFSET
    
    @classmethod
    def classify(cls, chunk: bytes, offset: int) -> Optional[str]:
        """
        Report what kind of XMP segment starts at offset.
        
        Returns:
            'main', 'extended', or None if this is not an XMP segment
        """
        if not cls.can_handle(chunk, offset):
            return None
        if cls.is_extended(chunk, offset):
            return SEGMENT_EXTENDED
        if chunk[offset + 4:offset + 4 + len(XMP_MAIN_HEADER)] == XMP_MAIN_HEADER:
            return SEGMENT_MAIN
        return None
    
    @classmethod
    def find_position(cls, chunk: bytes, offset: int) -> RawSegment:
        """
        Locate the payload of the segment at offset.
        
        Args:
            chunk: Container bytes
            offset: Offset of the segment marker
            
        Returns:
            RawSegment with its payload sliced out of chunk
        """
        length = struct.unpack('>H', chunk[offset + 2:offset + 4])[0] + 2
        header_length = cls.header_length(chunk, offset)
        start = offset + header_length
        size = length - header_length
        segment = RawSegment(
            payload=bytes(chunk[start:start + size]),
            extended=header_length == XMP_EXTENDED_DATA_OFFSET,
            offset=offset,
            length=length,
            header_length=header_length,
            start=start,
            size=size,
        )
        if segment.extended:
            guid_start = offset + 4 + len(XMP_EXTENDED_HEADER) + 1
            guid_end = guid_start + GUID_LENGTH
            segment.guid = bytes(chunk[guid_start:guid_end]).decode('ascii', errors='replace')
            counters = chunk[guid_end:guid_end + 8]
            if len(counters) == 8:
                segment.full_length, segment.chunk_offset = struct.unpack('>II', counters)
        return segment
    
    @classmethod
    def handle_multi_segments(cls, segments: Sequence[RawSegment]) -> str:
        """
        Merge the main segment and its extended chunks into one document.
        
        Extended chunks are appended in arrival order without separators.
        
        Args:
            segments: Main segment first, then extended segments
            
        Returns:
            Document text ('' when there are no segments)
        """
        if not segments:
            return ''
        return segments[0].get_string() + '\n' + cls.merge_extended_chunks(segments)
    
    @staticmethod
    def merge_extended_chunks(segments: Sequence[RawSegment]) -> str:
        payloads = [segment.payload for segment in segments[1:]]
        # Multi-byte characters may straddle chunk boundaries
        if all(isinstance(payload, (bytes, bytearray)) for payload in payloads):
            return decode_bytes(b''.join(payloads))
        return ''.join(segment.get_string() for segment in segments[1:])
