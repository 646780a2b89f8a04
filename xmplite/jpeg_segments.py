# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
JPEG segment scanner

Walks the marker segments of a JPEG file and collects the APP1 segments
that carry XMP, in the order they appear in the file.

Copyright 2025 DNAi inc.
"""

import logging
import re
import struct
from typing import List, Optional, Tuple

from xmplite.exceptions import MetadataReadError
from xmplite.segments import RawSegment, SegmentAssembler

logger = logging.getLogger(__name__)

# xmpNote:HasExtendedXMP="<GUID>" in the main packet, attribute or element form
HAS_EXTENDED_XMP_PATTERN = re.compile(
    rb'''xmpNote:HasExtendedXMP\s*(?:=\s*["']|>)\s*([0-9A-Fa-f]{32})'''
)


class JPEGSegmentScanner:
    """
    Finds XMP segments in JPEG file data.
    
    Only the marker structure is parsed; image data is never decoded.
    """
    
    # JPEG markers
    SOI = 0xFFD8  # Start of Image
    EOI = 0xD9  # End of Image
    SOS = 0xDA  # Start of Scan
    
    def __init__(self, file_data: bytes):
        """
        Initialize the scanner and index all marker segments.
        
        Args:
            file_data: Complete JPEG file data
        """
        self.file_data = file_data
        self.segments: List[Tuple[int, int, int]] = []  # (marker, offset, length)
        self._parse_segments()
    
    def _parse_segments(self) -> None:
        """
        Parse JPEG file to find all segments up to the first scan.
        """
        if len(self.file_data) < 2 or struct.unpack('>H', self.file_data[0:2])[0] != self.SOI:
            raise MetadataReadError("Invalid JPEG file: missing SOI marker")
        
        i = 2
        while i < len(self.file_data) - 1:
            if self.file_data[i] != 0xFF:
                i += 1
                continue
            
            marker_byte = self.file_data[i + 1]
            
            # Fill bytes and stuffed zero bytes
            if marker_byte in (0xFF, 0x00):
                i += 1
                continue
            
            if marker_byte in (self.EOI, self.SOS):
                break
            
            if i + 3 >= len(self.file_data):
                break
            
            length = struct.unpack('>H', self.file_data[i + 2:i + 4])[0]
            self.segments.append((marker_byte, i, length))
            i += 2 + length
    
    def xmp_segments(self, multi_segment: bool = True) -> List[RawSegment]:
        """
        Collect XMP segments, main segment first.
        
        Extended segments are kept in the order they appear in the file.
        When the main packet names the GUID of its extension
        (xmpNote:HasExtendedXMP), extended segments with another GUID are
        dropped.
        
        Args:
            multi_segment: If False, return only the main segment
            
        Returns:
            List of RawSegment (empty if the file carries no main XMP segment)
        """
        main: Optional[RawSegment] = None
        extended: List[RawSegment] = []
        
        for marker, offset, length in self.segments:
            kind = SegmentAssembler.classify(self.file_data, offset)
            if kind is None:
                continue
            segment = SegmentAssembler.find_position(self.file_data, offset)
            logger.debug("Found %s XMP segment at offset %d (%d bytes)", kind, offset, segment.size)
            if segment.extended:
                extended.append(segment)
            elif main is None:
                main = segment
            else:
                logger.debug("Ignoring additional main XMP segment at offset %d", offset)
        
        if main is None:
            if extended:
                logger.debug("Dropping %d extended XMP segments without a main segment", len(extended))
            return []
        
        if not multi_segment:
            return [main]
        
        guid = self.extended_guid(main)
        if guid is not None:
            extended = [segment for segment in extended if (segment.guid or '').upper() == guid]
        
        return [main, *extended]
    
    @staticmethod
    def extended_guid(main: RawSegment) -> Optional[str]:
        """
        Read the GUID of the extended packet announced by the main packet.
        
        Returns:
            Upper-case GUID, or None if the main packet announces none
        """
        payload = main.payload
        if isinstance(payload, str):
            payload = payload.encode('utf-8')
        match = HAS_EXTENDED_XMP_PATTERN.search(payload)
        if not match:
            return None
        return match.group(1).decode('ascii').upper()
