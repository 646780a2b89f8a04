# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
XMP (Extensible Metadata Platform) parser

This module turns XMP packets into nested Python values. It reads XMP
from JPEG APP1 segments (including extended XMP split over several
segments) or from standalone XMP sidecar documents.

The packet may or may not be wrapped. All of these occur in the wild:
    <?xpacket><x:xmpmeta><rdf:RDF>
    <?xpacket><rdf:RDF>
    <x:xmpmeta><rdf:RDF>

Copyright 2025 DNAi inc.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from xmplite.encoding import normalize_input
from xmplite.exceptions import MetadataReadError
from xmplite.jpeg_segments import JPEGSegmentScanner
from xmplite.options import XMPOptions
from xmplite.segments import RawSegment, SegmentAssembler
from xmplite.xml_tag import VALUE_PROP, XmlTag, assign_to_object, none_if_empty

logger = logging.getLogger(__name__)

JPEG_SIGNATURE = b'\xff\xd8'


class XMPParser:
    """
    Parser for XMP metadata.
    
    Usage:
    
        parser = XMPParser(file_path='photo.jpg')
        metadata = parser.read()
    
        metadata = XMPParser().parse(xmp_string)
    
    Properties are flattened by local name unless
    ``options.group_by_namespace`` is set, in which case they are nested
    under their namespace prefix (e.g. ``{'dc': {...}, 'xmp': {...}}``).
    """
    
    def __init__(self, file_path: Optional[Union[str, Path]] = None, file_data: Optional[bytes] = None,
                 options: Optional[XMPOptions] = None):
        """
        Initialize XMP parser.
        
        Args:
            file_path: Path to file (if reading from file)
            file_data: File data bytes (if reading from memory)
            options: Parser options (defaults to XMPOptions())
        """
        self.file_path = Path(file_path) if file_path else None
        self.file_data = file_data
        self.options = options or XMPOptions()
    
    def read(self) -> Optional[Any]:
        """
        Read and parse XMP metadata from the file.
        
        JPEG files are scanned for XMP segments. Anything else is treated
        as an XMP document (e.g. an .xmp sidecar).
        
        Returns:
            Parsed metadata, or None if the file carries no XMP
            
        Raises:
            ValueError: If neither file_path nor file_data was provided
            MetadataReadError: If the file cannot be read or is an invalid JPEG
        """
        file_data = self._load()
        if file_data.startswith(JPEG_SIGNATURE):
            segments = JPEGSegmentScanner(file_data).xmp_segments(self.options.multi_segment)
            if not segments:
                logger.debug("No XMP segments found in JPEG data")
                return None
            return self.parse_segments(segments)
        return self.parse(file_data)
    
    def _load(self) -> bytes:
        if self.file_data is not None:
            return bytes(self.file_data)
        if self.file_path is None:
            raise ValueError("Either file_path or file_data must be provided")
        try:
            with open(self.file_path, 'rb') as f:
                return f.read()
        except OSError as e:
            raise MetadataReadError(f"Failed to read XMP metadata: {str(e)}") from e
    
    def parse_segments(self, segments: List[RawSegment]) -> Optional[Any]:
        """
        Merge main and extended segments and parse the resulting document.
        
        Args:
            segments: Main segment first, then extended segments in arrival order
            
        Returns:
            Parsed metadata or None
        """
        if not self.options.multi_segment:
            segments = segments[:1]
        return self.parse(SegmentAssembler.handle_multi_segments(segments))
    
    def parse(self, xmp_string: Any) -> Optional[Any]:
        """
        Parse an XMP document.
        
        Args:
            xmp_string: XMP text, raw bytes, or an object accepted by
                        the configured text extractor
            
        Returns:
            Nested metadata (dict in practice), or None if nothing was found
        """
        xmp_string = normalize_input(xmp_string, self.options.text_extractor)
        tags = XmlTag.find_all(xmp_string, 'rdf', 'Description')
        if not tags:
            logger.debug("No rdf:Description found, parsing the whole document")
            tags.append(XmlTag('rdf', 'Description', None, xmp_string))
        
        if self.options.group_by_namespace:
            output = self._group_by_namespace(tags)
        else:
            output = self._merge_descriptions(tags)
        return none_if_empty(output)
    
    @staticmethod
    def _group_by_namespace(tags: List[XmlTag]) -> Dict[str, Dict[str, Any]]:
        root: Dict[str, Dict[str, Any]] = {}
        for tag in tags:
            for prop in tag.properties:
                bucket: Dict[str, Any] = {}
                assign_to_object(prop, bucket)
                if bucket:
                    root.setdefault(prop.ns, {}).update(bucket)
        return root
    
    @staticmethod
    def _merge_descriptions(tags: List[XmlTag]) -> Optional[Any]:
        outputs = [tag.serialize() for tag in tags]
        if len(outputs) == 1:
            return outputs[0]
        merged: Dict[str, Any] = {}
        for output in outputs:
            if output is None:
                continue
            if isinstance(output, dict):
                merged.update(output)
            else:
                merged[VALUE_PROP] = output
        return merged


def parse_xmp(xmp_string: Any, group_by_namespace: bool = False) -> Optional[Any]:
    """
    Parse an XMP document with default options.
    
    Args:
        xmp_string: XMP text or bytes
        group_by_namespace: Nest properties under their namespace prefix
        
    Returns:
        Parsed metadata or None
        
    Example:
        >>> parse_xmp('<rdf:Description><dc:creator>Jane</dc:creator></rdf:Description>')
        {'creator': 'Jane'}
    """
    options = XMPOptions(group_by_namespace=group_by_namespace)
    return XMPParser(options=options).parse(xmp_string)


def read_xmp(source: Union[str, Path, bytes], **options: Any) -> Optional[Any]:
    """
    Read XMP metadata from a file path or from file data.
    
    Args:
        source: Path to a JPEG/XMP file, or the file's bytes
        **options: Option values accepted by XMPOptions.from_dict()
        
    Returns:
        Parsed metadata or None
    """
    xmp_options = XMPOptions.from_dict(options)
    if isinstance(source, (bytes, bytearray)):
        return XMPParser(file_data=bytes(source), options=xmp_options).read()
    return XMPParser(file_path=source, options=xmp_options).read()
