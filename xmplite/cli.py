# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Command-line interface for xmplite

Prints the XMP metadata of JPEG files or XMP sidecar documents.

Copyright 2025 DNAi inc.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

from xmplite.exceptions import XMPLiteError
from xmplite.options import XMPOptions
from xmplite.xmp_parser import XMPParser


def flatten(metadata: Any, prefix: str = '') -> Iterator[Tuple[str, Any]]:
    """Yield (dotted key, leaf value) pairs of a nested metadata tree."""
    if isinstance(metadata, dict):
        for key, value in metadata.items():
            yield from flatten(value, f"{prefix}.{key}" if prefix else key)
    else:
        yield prefix, metadata


def format_output(metadata: Any, format_type: str = "json") -> str:
    """
    Format metadata output based on format type.
    
    Args:
        metadata: Parsed XMP tree (may be None)
        format_type: Output format ('json' or 'text')
        
    Returns:
        Formatted output string
    """
    if format_type == "json":
        return json.dumps(metadata, indent=2, ensure_ascii=False)
    if metadata is None:
        return ""
    lines = []
    for key, value in flatten(metadata):
        if isinstance(value, list):
            value = ', '.join(str(item) for item in value)
        lines.append(f"{key}: {value}" if key else str(value))
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='xmplite',
        description="xmplite - Extract XMP metadata from JPEG files and XMP sidecars",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print XMP as JSON
  xmplite photo.jpg
  
  # Nest properties under their namespace prefix
  xmplite -g photo.jpg
  
  # Ignore extended XMP segments
  xmplite --single-segment photo.jpg
""",
    )
    parser.add_argument('files', nargs='+', type=Path, help='JPEG or XMP files to read')
    parser.add_argument('-g', '--group-by-namespace', action='store_true',
                        help='Nest properties under their namespace prefix')
    parser.add_argument('--single-segment', action='store_true',
                        help='Only read the main XMP segment of JPEG files')
    parser.add_argument('-f', '--format', choices=('json', 'text'), default='json',
                        help='Output format (default: json)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    CLI entry point.
    
    Returns:
        Exit status (1 if any file could not be read)
    """
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(name)s: %(message)s')
    
    options = XMPOptions(group_by_namespace=args.group_by_namespace,
                         multi_segment=not args.single_segment)
    status = 0
    results: Dict[str, Any] = {}
    for file_path in args.files:
        try:
            results[str(file_path)] = XMPParser(file_path=file_path, options=options).read()
        except XMPLiteError as e:
            print(f"Error: {file_path}: {e.message}", file=sys.stderr)
            status = 1
    
    if len(args.files) == 1:
        if results:
            print(format_output(next(iter(results.values())), args.format))
    elif args.format == 'json':
        print(format_output(results, 'json'))
    else:
        for file_path, metadata in results.items():
            print(f"======== {file_path}")
            print(format_output(metadata, 'text'))
    return status


if __name__ == "__main__":
    sys.exit(main())
