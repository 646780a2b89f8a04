# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Exception classes for xmplite

The XMP matcher itself never raises: malformed payloads fall back to
empty or partial results. These exceptions belong to the glue around it
(file reading and JPEG segment scanning).

Copyright 2025 DNAi inc.
"""


class XMPLiteError(Exception):
    """
    Base exception for errors raised while loading XMP input.
    
    Parsing XMP text never raises; only reading files and walking
    JPEG markers can fail.
    """
    def __init__(self, message: str = ""):
        """
        Args:
            message: Description of the failure (also kept as .message for the CLI)
        """
        self.message = message
        super().__init__(message)


class MetadataReadError(XMPLiteError):
    """
    Raised when XMP metadata cannot be read from a file.
    
    This exception is raised when:
    - The file cannot be opened or read
    - A JPEG file is missing its SOI marker
    """
    pass
