# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Exception classes for screenshotmeta

Parsers and readers raise these internally. The public decode entry point
converts them into a DecodeResult so batch callers can branch on value.

Copyright 2025 DNAi inc.
"""


class ScreenshotMetaError(Exception):
    """
    Base exception for all screenshotmeta errors.

    All screenshotmeta exceptions inherit from this class, allowing
    catch-all error handling for any screenshot metadata error.
    """
    def __init__(self, message: str = ""):
        """
        Initialize the exception with an optional error message.

        Args:
            message: Descriptive error message explaining what went wrong
        """
        self.message = message
        super().__init__(message)


class MetadataReadError(ScreenshotMetaError):
    """
    Raised when screenshot metadata cannot be read or decoded.
    """
    pass


class NotAContainerFileError(MetadataReadError):
    """
    Raised when a file is missing, is not named *.png, is too small,
    or does not start with the PNG signature.
    """
    pass


class IoReadError(MetadataReadError):
    """
    Raised when the file exists but reading it fails.
    """
    pass


class UnknownMetadataFormatError(MetadataReadError):
    """
    Raised when description text is neither LFS nor a JSON document.
    """
    pass


class MalformedLfsPayloadError(MetadataReadError):
    """
    Raised when an LFS / screenshotmanager payload is missing a token or
    field, or carries a non-numeric version.
    """
    pass


class MalformedStructuredPayloadError(MetadataReadError):
    """
    Raised when a JSON metadata document is invalid or has wrong field types.
    """
    pass
