"""Exception hierarchy for docx-publisher."""


class DocxPublisherError(Exception):
    """Base exception for all docx-publisher errors."""


class ConversionError(DocxPublisherError):
    """Raised when a document cannot be converted to HTML."""


class DocumentOpenError(ConversionError):
    """Raised when the document container cannot be opened."""


class MalformedDocument(ConversionError):
    """Raised when a structural XML part cannot be parsed."""


class ConfigError(DocxPublisherError):
    """Raised when configuration is invalid or missing."""
