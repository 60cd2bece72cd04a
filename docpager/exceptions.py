"""Custom exceptions for docpager."""

from typing import Optional


class DocPagerError(Exception):
    """Base exception for docpager errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class ContentParseError(DocPagerError):
    """Raised when document content cannot be turned into a block stream."""

    pass


class MeasurementError(DocPagerError):
    """Raised by a size oracle that cannot determine a block height."""

    pass


class PaginationError(DocPagerError):
    """Raised when a pagination pass fails."""

    pass


class CompositionError(DocPagerError):
    """Exception raised during page composition."""

    pass


class TemplateError(DocPagerError):
    """Exception raised during skin selection or rendering."""

    pass


class ConfigurationError(DocPagerError):
    """Exception raised for invalid page or pagination settings."""

    pass
