"""
Custom exceptions for the extraction engine.

The engine itself reports "no table" and "no rows" as result statuses; these
exceptions are raised only when a caller asks for them via
``ExtractionResult.unwrap()``, or by the profile loader.
"""


class ExtractionError(Exception):
    """Base exception for extraction errors"""
    pass


class TableNotFoundError(ExtractionError):
    """Raised when no header row cleared any acceptance threshold"""
    pass


class EmptyTableError(ExtractionError):
    """Raised when a header was found but no data rows survived filtering"""
    pass


class ProfileError(ExtractionError):
    """Raised when an engine profile file cannot be read or parsed"""
    pass
