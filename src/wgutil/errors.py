"""
Error kinds raised by the support layer.

Absence of an element or key is NOT an error here: sequence and alist
operations return None for that case. Only the conditions below raise.
"""


class WgUtilError(Exception):
    """Base class for every error raised by wgutil."""
    pass


class OutOfRangeError(WgUtilError, IndexError):
    """Raised when an index or numeric argument is outside its valid range."""
    pass


class NotFoundError(WgUtilError, LookupError):
    """Raised when a host object (buffer, frame) cannot be found."""
    pass


class SexpParseError(WgUtilError, ValueError):
    """Raised when printed text cannot be read back as exactly one form."""
    pass


class SexpPrintError(WgUtilError, TypeError):
    """Raised when a value has no printed representation."""
    pass


class RecordError(WgUtilError):
    """Raised for invalid record definitions or unknown record forms."""
    pass


__all__ = [
    "WgUtilError",
    "OutOfRangeError",
    "NotFoundError",
    "SexpParseError",
    "SexpPrintError",
    "RecordError",
]
