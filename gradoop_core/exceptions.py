"""
Gradoop Core - Exceptions

Error kinds raised by the model, the binary codecs and the GDL loader.
"""

from typing import Optional


class GradoopError(Exception):
    """Base class for all gradoop_core errors"""
    pass


class FormatError(GradoopError, ValueError):
    """Raised when an identifier string is malformed"""
    pass


class UnsupportedTypeError(GradoopError, TypeError):
    """Raised when a value of an unsupported kind is constructed or decoded"""
    pass


class TypeMismatchError(GradoopError, TypeError):
    """Raised when a typed getter is called on a value of another kind"""
    pass


class CorruptEncodingError(GradoopError, ValueError):
    """Raised when a binary payload is truncated or invalid"""
    pass


class ParseError(GradoopError, ValueError):
    """
    Raised when GDL text is malformed.

    Carries the zero-based character offset of the offending token and
    the matching one-based line and column.
    """

    def __init__(self, message: str, position: int, line: int = 0, column: int = 0):
        self.message = message
        self.position = position
        self.line = line
        self.column = column
        super().__init__(f"{message} (line {line}, column {column}, offset {position})")


class ResourceError(GradoopError, OSError):
    """Raised when a GDL file or stream cannot be read"""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        super().__init__(message)
