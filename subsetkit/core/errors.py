"""
Error hierarchy for specification building and subsetting.
"""


class SubsetError(RuntimeError):
    """Base exception for everything that makes an invocation fail."""


class ParseError(SubsetError):
    """Raised when a directive value cannot be parsed."""


class MalformedNumber(ParseError):
    """Raised for non-numeric or negative input where an unsigned integer was expected."""


class InvalidRange(ParseError):
    """Raised when a range end precedes its start."""


class TagTooLong(ParseError):
    """Raised when a tag token exceeds four bytes."""


class UnresolvedGlyphName(SubsetError):
    """Raised at finalize when a glyph name is not present in the face."""


class FileOpenFailure(SubsetError):
    """Raised when a directive file cannot be opened."""


class FileReadFailure(SubsetError):
    """Raised when reading a directive file fails midway."""


class FileWriteFailure(SubsetError):
    """Raised when the subset result cannot be written out."""


class EngineFailure(SubsetError):
    """Raised when the font cannot be loaded or the subsetter produced no result."""


class DirectiveError(SubsetError):
    """Raised for unknown directives and malformed directive tokens."""
