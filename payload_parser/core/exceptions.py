class ParserError(ValueError):
    """Base exception for all payload parser errors."""


class ParseError(ParserError):
    """Raised when the envelope itself is structurally invalid (malformed JSON)."""


class DecodeError(ParserError):
    """Raised when the device payload cannot be decoded with the configured layout."""


class LayoutError(ParserError):
    """Raised when a byte-layout table is invalid."""
