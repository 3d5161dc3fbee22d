"""Exceptions raised by the Toon codec and its helpers."""


class ToonError(Exception):
    """Base class for toon_convert errors."""


class StructureError(ToonError, ValueError):
    """Value graph is cyclic or nested deeper than the encoder allows."""


class InvalidJSONError(ToonError, ValueError):
    """Source text is not valid JSON."""

    def __init__(self, message: str, lineno: int = 0, colno: int = 0):
        super().__init__(message)
        self.lineno = lineno
        self.colno = colno
