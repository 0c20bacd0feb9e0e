"""Binary-safe string type for bencoded string values and dictionary keys."""

from __future__ import annotations


class ByteString(bytes):
    """Immutable byte sequence with no assumed text encoding.

    Equality and hashing are those of ``bytes``, so a ByteString compares
    equal to (and looks up the same dictionary slot as) a plain ``bytes``
    object with identical content. The text rendering is for diagnostics
    only: invalid UTF-8 is replaced, never rejected.
    """

    __slots__ = ()

    @classmethod
    def from_str(cls, text: str) -> ByteString:
        """Builds a ByteString from the UTF-8 encoding of text."""
        return cls(text.encode("utf-8"))

    def __str__(self) -> str:
        return self.decode("utf-8", errors="replace")

    def __repr__(self) -> str:
        return f"ByteString({bytes(self)!r})"
