"""
Decode error taxonomy.

Every failure the decoder can report is a subclass of BencodeDecodeError,
so callers can either catch the base class or match on a specific kind.
Errors carry the byte offset where decoding stopped and the input buffer.
"""

from __future__ import annotations

from enum import Enum
from typing import Any
from typing import ClassVar
from typing import TypeAlias

from ._bytestring import ByteString

Position: TypeAlias = int


class ErrorKind(Enum):
    """Closed set of decode failure kinds."""

    MISSING_IDENTIFIER = "missing_identifier"
    KEY_WITHOUT_VALUE = "key_without_value"
    STRING_WITHOUT_LENGTH = "string_without_length"
    NEGATIVE_STRING_LEN = "negative_string_len"
    NOT_A_NUMBER = "not_a_number"
    NEGATIVE_ZERO = "negative_zero"
    END_OF_FILE = "end_of_file"
    INTEGER_OVERFLOW = "integer_overflow"
    NESTING_TOO_DEEP = "nesting_too_deep"


class BencodeDecodeError(ValueError):
    """
    Handles bencode parsing failures with the byte offset of the failure.

    Two errors are equal when they are of the same kind, stopped at the same
    position and carry the same detail (expected byte, key, depth limit).
    """

    kind: ClassVar[ErrorKind]
    message: ClassVar[str] = "Invalid bencoded data"

    def __init__(self, doc: bytes = b"", pos: Position = 0) -> None:
        if not isinstance(pos, int) or pos < 0:
            raise ValueError("pos must be a non-negative integer")

        self.doc = doc
        self.pos = pos
        self.msg = self._format_message()

        super().__init__(f"{self.msg} at byte {pos}")

    def _format_message(self) -> str:
        return self.message

    def _detail(self) -> Any:
        return None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BencodeDecodeError):
            return NotImplemented
        return (
            type(self) is type(other)
            and self.pos == other.pos
            and self._detail() == other._detail()
        )

    def __hash__(self) -> int:
        return hash((type(self), self.pos, self._detail()))


class MissingIdentifier(BencodeDecodeError):
    """The next byte did not match a required grammar literal."""

    kind = ErrorKind.MISSING_IDENTIFIER

    def __init__(
        self, expected: str, doc: bytes = b"", pos: Position = 0
    ) -> None:
        self.expected = expected
        super().__init__(doc, pos)

    def _format_message(self) -> str:
        return f"Expected identifier '{self.expected}'"

    def _detail(self) -> Any:
        return self.expected


class KeyWithoutValue(BencodeDecodeError):
    """
    A dictionary key was read but its value could not be.

    The underlying failure is available as ``__cause__``.
    """

    kind = ErrorKind.KEY_WITHOUT_VALUE

    def __init__(
        self, key: ByteString, doc: bytes = b"", pos: Position = 0
    ) -> None:
        self.key = ByteString(key)
        super().__init__(doc, pos)

    def _format_message(self) -> str:
        return f"Dictionary key '{self.key}' without value"

    def _detail(self) -> Any:
        return bytes(self.key)


class StringWithoutLength(BencodeDecodeError):
    kind = ErrorKind.STRING_WITHOUT_LENGTH
    message = "Expected string length"


class NegativeStringLen(BencodeDecodeError):
    kind = ErrorKind.NEGATIVE_STRING_LEN
    message = "Negative string length is not allowed"


class NotANumber(BencodeDecodeError):
    kind = ErrorKind.NOT_A_NUMBER
    message = "Expected a number"


class NegativeZero(BencodeDecodeError):
    kind = ErrorKind.NEGATIVE_ZERO
    message = "Negative zero is not allowed. Use 0 instead"


class EndOfFile(BencodeDecodeError):
    kind = ErrorKind.END_OF_FILE
    message = "Unexpected end of file"


class IntegerOverflow(BencodeDecodeError):
    kind = ErrorKind.INTEGER_OVERFLOW
    message = "Integer does not fit in 64 bits"


class NestingTooDeep(BencodeDecodeError):
    """Lists and dictionaries are nested deeper than the configured limit."""

    kind = ErrorKind.NESTING_TOO_DEEP

    def __init__(
        self, max_depth: int, doc: bytes = b"", pos: Position = 0
    ) -> None:
        self.max_depth = max_depth
        super().__init__(doc, pos)

    def _format_message(self) -> str:
        return f"Nesting deeper than {self.max_depth} levels"

    def _detail(self) -> Any:
        return self.max_depth
