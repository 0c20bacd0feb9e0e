"""
Bencode decoding and encoding library.

Turns bencoded byte buffers (integers, byte strings, lists and dictionaries,
as found in peer-to-peer file-sharing metadata) into native Python values and
back, preserving dictionary key order so that re-encoding a decoded value
reproduces the original bytes.
"""

import contextlib
import logging
import os
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import IO
from typing import Any

from ._bytestring import ByteString
from ._errors import BencodeDecodeError
from ._errors import EndOfFile
from ._errors import ErrorKind
from ._errors import IntegerOverflow
from ._errors import KeyWithoutValue
from ._errors import MissingIdentifier
from ._errors import NegativeStringLen
from ._errors import NegativeZero
from ._errors import NestingTooDeep
from ._errors import NotANumber
from ._errors import Position
from ._errors import StringWithoutLength

__version__ = "0.1.0"

logger = logging.getLogger(__name__)

# Type aliases for domain concepts - recursive definition
BencodeValue = (
    int | ByteString | list["BencodeValue"] | dict[ByteString, "BencodeValue"]
)
# Anything the encoder may be handed, including hook output
BencodeValueLoose = Any
Buffer = bytes | bytearray | memoryview

ObjectPairsHook = (
    Callable[[list[tuple[ByteString, BencodeValueLoose]]], Any] | None
)
DefaultHook = Callable[[Any], Any] | None

# Profiling infrastructure - zero-cost when disabled
PROFILE_HOT_PATHS = __debug__ and "BZON_PROFILE" in os.environ


def _max_depth_from_env(default: int = 256) -> int:
    """Reads BZON_MAX_DEPTH, falling back to default when it is unusable."""
    raw = os.environ.get("BZON_MAX_DEPTH")
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        value = -1
    if value < 0:
        logger.warning(
            "Ignoring BZON_MAX_DEPTH=%r, expected a non-negative integer; "
            "using %d",
            raw,
            default,
        )
        return default
    return value


DEFAULT_MAX_DEPTH = _max_depth_from_env()

INT64_MAX = 2**63 - 1
INT64_MIN = -(2**63)

# Grammar literals as byte values
_INT_START = ord("i")
_LIST_START = ord("l")
_DICT_START = ord("d")
_END = ord("e")
_COLON = ord(":")
_MINUS = ord("-")
_ZERO = ord("0")
_DIGITS = frozenset(b"0123456789")


@dataclass
class HotPathStats:
    """
    Per-production counters collected while profiling.

    bytes_consumed sums how far the decoder cursor moved inside the
    production, including on failure.
    """

    function_name: str
    call_count: int = 0
    total_time_ns: int = 0
    bytes_consumed: int = 0

    def record_call(self, duration_ns: int, consumed: int = 0) -> None:
        self.call_count += 1
        self.total_time_ns += duration_ns
        self.bytes_consumed += consumed


_hot_path_stats: dict[str, HotPathStats] = {}


def get_hot_path_stats() -> dict[str, HotPathStats]:
    """Returns current profiling statistics, empty unless BZON_PROFILE."""
    return _hot_path_stats.copy()


def clear_hot_path_stats() -> None:
    _hot_path_stats.clear()


if PROFILE_HOT_PATHS:

    class ProfileContext:
        """Times a production and measures the cursor advance it made."""

        def __init__(
            self, func_name: str, decoder: "BDecoder | None" = None
        ) -> None:
            self.func_name = func_name
            self.decoder = decoder
            self.start_pos = 0
            self.start_time = 0

        def __enter__(self) -> "ProfileContext":
            if self.decoder is not None:
                self.start_pos = self.decoder.pos
            self.start_time = time.perf_counter_ns()
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            duration = time.perf_counter_ns() - self.start_time
            consumed = 0
            if self.decoder is not None:
                consumed = self.decoder.pos - self.start_pos
            stats = _hot_path_stats.setdefault(
                self.func_name, HotPathStats(self.func_name)
            )
            stats.record_call(duration, consumed)

else:
    _NO_PROFILE = contextlib.nullcontext()

    def ProfileContext(  # type: ignore[no-redef]  # noqa: N802
        func_name: str, decoder: "BDecoder | None" = None
    ) -> contextlib.nullcontext[None]:
        return _NO_PROFILE


@dataclass(frozen=True)
class DecodeConfig:
    """
    Configures bencode decoding behavior with immutable settings.

    max_depth bounds how many lists and dictionaries may be open at once.
    object_pairs_hook, when set, receives every dictionary as a list of
    (key, value) pairs in wire order, duplicates included, and its return
    value replaces the dictionary.
    """

    max_depth: int = DEFAULT_MAX_DEPTH
    object_pairs_hook: ObjectPairsHook = None

    def __post_init__(self) -> None:
        if not isinstance(self.max_depth, int) or isinstance(
            self.max_depth, bool
        ):
            raise TypeError("max_depth must be an integer")
        if self.max_depth < 0:
            raise ValueError("max_depth must be non-negative")


@dataclass(frozen=True)
class EncodeConfig:
    """
    Configures bencode encoding behavior with immutable settings.

    Dictionaries are written in their iteration order unless sort_keys is
    set, in which case keys are ordered by their raw bytes. default is
    called for objects outside the value model and must return something
    encodable.
    """

    sort_keys: bool = False
    default: DefaultHook = None

    def __post_init__(self) -> None:
        if not isinstance(self.sort_keys, bool):
            raise TypeError("sort_keys must be a boolean")


class BDecoder:
    """
    Recursive-descent decoder over a borrowed byte buffer.

    The buffer is never copied or mutated; only the bodies of byte strings
    are copied out. ``pos`` always points at the next unconsumed byte, and
    on failure it is left where the malformation was detected, which is
    also the ``pos`` of the raised error. One instance per decode call.
    """

    def __init__(self, data: Buffer, config: DecodeConfig):
        self.data = data
        self.pos = 0
        self.length = len(data)
        self.config = config
        self.depth = 0

    def peek(self) -> int | None:
        """Returns the current byte without advancing, None at end."""
        return self.data[self.pos] if self.pos < self.length else None

    def expect(self, expected: int) -> None:
        """Consumes one byte that must equal expected."""
        char = self.peek()
        if char is None:
            raise EndOfFile(self.data, self.pos)
        if char != expected:
            raise MissingIdentifier(chr(expected), self.data, self.pos)
        self.pos += 1

    def read_number(self, *, canonical: bool = False) -> int:
        """
        Reads an optionally negative decimal number.

        With canonical set, a leading zero ends the number so that only
        the value 0 itself may start with one.
        """
        negative = False
        if self.peek() == _MINUS:
            negative = True
            self.pos += 1

        char = self.peek()
        if char is None:
            raise EndOfFile(self.data, self.pos)
        if char not in _DIGITS:
            raise NotANumber(self.data, self.pos)
        if negative and char == _ZERO:
            raise NegativeZero(self.data, self.pos)

        limit = -INT64_MIN if negative else INT64_MAX
        acc = 0
        while char is not None and char in _DIGITS:
            acc = acc * 10 + (char - _ZERO)
            if acc > limit:
                raise IntegerOverflow(self.data, self.pos)
            self.pos += 1
            if canonical and acc == 0:
                break
            char = self.peek()

        return -acc if negative else acc

    def parse_value(self) -> BencodeValueLoose:
        """Dispatches on the next byte to the matching production."""
        char = self.peek()
        if char is None:
            raise EndOfFile(self.data, self.pos)
        if char == _INT_START:
            return self.parse_integer()
        elif char == _LIST_START:
            return self.parse_list()
        elif char == _DICT_START:
            return self.parse_dict()
        # Anything else has to be a length prefix
        return self.parse_string()

    def parse_integer(self) -> int:
        """Parses ``i<digits>e``."""
        with ProfileContext("parse_integer", self):
            self.expect(_INT_START)
            value = self.read_number(canonical=True)
            self.expect(_END)
            return value

    def parse_string(self) -> ByteString:
        """Parses ``<length>:<bytes>``."""
        with ProfileContext("parse_string", self):
            try:
                length = self.read_number()
            except BencodeDecodeError as e:
                raise StringWithoutLength(self.data, self.pos) from e
            if length < 0:
                raise NegativeStringLen(self.data, self.pos)
            self.expect(_COLON)

            start = self.pos
            end = start + length
            if end > self.length:
                self.pos = self.length
                raise EndOfFile(self.data, self.pos)
            self.pos = end
            return ByteString(self.data[start:end])

    def _enter_container(self, opening: int) -> None:
        self.expect(opening)
        self.depth += 1
        if self.depth > self.config.max_depth:
            raise NestingTooDeep(self.config.max_depth, self.data, self.pos)

    def parse_list(self) -> list[BencodeValueLoose]:
        """Parses ``l<value>*e``."""
        with ProfileContext("parse_list", self):
            self._enter_container(_LIST_START)

            values: list[BencodeValueLoose] = []
            while self.peek() not in (None, _END):
                values.append(self.parse_value())

            self.expect(_END)
            self.depth -= 1
            return values

    def parse_dict(self) -> BencodeValueLoose:
        """Parses ``d(<string><value>)*e``."""
        with ProfileContext("parse_dict", self):
            self._enter_container(_DICT_START)

            pairs: list[tuple[ByteString, BencodeValueLoose]] = []
            while self.peek() not in (None, _END):
                key = self.parse_string()
                try:
                    value = self.parse_value()
                except BencodeDecodeError as e:
                    raise KeyWithoutValue(key, self.data, self.pos) from e
                pairs.append((key, value))

            self.expect(_END)
            self.depth -= 1
            return self._apply_object_hooks(pairs)

    def _apply_object_hooks(
        self, pairs: list[tuple[ByteString, BencodeValueLoose]]
    ) -> BencodeValueLoose:
        """Builds a dictionary from decoded pairs; the last duplicate wins."""
        if self.config.object_pairs_hook:
            return self.config.object_pairs_hook(pairs)

        obj: dict[ByteString, BencodeValueLoose] = {}
        for key, value in pairs:
            # Re-inserting moves a duplicate key to its latest position
            obj.pop(key, None)
            obj[key] = value
        return obj


def _check_buffer(data: Any) -> None:
    if isinstance(data, str):
        raise TypeError("the bencoded object must be bytes-like, not str")
    if not isinstance(data, bytes | bytearray | memoryview):
        raise TypeError(
            "the bencoded object must be bytes-like, "
            f"not {type(data).__name__}"
        )


def raw_decode(
    data: Buffer, **kwargs: Any
) -> tuple[BencodeValueLoose, Position]:
    """
    Decodes one value from the start of data.

    Returns the value and the offset just past it. Bytes after that offset
    are not inspected.
    """
    _check_buffer(data)

    config = DecodeConfig(**kwargs)
    decoder = BDecoder(data, config)
    with ProfileContext("decode", decoder):
        try:
            try:
                value = decoder.parse_value()
            except RecursionError as e:
                # The interpreter stack ran out before max_depth was reached
                raise NestingTooDeep(config.max_depth, data, decoder.pos) from e
        except BencodeDecodeError as e:
            logger.debug(
                "Decoding failed with %s at byte %d of %d",
                e.kind.value,
                e.pos,
                len(data),
            )
            raise
    return value, decoder.pos


def decode(data: Buffer, **kwargs: Any) -> BencodeValueLoose:
    """
    Decodes bencoded bytes into Python values.

    Integers become ``int``, byte strings ``ByteString``, lists ``list`` and
    dictionaries ``dict`` keyed by ``ByteString`` in wire order.
    """
    value, _ = raw_decode(data, **kwargs)
    return value


def _encode_integer(n: int, buf: bytearray) -> None:
    if not INT64_MIN <= n <= INT64_MAX:
        msg = f"Integer {n} is out of the signed 64-bit range"
        raise ValueError(msg)
    buf += b"i%de" % n


def _encode_bytes(s: bytes | bytearray, buf: bytearray) -> None:
    buf += b"%d:" % len(s)
    buf += s


def _encode_list(
    items: list[Any] | tuple[Any, ...], config: EncodeConfig, buf: bytearray
) -> None:
    buf.append(_LIST_START)
    for item in items:
        _encode_value(item, config, buf)
    buf.append(_END)


def _encode_dict(
    d: dict[Any, Any], config: EncodeConfig, buf: bytearray
) -> None:
    """Encode dictionary in stored order, or by raw key bytes if sorting."""
    for key in d:
        if not isinstance(key, bytes):
            msg = f"keys must be bytes, not {type(key).__name__}"
            raise TypeError(msg)

    items = list(d.items())
    if config.sort_keys:
        items.sort(key=lambda item: bytes(item[0]))

    buf.append(_DICT_START)
    for key, value in items:
        _encode_bytes(key, buf)
        _encode_value(value, config, buf)
    buf.append(_END)


def _encode_value(
    obj: BencodeValueLoose, config: EncodeConfig, buf: bytearray
) -> None:
    """Encode any bencode-serializable value."""
    if isinstance(obj, int) and not isinstance(obj, bool):
        _encode_integer(obj, buf)
    elif isinstance(obj, bytes | bytearray):
        _encode_bytes(obj, buf)
    elif isinstance(obj, list | tuple):
        _encode_list(obj, config, buf)
    elif isinstance(obj, dict):
        _encode_dict(obj, config, buf)
    elif config.default is not None:
        _encode_value(config.default(obj), config, buf)
    else:
        msg = f"Object of type {type(obj).__name__} is not bencode serializable"
        raise TypeError(msg)


def encode(obj: BencodeValueLoose, **kwargs: Any) -> bytes:
    """
    Serializes Python values to bencoded bytes.

    Accepts int, bytes (including ByteString), list or tuple, and dict with
    bytes keys. Dictionaries keep their iteration order unless sort_keys
    is passed.
    """
    config = EncodeConfig(**kwargs)
    buf = bytearray()
    with ProfileContext("encode"):
        _encode_value(obj, config, buf)
    return bytes(buf)


def load(fp: IO[bytes], **kwargs: Any) -> BencodeValueLoose:
    """
    Decodes bencoded data read from a binary file-like object.
    """
    if not hasattr(fp, "read"):
        raise TypeError("fp must have a read() method")

    return decode(fp.read(), **kwargs)


def dump(obj: BencodeValueLoose, fp: IO[bytes], **kwargs: Any) -> None:
    """
    Writes the bencoding of obj to a binary file-like object.
    """
    if not hasattr(fp, "write"):
        raise TypeError("fp must have a write() method")

    fp.write(encode(obj, **kwargs))


__all__ = [
    "DEFAULT_MAX_DEPTH",
    "BDecoder",
    "BencodeDecodeError",
    "BencodeValue",
    "ByteString",
    "DecodeConfig",
    "EncodeConfig",
    "EndOfFile",
    "ErrorKind",
    "HotPathStats",
    "IntegerOverflow",
    "KeyWithoutValue",
    "MissingIdentifier",
    "NegativeStringLen",
    "NegativeZero",
    "NestingTooDeep",
    "NotANumber",
    "StringWithoutLength",
    "clear_hot_path_stats",
    "decode",
    "dump",
    "encode",
    "get_hot_path_stats",
    "load",
    "raw_decode",
]
