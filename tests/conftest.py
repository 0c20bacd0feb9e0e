"""
Pytest configuration and shared fixtures for bzon tests.

Provides immutable test data fixtures covering well-formed and malformed
bencoded buffers, with the exact cursor positions the decoder must report.
"""

from dataclasses import dataclass
from typing import Any

import pytest

import bzon


@dataclass(frozen=True)
class BencodeTestCase:
    """
    Immutable container for bencode test case data.

    For passing cases, expected_output is the decoded value and consumed is
    the offset just past it. For failing cases, error_type is the expected
    error kind and consumed is the position the error must report.
    """

    description: str
    input_data: bytes
    expected_output: Any = None
    consumed: int = 0
    error_type: type[bzon.BencodeDecodeError] | None = None


@pytest.fixture
def bencode_pass_cases() -> list[BencodeTestCase]:
    """
    Provides buffers that must decode, with the value and bytes consumed.
    """
    return [
        BencodeTestCase("positive integer", b"i123e", 123, 5),
        BencodeTestCase("negative integer", b"i-123e", -123, 6),
        BencodeTestCase("zero", b"i0e", 0, 3),
        BencodeTestCase(
            "largest integer",
            b"i9223372036854775807e",
            9223372036854775807,
            21,
        ),
        BencodeTestCase(
            "smallest integer",
            b"i-9223372036854775808e",
            -9223372036854775808,
            22,
        ),
        BencodeTestCase("byte string", b"3:abc", b"abc", 5),
        BencodeTestCase("empty byte string", b"0:", b"", 2),
        BencodeTestCase(
            "binary byte string", b"4:\x00\xff\n:", b"\x00\xff\n:", 6
        ),
        BencodeTestCase("length with leading zero", b"05:hello", b"hello", 8),
        BencodeTestCase("empty list", b"le", [], 2),
        BencodeTestCase("empty dictionary", b"de", {}, 2),
        BencodeTestCase("list of integer", b"li123ee", [123], 7),
        BencodeTestCase(
            "list of strings", b"l3:abc4:defge", [b"abc", b"defg"], 13
        ),
        BencodeTestCase("list in list", b"llee", [[]], 4),
        BencodeTestCase(
            "sibling nested lists", b"llleelleee", [[[]], [[]]], 10
        ),
        BencodeTestCase(
            "uneven nested lists",
            b"lllleeelleee",
            [[[[]]], [[]]],
            12,
        ),
        BencodeTestCase("flat dictionary", b"d1:ai123ee", {b"a": 123}, 10),
        BencodeTestCase(
            "dictionary of lists",
            b"d1:al3:heye1:blee",
            {b"a": [b"hey"], b"b": []},
            17,
        ),
        BencodeTestCase(
            "nested dictionaries",
            b"d5:innerd1:ai345e1:b3:wowe6:inner2dee",
            {b"inner": {b"a": 345, b"b": b"wow"}, b"inner2": {}},
            37,
        ),
        BencodeTestCase("trailing data ignored", b"i1ei2e", 1, 3),
    ]


@pytest.fixture
def bencode_fail_cases() -> list[BencodeTestCase]:
    """
    Provides malformed buffers with the error kind and position expected.
    """
    return [
        BencodeTestCase(
            "empty input", b"", consumed=0, error_type=bzon.EndOfFile
        ),
        BencodeTestCase(
            "negative zero", b"i-0e", consumed=2, error_type=bzon.NegativeZero
        ),
        BencodeTestCase(
            "integer leading zero",
            b"i03e",
            consumed=2,
            error_type=bzon.MissingIdentifier,
        ),
        BencodeTestCase(
            "integer without digits",
            b"iabc",
            consumed=1,
            error_type=bzon.NotANumber,
        ),
        BencodeTestCase(
            "negative integer without digits",
            b"i-abc",
            consumed=2,
            error_type=bzon.NotANumber,
        ),
        BencodeTestCase(
            "empty integer", b"ie", consumed=1, error_type=bzon.NotANumber
        ),
        BencodeTestCase(
            "integer without end",
            b"i23abc",
            consumed=3,
            error_type=bzon.MissingIdentifier,
        ),
        BencodeTestCase(
            "truncated integer", b"i23", consumed=3, error_type=bzon.EndOfFile
        ),
        BencodeTestCase(
            "truncated after sign", b"i-", consumed=2, error_type=bzon.EndOfFile
        ),
        BencodeTestCase(
            "integer overflow",
            b"i9223372036854775808e",
            consumed=19,
            error_type=bzon.IntegerOverflow,
        ),
        BencodeTestCase(
            "negative integer overflow",
            b"i-9223372036854775809e",
            consumed=20,
            error_type=bzon.IntegerOverflow,
        ),
        BencodeTestCase(
            "truncated string body",
            b"3:ab",
            consumed=4,
            error_type=bzon.EndOfFile,
        ),
        BencodeTestCase(
            "string length past end",
            b"10:abc",
            consumed=6,
            error_type=bzon.EndOfFile,
        ),
        BencodeTestCase(
            "string without length",
            b"abc",
            consumed=0,
            error_type=bzon.StringWithoutLength,
        ),
        BencodeTestCase(
            "lone minus", b"-", consumed=1, error_type=bzon.StringWithoutLength
        ),
        BencodeTestCase(
            "oversized string length",
            b"99999999999999999999:",
            consumed=18,
            error_type=bzon.StringWithoutLength,
        ),
        BencodeTestCase(
            "negative string length",
            b"-3:abc",
            consumed=2,
            error_type=bzon.NegativeStringLen,
        ),
        BencodeTestCase(
            "string without colon",
            b"3abc",
            consumed=1,
            error_type=bzon.MissingIdentifier,
        ),
        BencodeTestCase(
            "length without colon", b"5", consumed=1, error_type=bzon.EndOfFile
        ),
        BencodeTestCase(
            "unterminated list",
            b"l3:abc",
            consumed=6,
            error_type=bzon.EndOfFile,
        ),
        BencodeTestCase(
            "unbalanced nested lists",
            b"lllleelleee",
            consumed=11,
            error_type=bzon.EndOfFile,
        ),
        BencodeTestCase(
            "negative length in list",
            b"l-1:ae",
            consumed=3,
            error_type=bzon.NegativeStringLen,
        ),
        BencodeTestCase(
            "key without value",
            b"d4:iteme",
            consumed=7,
            error_type=bzon.KeyWithoutValue,
        ),
        BencodeTestCase(
            "unterminated dictionary",
            b"d1:a2:bc",
            consumed=8,
            error_type=bzon.EndOfFile,
        ),
        BencodeTestCase(
            "integer dictionary key",
            b"di1e1:ae",
            consumed=1,
            error_type=bzon.StringWithoutLength,
        ),
    ]
