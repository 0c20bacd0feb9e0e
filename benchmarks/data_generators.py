"""
Test data generators for bencode benchmarks.

Creates bencoded buffers shaped like real peer-to-peer traffic:
- Torrent metainfo with many files and a large piece-hash string
- Tracker announce responses with compact peer lists
- DHT-style small dictionaries
- Deeply nested and integer-heavy lists
"""

import random
import string
from typing import Any

import bzon

_HASH_SIZE = 20


def generate_test_data(data_type: str) -> bytes:
    """Generates bencoded test data based on specified type."""
    generators = {
        "small_dict": _generate_small_dict,
        "metainfo": _generate_metainfo,
        "tracker_response": _generate_tracker_response,
        "nested_structure": _generate_nested_structure,
        "integer_list": _generate_integer_list,
    }

    if data_type not in generators:
        raise ValueError(f"Unknown data type: {data_type}")

    return bzon.encode(generators[data_type](), sort_keys=True)


def _random_name(length: int) -> bytes:
    return "".join(random.choices(string.ascii_lowercase, k=length)).encode()


def _generate_small_dict() -> dict[bytes, Any]:
    """Generates a DHT ping query (< 100 bytes)."""
    return {
        b"t": b"aa",
        b"y": b"q",
        b"q": b"ping",
        b"a": {b"id": random.randbytes(_HASH_SIZE)},
    }


def _generate_metainfo() -> dict[bytes, Any]:
    """Generates a multi-file torrent (> 100KB, mostly piece hashes)."""
    files = [
        {
            b"length": random.randint(1, 2**32),
            b"path": [_random_name(8), _random_name(12) + b".dat"],
        }
        for _ in range(200)
    ]
    return {
        b"announce": b"udp://tracker.example.org:6969/announce",
        b"creation date": 1700000000,
        b"info": {
            b"files": files,
            b"name": _random_name(16),
            b"piece length": 262144,
            b"pieces": random.randbytes(_HASH_SIZE * 5000),
        },
    }


def _generate_tracker_response() -> dict[bytes, Any]:
    """Generates a tracker announce response with a non-compact peer list."""
    return {
        b"complete": random.randint(0, 5000),
        b"incomplete": random.randint(0, 5000),
        b"interval": 1800,
        b"peers": [
            {
                b"ip": f"10.{i // 256}.{i % 256}.1".encode(),
                b"peer id": random.randbytes(_HASH_SIZE),
                b"port": random.randint(1024, 65535),
            }
            for i in range(500)
        ],
    }


def _generate_nested_structure() -> list[Any]:
    """Generates lists nested 100 levels deep, 50 times over."""
    items: list[Any] = []
    for i in range(50):
        nested: list[Any] = [i]
        for _ in range(100):
            nested = [nested]
        items.append(nested)
    return items


def _generate_integer_list() -> list[int]:
    """Generates a long list of signed integers."""
    return [random.randint(-(2**40), 2**40) for _ in range(10000)]
