"""
Benchmark suite for bzon bencode decoding and encoding performance.

Compares bzon against the bencode.py library (imported as bencodepy).

Measures decode and encode speed and decode memory usage across
torrent-shaped documents.
"""
