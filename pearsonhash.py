"""
PearsonHash Main Implementation
-------------------------------
This module provides the PearsonHash class, an object wrapper around the functions in
pearson.py that keeps the input, table, chunk size, combiner and tracer together.
Run it directly to hash the demo strings (or the command-line arguments).
"""

import argparse
import sys
from typing import List, Optional

from pearson import (
    CHUNK_SIZE,
    COMBINERS,
    DEFAULT_TABLE,
    Tracer,
    chunk_hashes,
    validate_table,
)


class PearsonHash:
    """
    Pearson hash of a byte sequence, chunked and folded into one byte.
    """
    DEFAULT_MODE: str = "xor"

    def __init__(self, data: bytes, table: Optional[bytes] = None, chunks: int = CHUNK_SIZE,
                 mode: str = DEFAULT_MODE, trace: Optional[Tracer] = None):
        """
        Initialize PearsonHash object.
        Args:
            data: Input bytes to hash.
            table: Optional substitution table (must be a permutation of 0..255).
            chunks: Chunk size in bytes, 1..256.
            mode: Combiner, "xor" or "sum".
            trace: Optional callable receiving diagnostic lines.
        """
        if mode not in COMBINERS:
            raise ValueError(f"Mode must be one of {sorted(COMBINERS)} (got {mode!r}).")
        self.raw: bytes = data
        self.table: bytes = DEFAULT_TABLE if table is None else validate_table(table)
        self.chunks: int = chunks
        self.mode: str = mode
        self.trace: Optional[Tracer] = trace
        self.leafs: List[int] = []
        self.dig: Optional[int] = None

    def digest(self) -> int:
        """
        Compute the hash of the input data.
        Returns:
            Hash as an int in 0..255.
        """
        if self.dig is not None:
            return self.dig
        self.leafs = chunk_hashes(self.raw, self.table, self.trace, self.chunks)
        self.dig = COMBINERS[self.mode](self.leafs)
        if self.trace:
            self.trace(f"PearsonHash.digest(): mode={self.mode}, chunk hashes={self.leafs}, result={self.dig}")
        return self.dig

    def hexdigest(self) -> str:
        """
        Return the digest as a two-character hexadecimal string.
        """
        return f"{self.digest():02x}"


DEMO_INPUTS = [
    ("sum", "to test the wrapper function"),
    ("sum", "This is a longer string to test the wrapper function"),
    ("xor", "hello world"),
    ("xor", "hello hello world"),
]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Pearson hash (XOR and sum chunk combiners)")
    parser.add_argument("texts", nargs="*", help="Strings to hash; the demo strings when omitted")
    parser.add_argument("--trace", action="store_true", help="Print every hashing step")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    trace = print if args.trace else None
    if args.texts:
        inputs = [(mode, text) for text in args.texts for mode in ("sum", "xor")]
    else:
        inputs = DEMO_INPUTS
    for mode, text in inputs:
        data = text.encode("utf-8")
        h = PearsonHash(data, mode=mode, trace=trace)
        print(f"Pearson {mode} hash of {text!r}: {h.digest()} (0x{h.hexdigest()})")
    return 0


if __name__ == '__main__':
    sys.exit(main())
