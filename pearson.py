"""
Pearson Hash Core Functions
---------------------------
This module provides the substitution table, the base Pearson hash, chunk splitting
and the two chunk combiners (XOR-fold and sum-fold) for inputs longer than 256 bytes.
Non-cryptographic; intended for lookup tables, checksums and bucketing.
"""

from typing import Callable, Iterable, Iterator, List, Optional, Union

MASK32 = 0xFFFFFFFF
TABLE_SIZE = 256  # one entry per byte value
CHUNK_SIZE = 256  # largest input a single base hash accepts
DEFAULT_SEED = 0x50454152  # "PEAR"
ZERO_SEED_STATE = 0x9E3779B9  # xorshift state for seeds that reduce to 0

ByteSequence = Union[bytes, bytearray, memoryview]
Tracer = Callable[[str], None]

# build_table(DEFAULT_SEED), frozen so stored hashes survive any change to the generator
DEFAULT_TABLE = bytes([
    0xd4, 0x60, 0xd6, 0xf4, 0xaf, 0x6e, 0x13, 0xef, 0xe5, 0xac, 0x55, 0xcd, 0x73, 0xb7, 0x57, 0xb8,
    0x7b, 0x35, 0x86, 0x99, 0x51, 0x80, 0x76, 0x71, 0x7f, 0xc0, 0xad, 0x17, 0xc3, 0xb0, 0x05, 0xbb,
    0x78, 0x7a, 0xe6, 0x07, 0xec, 0x21, 0x0b, 0xce, 0xb4, 0xd1, 0x49, 0x7d, 0x4c, 0x20, 0x4f, 0xdc,
    0xa4, 0x5c, 0xf8, 0xb2, 0x54, 0xf9, 0x11, 0xb5, 0x15, 0xab, 0x59, 0x2d, 0x8b, 0x44, 0x88, 0xdd,
    0x95, 0x94, 0x82, 0xa8, 0x00, 0x3e, 0x48, 0x85, 0x89, 0xdb, 0xc8, 0x68, 0x18, 0x42, 0x45, 0xed,
    0x50, 0xf2, 0xf1, 0x4a, 0x39, 0xe4, 0x53, 0xf0, 0x61, 0xf6, 0xf7, 0x32, 0x4d, 0x3d, 0x5a, 0x04,
    0x28, 0x1c, 0xd9, 0x77, 0xc1, 0xfc, 0xc6, 0x3b, 0x6b, 0x74, 0x6f, 0xb6, 0x29, 0x8e, 0xc2, 0x92,
    0x6d, 0xd2, 0xe3, 0x0c, 0x7c, 0xfa, 0xd7, 0x75, 0xff, 0xe7, 0xae, 0xa6, 0x0f, 0x1e, 0x30, 0x83,
    0x3f, 0xf5, 0xbe, 0x8c, 0x9d, 0xc7, 0x2e, 0xfb, 0x81, 0x5e, 0x09, 0xcb, 0x90, 0x36, 0x66, 0xeb,
    0x14, 0xa3, 0x34, 0x41, 0x02, 0x63, 0x6c, 0x64, 0xca, 0x8a, 0xe9, 0xbd, 0x8f, 0x5d, 0xea, 0x12,
    0x4b, 0x58, 0x10, 0x6a, 0xfe, 0xe0, 0x43, 0xf3, 0xa7, 0x91, 0x19, 0x97, 0xb3, 0x37, 0xc4, 0x23,
    0x3a, 0x8d, 0x69, 0xa9, 0x62, 0xb1, 0x65, 0x98, 0xd5, 0xd3, 0x5b, 0x84, 0x9b, 0xbf, 0x08, 0xe1,
    0xa1, 0x9f, 0xcc, 0xc9, 0x1f, 0xfd, 0x16, 0xda, 0x1a, 0xee, 0xd0, 0x5f, 0xdf, 0x70, 0x0d, 0x67,
    0x47, 0xe2, 0x0e, 0x9e, 0x93, 0x26, 0x9c, 0x52, 0x56, 0xaa, 0x7e, 0x27, 0xa0, 0x24, 0x40, 0x01,
    0x38, 0x3c, 0x87, 0xd8, 0x4e, 0x79, 0x96, 0xba, 0x03, 0x72, 0xa2, 0x0a, 0x1d, 0x33, 0x2b, 0x9a,
    0x2f, 0xe8, 0x1b, 0x25, 0xb9, 0x06, 0xbc, 0x2c, 0x31, 0x46, 0xde, 0x22, 0xa5, 0x2a, 0xcf, 0xc5,
])


def _notrace(message: str) -> None:
    pass


## Substitution Table
def _xorshift32(state: int) -> Iterator[int]:
    while True:
        state ^= (state << 13) & MASK32
        state ^= state >> 17
        state ^= (state << 5) & MASK32
        yield state


def build_table(seed: int = DEFAULT_SEED) -> bytes:
    """
    Build a substitution table as a Fisher-Yates shuffle of 0..255 driven by xorshift32.
    Args:
        seed: Seed for the shuffle. Same seed, same table, on every interpreter.
    Returns:
        256 bytes, a permutation of the byte domain.
    """
    values = list(range(TABLE_SIZE))
    rng = _xorshift32((seed & MASK32) or ZERO_SEED_STATE)
    for i in range(TABLE_SIZE - 1, 0, -1):
        j = next(rng) % (i + 1)
        values[i], values[j] = values[j], values[i]
    return bytes(values)


def validate_table(table: Iterable[int]) -> bytes:
    """
    Check that a table is a permutation of 0..255.
    Args:
        table: Candidate table (bytes or any sequence of ints).
    Returns:
        The table as immutable bytes.
    Raises:
        ValueError: If the table has the wrong length, values outside 0..255
            or repeated values.
    """
    if table is DEFAULT_TABLE:
        return table
    try:
        table = bytes(table)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Table must hold {TABLE_SIZE} byte values: {exc}") from exc
    if len(table) != TABLE_SIZE:
        raise ValueError(f"Table must have exactly {TABLE_SIZE} entries (got {len(table)}).")
    if len(set(table)) != TABLE_SIZE:
        missing = sorted(set(range(TABLE_SIZE)) - set(table))
        raise ValueError(f"Table is not a permutation of 0..255 (missing {len(missing)} values, e.g. {missing[:4]}).")
    return table


def _as_bytes(data: ByteSequence) -> bytes:
    if isinstance(data, bytes):
        return data
    if isinstance(data, (bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"Expected a byte sequence, got {type(data).__name__}.")


## Base Hash
def hash_chunk(data: ByteSequence, table: bytes, trace: Optional[Tracer] = None) -> int:
    """
    Pearson loop over one chunk. `table` must already have passed validate_table;
    callers hashing many chunks validate once and call this per chunk.
    """
    data = _as_bytes(data)
    if len(data) > CHUNK_SIZE:
        raise ValueError(f"Input must be at most {CHUNK_SIZE} bytes (got {len(data)} bytes); use hash_xor or hash_sum.")
    trace = trace or _notrace
    trace(f"base_hash(): input data: {list(data)}")
    acc = 0
    for byte in data:
        # acc and byte are both < 256 and the table is a validated 256-entry permutation
        acc = table[acc ^ byte]
        trace(f"base_hash(): current_byte={byte}, accumulator={acc}")
    trace(f"base_hash(): final accumulator={acc}")
    return acc


def base_hash(data: ByteSequence, table: bytes = DEFAULT_TABLE, trace: Optional[Tracer] = None) -> int:
    """
    Pearson hash of at most 256 bytes.
    Args:
        data: Input bytes (len <= 256).
        table: Substitution table, a permutation of 0..255.
        trace: Optional callable receiving one diagnostic line per step.
    Returns:
        Hash as an int in 0..255. Empty input hashes to 0.
    Raises:
        TypeError: If data is not a byte sequence.
        ValueError: If data is longer than 256 bytes or the table is not a permutation.
    """
    return hash_chunk(data, validate_table(table), trace)


## Chunk Splitting
class Chunks:
    """
    Lazy, re-iterable split of a byte sequence into consecutive chunks.
    """
    def __init__(self, data: ByteSequence, size: int = CHUNK_SIZE):
        if not 0 < size <= CHUNK_SIZE:
            raise ValueError(f"Chunk size must be between 1 and {CHUNK_SIZE} (got {size}).")
        self.data: bytes = _as_bytes(data)
        self.size: int = size

    def __len__(self) -> int:
        return -(-len(self.data) // self.size)

    def __iter__(self) -> Iterator[bytes]:
        for i in range(0, len(self.data), self.size):
            yield self.data[i:i+self.size]

    def __repr__(self) -> str:
        return f"Chunks(len={len(self.data)}, size={self.size}, count={len(self)})"


def chunk(data: ByteSequence, size: int = CHUNK_SIZE) -> Chunks:
    """
    Split data into chunks of at most `size` bytes.
    Args:
        data: Input bytes.
        size: Chunk size, 1..256.
    Returns:
        Chunks view; empty input gives zero chunks.
    """
    return Chunks(data, size)


## Combiners
def xor_fold(hashes: Iterable[int]) -> int:
    """XOR a sequence of chunk hashes together, starting from 0."""
    out = 0
    for h in hashes:
        out ^= h
    return out


def sum_fold(hashes: Iterable[int]) -> int:
    """Add a sequence of chunk hashes modulo 256, starting from 0."""
    out = 0
    for h in hashes:
        out = (out + h) & 0xFF
    return out


def chunk_hashes(data: ByteSequence, table: bytes = DEFAULT_TABLE, trace: Optional[Tracer] = None,
                 chunk_size: int = CHUNK_SIZE) -> List[int]:
    """
    Base hash of every chunk of data, in order.
    Args:
        data: Input bytes of any length.
        table: Substitution table.
        trace: Optional tracer, forwarded to base_hash.
        chunk_size: Chunk size, 1..256.
    Returns:
        One hash per chunk.
    Raises:
        ValueError: If the table is not a permutation of 0..255.
    """
    table = validate_table(table)
    return [hash_chunk(c, table, trace) for c in chunk(data, chunk_size)]


def hash_xor(data: ByteSequence, table: bytes = DEFAULT_TABLE, trace: Optional[Tracer] = None,
             chunk_size: int = CHUNK_SIZE) -> int:
    """
    Pearson hash of arbitrary-length data, chunk hashes combined by XOR.
    Args:
        data: Input bytes.
        table: Substitution table.
        trace: Optional tracer.
        chunk_size: Chunk size, 1..256.
    Returns:
        Hash as an int in 0..255.
    """
    hashes = chunk_hashes(data, table, trace, chunk_size)
    out = xor_fold(hashes)
    if trace:
        trace(f"hash_xor(): chunk hashes={hashes}, result={out}")
    return out


def hash_sum(data: ByteSequence, table: bytes = DEFAULT_TABLE, trace: Optional[Tracer] = None,
             chunk_size: int = CHUNK_SIZE) -> int:
    """
    Pearson hash of arbitrary-length data, chunk hashes added modulo 256.
    Args:
        data: Input bytes.
        table: Substitution table.
        trace: Optional tracer.
        chunk_size: Chunk size, 1..256.
    Returns:
        Hash as an int in 0..255.
    """
    hashes = chunk_hashes(data, table, trace, chunk_size)
    out = sum_fold(hashes)
    if trace:
        trace(f"hash_sum(): chunk hashes={hashes}, result={out}")
    return out


COMBINERS = {
    "xor": xor_fold,
    "sum": sum_fold,
}
