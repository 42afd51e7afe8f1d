"""
PearsonHash Parallel Functions
------------------------------
This module hashes chunks on a thread pool and folds the results afterwards.
Both combiners are associative and commutative, so the outcome matches the serial
hash_xor / hash_sum exactly.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

from pearson import CHUNK_SIZE, DEFAULT_TABLE, chunk, hash_chunk, sum_fold, xor_fold, validate_table


def parallel_chunk_hashing(chunks: List[bytes], table: bytes = DEFAULT_TABLE,
                           max_workers: Optional[int] = None) -> List[int]:
    """
    Hashes all chunks in parallel, validating the table once up front.
    Args:
        chunks: List of byte chunks to hash (each at most 256 bytes).
        table: Substitution table shared by every worker.
        max_workers: Thread count; None lets the executor decide.
    Returns:
        List of chunk hashes, in chunk order.
    Raises:
        ValueError: If max_workers is not positive or the table is not a permutation.
    """
    if max_workers is not None and max_workers <= 0:
        raise ValueError("Worker count must be positive.")
    table = validate_table(table)
    if not chunks:
        return []
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        return list(executor.map(lambda c: hash_chunk(c, table), chunks))


def parallel_hash_xor(data: bytes, table: bytes = DEFAULT_TABLE, chunk_size: int = CHUNK_SIZE,
                      max_workers: Optional[int] = None) -> int:
    """Parallel counterpart of pearson.hash_xor."""
    return xor_fold(parallel_chunk_hashing(list(chunk(data, chunk_size)), table, max_workers))


def parallel_hash_sum(data: bytes, table: bytes = DEFAULT_TABLE, chunk_size: int = CHUNK_SIZE,
                      max_workers: Optional[int] = None) -> int:
    """Parallel counterpart of pearson.hash_sum."""
    return sum_fold(parallel_chunk_hashing(list(chunk(data, chunk_size)), table, max_workers))
