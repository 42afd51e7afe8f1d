"""
PearsonHash Profiler
--------------------
Times each stage of the chunked Pearson hash pipeline and measures throughput.
"""
import time
from typing import Dict

from pearson import COMBINERS, CHUNK_SIZE, build_table, chunk, hash_chunk
from parallel import parallel_chunk_hashing


def _check_mode(mode: str) -> None:
    if mode not in COMBINERS:
        raise ValueError(f"Mode must be one of {sorted(COMBINERS)} (got {mode!r}).")


def profile_pipeline(data: bytes, mode: str = "xor", parallel: bool = False) -> Dict[str, float]:
    _check_mode(mode)
    timings = {}

    start = time.perf_counter()
    table = build_table()
    timings["tablebuild"] = time.perf_counter() - start

    start = time.perf_counter()
    chunks = list(chunk(data, CHUNK_SIZE))
    timings["chunking"] = time.perf_counter() - start

    start = time.perf_counter()
    if parallel:
        hashes = parallel_chunk_hashing(chunks, table)
    else:
        hashes = [hash_chunk(c, table) for c in chunks]
    timings["chunkhashing"] = time.perf_counter() - start

    start = time.perf_counter()
    digest = COMBINERS[mode](hashes)
    timings["combining"] = time.perf_counter() - start

    total = sum(timings.values())
    print(f"\n Pipeline profiling ({len(data)} bytes, {len(chunks)} chunks, mode={mode}, parallel={parallel}):")
    for stage, t in timings.items():
        share = (t/total)*100 if total else 0.0
        print(f" - {stage:<15}: {t:.6f}s ({share:.1f}%)")
    print(f"\n Final hash: {digest} (0x{digest:02x})")
    print(f" Total Time: {total:.6f}s")
    return timings


def benchmark_speed(input_size_kb: int = 1024, mode: str = "xor", parallel: bool = False) -> float:
    _check_mode(mode)
    print(f"\n Benchmarking {input_size_kb} KB input, mode={mode}, parallel={parallel}...")
    data = b"A"*(input_size_kb*1024)
    table = build_table()
    start = time.perf_counter()
    chunks = list(chunk(data, CHUNK_SIZE))
    if parallel:
        hashes = parallel_chunk_hashing(chunks, table)
    else:
        hashes = [hash_chunk(c, table) for c in chunks]
    digest = COMBINERS[mode](hashes)
    elapsed = time.perf_counter() - start
    throughput_mb = (len(data)/1024/1024)/elapsed if elapsed else float("inf")
    print(f"Hash: {digest} (0x{digest:02x})")
    print(f"Speed: {throughput_mb:.2f} MB/s ({elapsed:.4f}s elapsed)")
    return throughput_mb


if __name__ == '__main__':
    for size in [64, 256]:
        for parallel in [False, True]:
            profile_pipeline(b"A"*(1024*size), mode="xor", parallel=parallel)
    benchmark_speed(256, mode="sum")
