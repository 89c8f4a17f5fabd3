import math
import statistics
import time

from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor, as_completed
from typing import NamedTuple

from .error import WorkerError
from .primality import count_primes, is_prime


import logging
logger = logging.getLogger(__name__)


SEQUENTIAL = 'sequential'
PARALLEL = 'parallel'

_executors = {
    'thread': ThreadPoolExecutor,
    'process': ProcessPoolExecutor,
}

EXECUTORS = tuple(_executors)


class Chunk(NamedTuple):
    """Half-open index range [start, stop) of the number list."""
    start: int
    stop: int

    @property
    def size(self) -> int:
        return self.stop - self.start


class RunResult(NamedTuple):
    """Prime count and wall-clock timing of one counting mode."""
    mode: str
    count: int
    elapsed: float
    workers: int
    samples: tuple = ()

    @property
    def elapsed_ms(self) -> float:
        return self.elapsed * 1000.0

    def to_dict(self) -> dict:
        return {
            'count': self.count,
            'elapsed_ms': self.elapsed_ms,
            'workers': self.workers,
            'samples_ms': [sample * 1000.0 for sample in self.samples],
        }


def partition(length: int, workers: int) -> list:
    """Splits an index range into contiguous chunks, one per worker.

    Args:
        length (int): Number of items.
        workers (int): Requested number of workers (>= 1).

    Returns:
        List of chunks covering [0, length) without gaps or overlaps. At most
        min(workers, length) chunks are returned; none for an empty range.

    Raises:
        ValueError: if the number of workers is less than one.
    """
    if workers < 1:
        raise ValueError("Invalid number of workers.", workers)

    if length <= 0:
        return []

    effective = min(workers, length)
    size = math.ceil(length / effective)

    return [
        Chunk(start, min(start + size, length))
        for start in range(0, length, size)
    ]


def _count_range(numbers, chunk: Chunk, predicate) -> int:
    return count_primes((numbers[i] for i in range(chunk.start, chunk.stop)), predicate)


def sequential_count(numbers, predicate=is_prime) -> int:
    """Counts primes in a single in-order pass."""
    return count_primes(numbers, predicate)


def parallel_count(numbers, workers: int, predicate=is_prime, executor: str='thread') -> int:
    """Counts primes by processing contiguous chunks concurrently.

    Each worker counts its own chunk locally; the partial counts are summed
    once all workers have finished. If a worker fails, pending workers are
    cancelled, running ones are awaited and the failure is raised.

    Args:
        numbers (Sequence[int]): Numbers to check.
        workers (int): Requested number of workers (>= 1).
        predicate (callable): Primality predicate (default = is_prime).
        executor (str): Worker pool kind, 'thread' or 'process' (default = 'thread').

    Returns:
        Number of primes.

    Raises:
        ValueError: if invalid number of workers or executor kind.
        WorkerError: if a worker fails.
    """
    pool_class = _executors.get(executor)
    if not pool_class:
        raise ValueError("Invalid executor.", executor)

    chunks = partition(len(numbers), workers)
    if not chunks:
        return 0

    pool_size = min(workers, len(numbers))
    logger.debug(f"Counting {len(numbers)} numbers in {len(chunks)} chunks with {pool_size} {executor} workers.")

    total = 0
    with pool_class(max_workers=pool_size) as pool:
        if executor == 'process':
            futures = {
                pool.submit(count_primes, numbers[chunk.start:chunk.stop], predicate): chunk
                for chunk in chunks
            }
        else:
            futures = {
                pool.submit(_count_range, numbers, chunk, predicate): chunk
                for chunk in chunks
            }

        try:
            for future in as_completed(futures):
                err = future.exception()
                if err is not None:
                    chunk = futures[future]
                    logger.debug(f"Worker for chunk [{chunk.start}, {chunk.stop}) failed ({err!r}), cancelling the rest.")
                    for other in futures:
                        other.cancel()
                    raise WorkerError(chunk, err) from err

                total += future.result()

        except KeyboardInterrupt:
            logger.debug("Interrupted while waiting for workers, cancelling pending ones.")
            for other in futures:
                other.cancel()
            raise

    return total


def timed_run(mode: str, func, *args, workers: int=1, repeat: int=1) -> RunResult:
    """Runs a counting function and measures its wall-clock time.

    Args:
        mode (str): Counting mode name.
        func (callable): Counting function.
        *args: Counting function arguments.
        workers (int): Number of workers reported for the run (default = 1).
        repeat (int): Number of repeats (default = 1).

    Returns:
        Run result with the median elapsed time of the repeats.
    """
    count = 0
    samples = []

    for i in range(max(1, repeat)):
        start_time = time.perf_counter()
        count = func(*args)
        elapsed = time.perf_counter() - start_time
        samples.append(elapsed)
        logger.debug(f"{mode} run {i + 1}: {count} primes in {elapsed * 1000.0:.3f} ms.")

    return RunResult(
        mode=mode,
        count=count,
        elapsed=statistics.median(samples),
        workers=workers,
        samples=tuple(samples),
    )


def compare(numbers, threads: int, executor: str='thread', repeat: int=1) -> tuple:
    """Counts primes sequentially and in parallel.

    Args:
        numbers (Sequence[int]): Numbers to check.
        threads (int): Number of parallel workers (>= 1).
        executor (str): Worker pool kind (default = 'thread').
        repeat (int): Number of repeats of each mode (default = 1).

    Returns:
        Tuple of sequential and parallel run results.
    """
    sequential = timed_run(SEQUENTIAL, sequential_count, numbers, repeat=repeat)
    parallel = timed_run(
        PARALLEL, parallel_count, numbers, threads, is_prime, executor,
        workers=threads, repeat=repeat,
    )
    return sequential, parallel
