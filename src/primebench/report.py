import json

from .counting import RunResult


import logging
logger = logging.getLogger(__name__)


def print_header(path: str, total: int):
    print(f"Input file: {path}")
    print(f"Total numbers parsed: {total}")
    print()


def _print_run(title: str, run: RunResult):
    print(title)
    print(f"  Prime count: {run.count}")
    print(f"  Elapsed time: {run.elapsed_ms:.3f} ms")
    if len(run.samples) > 1:
        print(f"  Runs: {len(run.samples)} (median shown)")


def print_results(sequential: RunResult, parallel: RunResult, threads: int):
    """Prints the sequential and parallel run results to standard output."""
    _print_run("Single-thread:", sequential)
    print()
    _print_run(f"Multi-thread ({threads} threads):", parallel)

    if sequential.count != parallel.count:
        print()
        print("Warning: counts do not match between modes.")


def build_result(path: str, total: int, threads: int, executor: str, repeat: int,
                 sequential: RunResult, parallel: RunResult, system: dict) -> dict:
    """Returns the benchmark result document."""
    return {
        'input': path,
        'total_numbers': total,
        'threads': threads,
        'executor': executor,
        'repeat': repeat,
        'system': system,
        'sequential': sequential.to_dict(),
        'parallel': parallel.to_dict(),
        'match': sequential.count == parallel.count,
    }


def store_result(path: str, result: dict):
    """Writes the benchmark result document as JSON."""
    logger.debug(f"Storing result to {path}.")
    with open(path, 'w', encoding='utf-8') as file:
        json.dump(result, file, ensure_ascii=False, indent=2)
