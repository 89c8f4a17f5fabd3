import pandas as pd

from datetime import datetime


import logging
logger = logging.getLogger(__name__)


COLUMNS = [
    'input',
    'timestamp',
    'timestamp_hr',
    'total_numbers',
    'threads',
    'executor',
    'prime_count',
    'sequential_ms',
    'parallel_ms',
    'speedup',
    'match',
]


def make_record(result: dict, timestamp: float) -> dict:
    """Flattens a benchmark result document into a history record.

    Args:
        result (dict): Benchmark result document.
        timestamp (float): Benchmark start time (s since the epoch).

    Returns:
        History record.
    """
    sequential_ms = result['sequential']['elapsed_ms']
    parallel_ms = result['parallel']['elapsed_ms']

    return {
        'input': result['input'],
        'timestamp': timestamp,
        'timestamp_hr': datetime.fromtimestamp(timestamp).strftime('%Y-%m-%d %H:%M:%S'),
        'total_numbers': result['total_numbers'],
        'threads': result['threads'],
        'executor': result['executor'],
        'prime_count': result['sequential']['count'],
        'sequential_ms': sequential_ms,
        'parallel_ms': parallel_ms,
        'speedup': sequential_ms / parallel_ms if parallel_ms else None,
        'match': result['match'],
    }


def append_record(path: str, record: dict) -> pd.DataFrame:
    """Appends a record to the CSV history, creating it if required.

    Returns:
        The updated history.
    """
    df = pd.DataFrame([record], columns=COLUMNS)
    try:
        existing_df = pd.read_csv(path)
        df = pd.concat([existing_df, df], ignore_index=True)
    except (FileNotFoundError, pd.errors.EmptyDataError):
        pass # The new frame creates the file

    df.to_csv(path, index=False)
    logger.debug(f"History with {len(df)} records saved to {path}.")

    return df


def load_history(path: str) -> pd.DataFrame:
    """Returns the CSV history, or an empty frame if there is none."""
    try:
        return pd.read_csv(path)
    except (FileNotFoundError, pd.errors.EmptyDataError):
        return pd.DataFrame(columns=COLUMNS)
