import re

from .error import InputFileError


import logging
logger = logging.getLogger(__name__)


INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1

_separator = re.compile(r'[^0-9-]+')
_integer = re.compile(r'-?[0-9]+')


def tokenize(text: str) -> tuple:
    """Parses signed 64-bit integers from text.

    The text is split on every run of characters other than ASCII digits and
    '-'. Empty tokens, a lone '-', malformed tokens (e.g. '5-3') and values
    outside the signed 64-bit range are skipped.

    Args:
        text (str): Text to parse.

    Returns:
        Tuple of integers in their order of appearance.
    """
    numbers = []
    skipped = 0

    for token in _separator.split(text):
        if not token:
            continue

        if not _integer.fullmatch(token):
            skipped += 1
            continue

        value = int(token)
        if value < INT64_MIN or value > INT64_MAX:
            skipped += 1
            continue

        numbers.append(value)

    if skipped:
        logger.debug(f"Skipped {skipped} invalid or out of range tokens.")

    return tuple(numbers)


def read_numbers(path: str) -> tuple:
    """Reads integers from a text file.

    Args:
        path (str): Input file path.

    Returns:
        Tuple of integers.

    Raises:
        InputFileError: if the file cannot be read.
    """
    logger.debug(f"Reading numbers from {path}.")
    try:
        with open(path, 'r', encoding='utf-8', errors='replace') as file:
            text = file.read()

    except OSError as err:
        raise InputFileError(path, err) from err

    numbers = tokenize(text)
    logger.debug(f"Parsed {len(numbers)} numbers from {path}.")

    return numbers
