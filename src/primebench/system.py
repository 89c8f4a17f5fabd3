import os
import platform
import psutil


import logging
logger = logging.getLogger(__name__)


def cpu_count() -> int:
    """Returns the number of available logical processing units (at least 1)."""
    count = psutil.cpu_count(logical=True) or os.cpu_count()
    return count or 1


def get_system_info() -> dict:
    """Returns host information for the benchmark record."""
    out = {}

    out['os'] = {
        'system': platform.system(),
        'node': platform.node(),
        'release': platform.release(),
        'machine': platform.machine(),
        'processor': platform.processor(),
    }

    out['python'] = {
        'implementation': platform.python_implementation(),
        'version': platform.python_version(),
    }

    out['cpu'] = {
        'physical_count': psutil.cpu_count(logical=False),
        'logical_count': psutil.cpu_count(logical=True),
    }

    # Not available on every platform
    try:
        freq = psutil.cpu_freq()
    except (NotImplementedError, OSError) as err:
        logger.debug("CPU frequency not available (%s).", err)
        freq = None

    if freq:
        out['cpu'].update({
            'max_frequency': freq.max,
            'min_frequency': freq.min,
            'frequency': freq.current,
        })

    out['memory'] = psutil.virtual_memory()._asdict()

    return out
