import argparse
import sys
import time

from .config import KEYS, load_config, parse_thread_count
from .counting import EXECUTORS, compare
from .error import ConfigurationError, InputFileError, WorkerError
from .history import append_record, make_record
from .numbers import read_numbers
from .report import build_result, print_header, print_results, store_result
from .system import get_system_info


import logging
logger = logging.getLogger(__name__)


class CLI:
    """Command line interface class."""

    def __init__(self):
        """Initializes command line interface object."""

        self.parser = argparse.ArgumentParser(
            prog='primebench',
            description="Benchmark of single-threaded versus multi-threaded prime counting.",
        )
        self.parser.add_argument('input_file', metavar='input-file', type=str, help='Text file with integers.')
        self.parser.add_argument('threads', metavar='thread-count', nargs='?', type=str,
                                 help='Number of parallel workers (default: number of processors).')
        self.parser.add_argument('-c', '--config', type=str, help='YAML configuration file.')
        self.parser.add_argument('-e', '--executor', type=str, choices=EXECUTORS, help='Worker pool kind (default: thread).')
        self.parser.add_argument('-r', '--repeat', type=int, help='Number of repeats of each mode (default: 1).')
        self.parser.add_argument('-o', '--output', type=str, help='JSON result file.')
        self.parser.add_argument('--history', type=str, help='CSV history file to append the result to.')
        self.parser.add_argument('-d', '--debug', action='store_true')


    def _error(self, message: str) -> int:
        print(message, file=sys.stderr)
        return 1


    def run(self, argv: list=None) -> int:
        """Runs command line interface.

        Args:
            argv (list): Command line arguments (default = sys.argv[1:]).

        Returns:
            Exit code.
        """
        if argv is None:
            argv = sys.argv[1:]

        if not argv:
            self.parser.print_usage()
            return 0

        # A dash-led thread count such as '-abc' is not an option
        args, extras = self.parser.parse_known_args(argv)
        if extras:
            if args.threads is not None or len(extras) > 1:
                self.parser.error(f"unrecognized arguments: {' '.join(extras)}")
            args.threads = extras[0]

        if args.debug:
            logging.basicConfig(level=logging.DEBUG)

            for name in logging.root.manager.loggerDict:
                if name.startswith('primebench'):
                    logging.getLogger(name).setLevel(logging.DEBUG)

            logger.debug("Debugging enabled.")

        if args.repeat is not None and args.repeat < 1:
            self.parser.error("argument -r/--repeat: must be at least 1")

        try:
            config = load_config(args.config) if args.config else {}
        except ConfigurationError as err:
            return self._error(f"Invalid configuration: {err}")

        settings = config | {
            key: val for key, val in vars(args).items()
            if key in KEYS and val is not None
        }
        logger.debug(f"Settings: {settings}.")

        threads = parse_thread_count(settings.get('threads'))
        executor = settings.get('executor', 'thread')
        repeat = settings.get('repeat', 1)

        try:
            numbers = read_numbers(args.input_file)
        except InputFileError as err:
            return self._error(f"Failed to read file: {err.cause}")

        if not numbers:
            print(f"No numbers found in file: {args.input_file}")
            return 0

        print_header(args.input_file, len(numbers))

        start_time = time.time()
        try:
            sequential, parallel = compare(numbers, threads, executor=executor, repeat=repeat)

        except WorkerError as err:
            return self._error(f"Worker task failed: {err}")

        except KeyboardInterrupt:
            print("Execution interrupted.", file=sys.stderr)
            return 130

        print_results(sequential, parallel, threads)

        output = settings.get('output')
        history = settings.get('history')
        if not output and not history:
            return 0

        result = build_result(
            args.input_file, len(numbers), threads, executor, repeat,
            sequential, parallel, get_system_info(),
        )

        try:
            if output:
                store_result(output, result)
            if history:
                append_record(history, make_record(result, start_time))

        except OSError as err:
            return self._error(f"Failed to store result: {err}")

        return 0


def main():
    """Runs command line interface."""
    cli = CLI()
    sys.exit(cli.run())
