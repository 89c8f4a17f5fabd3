class PrimebenchError(Exception):
    """Base class for exceptions in this package."""
    pass


class InputFileError(PrimebenchError):
    """Raised when the input file cannot be read."""

    def __init__(self, path, cause):
        super().__init__(f"{path}: {cause}")
        self.path = path
        self.cause = cause


class ConfigurationError(PrimebenchError):
    """Raised when the configuration file is invalid."""
    pass


class WorkerError(PrimebenchError):
    """Raised when a parallel counting task fails."""

    def __init__(self, chunk, cause):
        super().__init__(f"{cause!r} in chunk [{chunk.start}, {chunk.stop})")
        self.chunk = chunk
        self.cause = cause
