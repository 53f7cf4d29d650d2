"""Exception hierarchy raised by the parser, the ingestion pipeline and the query API."""


class LoggIOError(Exception):
    """Base class for every error raised by loggio."""


class UnsupportedFormatError(LoggIOError, ValueError):
    """Raised when a log format name is not one of the supported grammars."""

    def __init__(self, fmt):
        super().__init__(f"Format '{fmt}' is not supported.")
        self.format = fmt


class SourceUnreadableError(LoggIOError, OSError):
    """Raised when a log file doesn't exist or can't be read."""

    def __init__(self, filepath):
        super().__init__(f"File '{filepath}' doesn't exist or can't be read.")
        self.filepath = filepath


class IngestionInProgressError(LoggIOError):
    """Raised when read() is called while a previous read is still running."""


class QueryNotStartedError(LoggIOError):
    """Raised when a query operation is used before start()."""

    def __init__(self, operation: str):
        super().__init__(
            f"Missing start() call before .{operation}() API method."
        )
        self.operation = operation


class InvalidParameterError(LoggIOError, ValueError):
    """Raised when a query operation gets a missing or invalid argument."""


class UnsupportedEncodingError(LoggIOError, LookupError):
    """Raised when an encoding name is unknown or not a text encoding."""

    def __init__(self, encoding):
        super().__init__(f"Encoding '{encoding}' is not a supported text encoding.")
        self.encoding = encoding


class ConfigError(LoggIOError, ValueError):
    """Raised when a configuration value is invalid."""
