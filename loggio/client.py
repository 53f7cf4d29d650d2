"""LoggIO instance — record store, ingestion pipeline, and query entry point."""

import codecs
import enum
import logging
import threading

from loggio.config import Config
from loggio.errors import IngestionInProgressError, UnsupportedEncodingError
from loggio.events import Emitter, Handler
from loggio.parser import APACHE_COMBINED, LogRecord, get_parser
from loggio.query import Query
from loggio.reader import check_readable, read_lines

logger = logging.getLogger(__name__)

DATA_EVENT = "data"


def _check_text_encoding(encoding: str) -> None:
    """Raise UnsupportedEncodingError unless *encoding* names a text codec."""
    try:
        info = codecs.lookup(encoding)
    except (LookupError, TypeError):
        raise UnsupportedEncodingError(encoding) from None
    # bytes-to-bytes codecs such as base64 and rot13 can't back open().
    if not getattr(info, "_is_text_encoding", True):
        raise UnsupportedEncodingError(encoding)


class IngestState(enum.Enum):
    IDLE = "idle"
    INGESTING = "ingesting"
    COMPLETED = "completed"


class LoggIO:
    """Parses access-log files into an append-only record store.

    ``read()`` returns immediately and ingests on a background thread; when the
    last line has been parsed the ``"data"`` event fires once with the instance
    as payload. Each further ``read()`` appends to the same store.
    """

    def __init__(self, format: str = APACHE_COMBINED, encoding: str = "utf-8"):
        self._parse = get_parser(format)
        _check_text_encoding(encoding)
        self.format = format
        self.encoding = encoding

        self.logs: list[LogRecord] = []
        self.engine = Query(self.logs)
        self.state = IngestState.IDLE

        self._emitter = Emitter()
        self._lock = threading.Lock()
        self._done = threading.Event()
        self._done.set()
        self._thread: threading.Thread | None = None

    @classmethod
    def from_config(cls, config: Config) -> "LoggIO":
        return cls(format=config.format, encoding=config.encoding)

    # Ingestion

    def read(self, filepath: str, blocking: bool = False) -> "LoggIO":
        """Ingest *filepath*, appending parsed records to ``logs``.

        Raises SourceUnreadableError before any state change if the file can't
        be read, and IngestionInProgressError if a previous read is running.
        With ``blocking=True`` the file is ingested (and ``"data"`` emitted) on
        the calling thread.
        """
        check_readable(filepath)

        with self._lock:
            if self.state is IngestState.INGESTING:
                raise IngestionInProgressError(
                    f"Cannot read '{filepath}' while another file is being ingested."
                )
            self.state = IngestState.INGESTING
            self._done.clear()

        if blocking:
            self._ingest(filepath)
        else:
            self._thread = threading.Thread(
                target=self._ingest, args=(filepath,), daemon=True
            )
            self._thread.start()
        return self

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the current ingestion finishes. Returns False on timeout."""
        return self._done.wait(timeout)

    def _ingest(self, filepath: str):
        logger.info("Reading %s", filepath)
        parsed = 0
        skipped = 0
        completed = False
        try:
            for line in read_lines(filepath, self.encoding):
                record = self._parse(line)
                if record is None:
                    skipped += 1
                    logger.debug("Skipping unparseable line: %r", line)
                    continue
                self.logs.append(record)
                parsed += 1
            completed = True
        except (OSError, UnicodeError):
            logger.exception("Failed while reading %s", filepath)
        finally:
            if not completed:
                with self._lock:
                    self.state = IngestState.IDLE
                self._release()

        if not completed:
            return

        logger.info("  -> %s: %d records, %d lines skipped", filepath, parsed, skipped)
        with self._lock:
            self.state = IngestState.COMPLETED
        self._emitter.emit(DATA_EVENT, self)
        self._release()

    def _release(self):
        # A listener may already have started the next read.
        with self._lock:
            if self.state is not IngestState.INGESTING:
                self._done.set()

    # Subscriptions

    def on(self, event: str, handler: Handler) -> None:
        self._emitter.on(event, handler)

    def off(self, event: str, handler: Handler | None = None) -> None:
        self._emitter.off(event, handler)

    # Query

    def query(self) -> Query:
        """Start a new query over the records read so far."""
        return self.engine.start()
