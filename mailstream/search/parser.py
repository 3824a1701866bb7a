"""Incremental record parsing over a growing output buffer."""

import codecs

from loguru import logger

from ..common.pydantic import Record
from . import sexp
from .errors import IncompleteRecord, MalformedRecord
from .fields import record_from_form


class StreamBuffer:
    """Append-only text decoded from process output, plus a parse cursor.

    Bytes are decoded incrementally, so a multi-byte character split across
    two chunks is only added once both halves have arrived.
    """

    def __init__(self, encoding: str = "utf-8"):
        """Initialize an empty buffer."""
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        self._text = ""
        self._cursor = 0

    def __len__(self) -> int:
        """Length of the decoded text."""
        return len(self._text)

    @property
    def text(self) -> str:
        """All decoded text received so far."""
        return self._text

    @property
    def cursor(self) -> int:
        """Offset up to which the text has been consumed into records."""
        return self._cursor

    @property
    def tail(self) -> str:
        """Text not yet consumed."""
        return self._text[self._cursor :]

    def append(self, data: bytes) -> None:
        """Append raw output bytes."""
        self._text += self._decoder.decode(data)

    def finish(self) -> None:
        """Flush any bytes held back by the decoder."""
        self._text += self._decoder.decode(b"", final=True)

    def advance(self, pos: int) -> None:
        """Move the cursor forward to ``pos``."""
        if not self._cursor <= pos <= len(self._text):
            raise ValueError(f"cursor {pos} outside [{self._cursor}, {len(self._text)}]")
        self._cursor = pos


class RecordParser:
    """Extracts complete records from a ``StreamBuffer``."""

    def __init__(self, fields: str, delimiter: str):
        """Initialize the parser.

        Args:
            fields: mu field letters, identifier first.
            delimiter: Separator placed between rendered field values.
        """
        self.fields = fields
        self.delimiter = delimiter

    def parse(self, buffer: StreamBuffer) -> list[Record]:
        """Return the records completed since the last call and advance the cursor.

        Parsing stops at the first position that does not hold a complete,
        well-formed record; that text is left in place for a later call.
        """
        text = buffer.text
        pos = buffer.cursor
        records: list[Record] = []
        while True:
            start = sexp.skip_whitespace(text, pos)
            if start >= len(text):
                break
            if text[start] != "(":
                logger.trace("No record start at offset {}", start)
                break
            try:
                form, end = sexp.read(text, start)
            except IncompleteRecord:
                break
            except MalformedRecord as e:
                logger.debug("Stopping at malformed output: {}", e)
                break
            pos = end
            record = record_from_form(form, self.fields, self.delimiter)
            if record is None:
                logger.debug("Dropping unusable record at offset {}", start)
                continue
            records.append(record)
        buffer.advance(pos)
        return records
