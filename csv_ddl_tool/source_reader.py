"""Reading delimited sources as a lazy sequence of raw string rows."""

from __future__ import annotations
import csv
import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional, TextIO

from .exceptions import SourceUnreadable

logger = logging.getLogger(__name__)

STDIN_NAME = "<stdin>"


def source_label(path: Optional[Path]) -> str:
    return str(path) if path is not None else STDIN_NAME


@contextmanager
def open_source(path: Optional[Path]) -> Iterator[TextIO]:
    """
    Open the source once for the whole run.

    Reads standard input when ``path`` is None. A UTF-8 byte order mark
    is dropped so it does not end up in the first column name.
    """
    if path is None:
        yield sys.stdin
        return

    try:
        handle = path.open(encoding='utf-8-sig', newline='')
    except OSError as e:
        raise SourceUnreadable(str(path), e.strerror or str(e))

    logger.debug(f"Opened {path}")
    try:
        yield handle
    finally:
        handle.close()


def read_rows(stream: TextIO, delimiter: str = ",", source: str = STDIN_NAME) -> Iterator[List[str]]:
    """
    Yield every non-blank record of a delimited stream as raw strings.

    Fields are not trimmed. Rows are produced one at a time, so the whole
    file is never held in memory.
    """
    reader = csv.reader(stream, delimiter=delimiter, strict=True)
    try:
        for row in reader:
            if not row:
                continue
            yield row
    except csv.Error as e:
        raise SourceUnreadable(source, f"line {reader.line_num}: {e}")
    except UnicodeDecodeError as e:
        raise SourceUnreadable(source, f"not valid UTF-8 ({e.reason})")
