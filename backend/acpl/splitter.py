"""
Streaming PGN splitter.

Lichess exports games back to back, separated by two blank lines. The splitter
reads the export incrementally and yields one game at a time, so memory stays
bounded by the largest single game rather than the whole export.
"""

import logging
from typing import BinaryIO, Iterable, Iterator, Union

from .config import MAX_RECORD_BYTES, READ_CHUNK_SIZE

logger = logging.getLogger(__name__)

RECORD_DELIMITER = b"\n\n\n"

ByteSource = Union[BinaryIO, Iterable[bytes]]


class RecordStreamError(Exception):
    """Reading the underlying byte stream failed."""


class RecordTooLargeError(RecordStreamError):
    """A single record grew past the configured size cap without a delimiter."""

    def __init__(self, limit: int):
        super().__init__(f"PGN record exceeds {limit} bytes without a delimiter")
        self.limit = limit


def _iter_chunks(source: ByteSource, chunk_size: int) -> Iterator[bytes]:
    if hasattr(source, "read"):
        while True:
            chunk = source.read(chunk_size)
            if not chunk:
                return
            yield chunk
    else:
        for chunk in source:
            if chunk:
                yield chunk


def _decode(raw: bytes) -> str:
    return raw.decode("utf-8", errors="replace")


def split_records(
    source: ByteSource,
    chunk_size: int = READ_CHUNK_SIZE,
    max_record_bytes: int = MAX_RECORD_BYTES,
) -> Iterator[str]:
    """Yield the PGN records found in ``source`` one by one.

    ``source`` is either a binary file-like object or an iterable of byte
    chunks (e.g. ``response.iter_content()``). Records are separated by
    ``\\n\\n\\n``; the final record may omit the delimiter. Records that are
    only whitespace are still yielded, it is up to the consumer to drop them.

    If reading fails, any records already buffered are yielded first and
    ``RecordStreamError`` is raised once they are exhausted.
    """
    chunks = _iter_chunks(source, chunk_size)
    buffer = bytearray()
    search_from = 0
    exhausted = False
    failure = None

    while True:
        index = buffer.find(RECORD_DELIMITER, search_from)
        if index >= 0:
            record = bytes(buffer[:index])
            del buffer[: index + len(RECORD_DELIMITER)]
            search_from = 0
            yield _decode(record)
            continue

        if exhausted:
            break

        if max_record_bytes and len(buffer) > max_record_bytes:
            raise RecordTooLargeError(max_record_bytes)

        # Bytes already scanned cannot start a delimiter, except the tail.
        search_from = max(0, len(buffer) - len(RECORD_DELIMITER) + 1)
        try:
            buffer.extend(next(chunks))
        except StopIteration:
            exhausted = True
        except (OSError, ValueError) as e:
            logger.warning(f"PGN stream read failed: {e}")
            failure = e
            exhausted = True

    if buffer:
        yield _decode(bytes(buffer))

    if failure is not None:
        raise RecordStreamError(f"failed to read PGN stream: {failure}") from failure


def join_records(records: Iterable[str]) -> str:
    """Concatenate records with the delimiter, the inverse of ``split_records``."""
    return RECORD_DELIMITER.decode("ascii").join(records)
