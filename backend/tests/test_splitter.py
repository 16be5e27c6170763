import io

import pytest

from acpl.splitter import (
    RecordStreamError,
    RecordTooLargeError,
    join_records,
    split_records,
)


class FailingReader:
    """Serves ``data`` in one read, then fails."""

    def __init__(self, data: bytes):
        self._data = data
        self._served = False

    def read(self, size: int = -1) -> bytes:
        if not self._served:
            self._served = True
            return self._data
        raise OSError("connection reset by peer")


def test_splits_on_two_blank_lines():
    stream = io.BytesIO(b"game one\n\n\ngame two\n\n\ngame three")
    assert list(split_records(stream)) == ["game one", "game two", "game three"]


def test_single_blank_line_does_not_split():
    stream = io.BytesIO(b'[White "a"]\n\n1. e4 *')
    assert list(split_records(stream)) == ['[White "a"]\n\n1. e4 *']


def test_trailing_delimiter_emits_no_empty_record():
    stream = io.BytesIO(b"first\n\n\nsecond\n\n\n")
    assert list(split_records(stream)) == ["first", "second"]


def test_empty_stream_yields_nothing():
    assert list(split_records(io.BytesIO(b""))) == []


def test_whitespace_records_are_left_to_the_consumer():
    stream = io.BytesIO(b"one\n\n\n  \n\n\ntwo")
    assert list(split_records(stream)) == ["one", "  ", "two"]


@pytest.mark.parametrize("chunk_size", [1, 2, 3, 4, 7, 64])
def test_delimiter_split_across_reads(chunk_size):
    data = b"alpha\n\n\nbeta\n\n\ngamma\n"
    records = list(split_records(io.BytesIO(data), chunk_size=chunk_size))
    assert records == ["alpha", "beta", "gamma\n"]


def test_accepts_iterable_of_chunks():
    chunks = [b"al", b"pha\n", b"\n", b"\nbe", b"ta"]
    assert list(split_records(chunks)) == ["alpha", "beta"]


def test_join_restores_original_stream():
    data = "1. e4 e5 *\n\n\n1. d4 d5 *\n\n\n1. c4 *\n"
    records = list(split_records(io.BytesIO(data.encode()), chunk_size=5))
    assert join_records(records) == data


def test_splitting_is_lazy():
    reads = []

    class CountingReader(io.BytesIO):
        def read(self, size=-1):
            chunk = super().read(size)
            reads.append(len(chunk))
            return chunk

    stream = CountingReader(b"a\n\n\n" + b"b" * 1000)
    records = split_records(stream, chunk_size=4)
    assert next(records) == "a"
    assert len(reads) == 1


def test_invalid_utf8_is_replaced():
    records = list(split_records(io.BytesIO(b"caf\xe9\n\n\nok")))
    assert records == ["caf\ufffd", "ok"]


def test_record_larger_than_cap_raises():
    stream = io.BytesIO(b"x" * 100)
    with pytest.raises(RecordTooLargeError):
        list(split_records(stream, chunk_size=10, max_record_bytes=32))


def test_cap_of_zero_disables_limit():
    stream = io.BytesIO(b"x" * 100)
    assert list(split_records(stream, chunk_size=10, max_record_bytes=0)) == ["x" * 100]


def test_read_failure_surfaces_after_buffered_records():
    reader = FailingReader(b"first\n\n\nsecond (partial)")
    records = split_records(reader)

    assert next(records) == "first"
    assert next(records) == "second (partial)"
    with pytest.raises(RecordStreamError) as exc_info:
        next(records)
    assert isinstance(exc_info.value.__cause__, OSError)


def test_closed_source_raises_stream_error():
    stream = io.BytesIO(b"game one\n\n\ngame two")
    stream.close()

    with pytest.raises(RecordStreamError) as exc_info:
        list(split_records(stream))
    assert isinstance(exc_info.value.__cause__, ValueError)
