import io

from debugpy_inspect.streams import BannerFilter, relay_chunks, relay_lines

BANNER = "Debugger listening on 127.0.0.1:5678"


class ChunkedSource:
    """Binary source that hands out fixed chunks from ``read1``."""

    def __init__(self, chunks):
        self.chunks = list(chunks)
        self.closed = False

    def read1(self, size=-1):
        return self.chunks.pop(0) if self.chunks else b""

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.closed = True


def test_banner_filter_drops_first_exact_match_only():
    keep = BannerFilter(BANNER)
    assert keep(BANNER + "\n") is False
    assert keep.suppressed
    assert keep(BANNER + "\n") is True


def test_banner_filter_keeps_lookalike_lines():
    keep = BannerFilter(BANNER)
    assert keep("Debugger listening on 127.0.0.1:5679\n")
    assert keep("error: " + BANNER + "\n")
    assert not keep.suppressed


def test_banner_filter_accepts_crlf():
    keep = BannerFilter(BANNER)
    assert keep(BANNER + "\r\n") is False


def test_relay_lines_filters_banner():
    source = io.BytesIO(f"{BANNER}\nTraceback (most recent call last):\nboom\n".encode())
    sink = io.StringIO()
    relay_lines(source, sink, BannerFilter(BANNER))
    assert sink.getvalue() == "Traceback (most recent call last):\nboom\n"
    assert source.closed


def test_relay_lines_without_filter_keeps_everything():
    source = io.BytesIO(f"{BANNER}\nlast line without newline".encode())
    sink = io.StringIO()
    relay_lines(source, sink)
    assert sink.getvalue() == f"{BANNER}\nlast line without newline"


def test_relay_chunks_is_verbatim():
    source = ChunkedSource([b"over", b"write"])
    sink = io.StringIO()
    relay_chunks(source, sink)
    assert sink.getvalue() == "overwrite"
    assert source.closed


def test_relay_chunks_joins_split_multibyte_characters():
    data = "héllo ✓".encode("utf-8")
    split = data.index("✓".encode("utf-8")) + 1
    sink = io.StringIO()
    relay_chunks(ChunkedSource([data[:split], data[split:]]), sink)
    assert sink.getvalue() == "héllo ✓"


def test_relay_chunks_replaces_truncated_tail():
    sink = io.StringIO()
    relay_chunks(ChunkedSource([b"ok\xe2\x9c"]), sink)
    assert sink.getvalue() == "ok�"
