"""Read XML documents from bytes or binary streams as Map values.

The reader functions consume a stream one byte at a time, so repeated calls
on the same stream return its documents one after another.
"""

from __future__ import annotations

import io
import itertools
from typing import Any, BinaryIO, Callable

from .decode import parse_map
from .mapvalue import Map
from .seqdecode import NoRootError, parse_seq_map
from .tokens import EndOfStream, XmlDecodeError, XmlTokenizer

__all__ = [
    "new_map_xml",
    "new_map_xml_reader",
    "new_map_xml_reader_raw",
    "handle_xml_reader",
    "handle_xml_reader_raw",
    "new_map_xml_seq",
    "new_map_xml_seq_reader",
    "new_map_xml_seq_reader_raw",
]

_Parser = Callable[[XmlTokenizer, bool], "dict[str, Any]"]
_Source = "bytes | bytearray | str | BinaryIO"


def _stream(source: Any) -> BinaryIO:
    if isinstance(source, str):
        return io.BytesIO(source.encode("utf-8"))
    if isinstance(source, (bytes, bytearray, memoryview)):
        return io.BytesIO(bytes(source))
    return source


def _parse(source: Any, cast: bool, parser: _Parser) -> Map:
    return Map(parser(XmlTokenizer(_stream(source)), cast))


def _parse_raw(source: Any, cast: bool, parser: _Parser, trim: bool) -> tuple[Map, bytes]:
    tokenizer = XmlTokenizer(_stream(source), record_raw=True)

    def consumed() -> bytes:
        raw = tokenizer.raw()
        return raw.strip() if trim else raw

    try:
        result = parser(tokenizer, cast)
    except (XmlDecodeError, NoRootError, EndOfStream) as exc:
        exc.raw = consumed()  # type: ignore[attr-defined]
        raise
    return Map(result), consumed()


def new_map_xml(data: bytes | str, cast: bool = False) -> Map:
    """Decode the first XML document in ``data``.

    Text before the root element is ignored. Raises EndOfStream if there is
    no root element and XmlDecodeError if the XML is malformed.
    """
    return _parse(data, cast, parse_map)


def new_map_xml_reader(reader: BinaryIO, cast: bool = False) -> Map:
    """Decode the next XML document from a binary stream."""
    return _parse(reader, cast, parse_map)


def new_map_xml_reader_raw(reader: BinaryIO, cast: bool = False) -> tuple[Map, bytes]:
    """Decode the next XML document and return it with the bytes consumed.

    On failure the raised exception carries those bytes as ``raw``.
    """
    return _parse_raw(reader, cast, parse_map, trim=False)


def handle_xml_reader(
    reader: BinaryIO,
    map_handler: Callable[[Map], bool],
    err_handler: Callable[[XmlDecodeError], bool],
) -> None:
    """Pass each document of a stream to ``map_handler`` until input ends.

    A false return from ``map_handler`` stops reading. Decoding errors go to
    ``err_handler``; a false return from it raises the error.
    """
    stream = _stream(reader)
    for count in itertools.count(1):
        try:
            mapping = new_map_xml_reader(stream)
        except EndOfStream:
            return
        except XmlDecodeError as exc:
            err = XmlDecodeError(f"[xmlReader: {count}] {exc}")
            if not err_handler(err):
                raise err from exc
            continue
        if not map_handler(mapping):
            return


def handle_xml_reader_raw(
    reader: BinaryIO,
    map_handler: Callable[[Map, bytes], bool],
    err_handler: Callable[[XmlDecodeError, bytes], bool],
) -> None:
    """Like handle_xml_reader, also passing the raw bytes of each document."""
    stream = _stream(reader)
    for count in itertools.count(1):
        try:
            mapping, raw = new_map_xml_reader_raw(stream)
        except EndOfStream:
            return
        except XmlDecodeError as exc:
            raw = getattr(exc, "raw", b"")
            err = XmlDecodeError(f"[xmlReader: {count}] {exc}")
            err.raw = raw  # type: ignore[attr-defined]
            if not err_handler(err, raw):
                raise err from exc
            continue
        if not map_handler(mapping, raw):
            return


def new_map_xml_seq(data: bytes | str, cast: bool = False) -> Map:
    """Decode the first XML document in ``data`` keeping element order.

    Raises NoRootError when a comment, directive or processing instruction
    comes before the root element, and EndOfStream if nothing is found.
    """
    return _parse(data, cast, parse_seq_map)


def new_map_xml_seq_reader(reader: BinaryIO, cast: bool = False) -> Map:
    """Decode the next document from a binary stream keeping element order."""
    return _parse(reader, cast, parse_seq_map)


def new_map_xml_seq_reader_raw(reader: BinaryIO, cast: bool = False) -> tuple[Map, bytes]:
    """Decode the next document keeping order; also return the trimmed bytes read.

    On failure the raised exception carries those bytes as ``raw``.
    """
    return _parse_raw(reader, cast, parse_seq_map, trim=True)