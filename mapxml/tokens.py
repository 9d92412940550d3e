"""A streaming XML tokenizer that reads a byte source one byte at a time."""

from __future__ import annotations

import io
import re
from dataclasses import dataclass, field
from typing import BinaryIO, Iterator, Union

__all__ = [
    "EndOfStream",
    "XmlDecodeError",
    "StartElement",
    "EndElement",
    "CharData",
    "Comment",
    "Directive",
    "ProcInst",
    "XmlTokenizer",
]


class EndOfStream(EOFError):
    """The source ran out of input between documents."""


class XmlDecodeError(ValueError):
    """The XML input is malformed."""


@dataclass(frozen=True)
class StartElement:
    name: str
    attrs: tuple[tuple[str, str], ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class EndElement:
    name: str


@dataclass(frozen=True)
class CharData:
    text: str


@dataclass(frozen=True)
class Comment:
    text: str


@dataclass(frozen=True)
class Directive:
    text: str


@dataclass(frozen=True)
class ProcInst:
    target: str
    inst: str


Token = Union[StartElement, EndElement, CharData, Comment, Directive, ProcInst]

_SPACE = frozenset(b" \t\r\n")
_NAME_STOP = frozenset(b" \t\r\n<>/=?\"'")
_ENTITY = re.compile(r"&(#x[0-9a-fA-F]+|#[0-9]+|[A-Za-z_][\w.\-]*);")
_NAMED = {"lt": "<", "gt": ">", "amp": "&", "apos": "'", "quot": '"'}
_ENCODING = re.compile(r"""encoding\s*=\s*["']([^"']*)["']""")


def _local(name: str) -> str:
    i = name.find(":")
    if i < 1 or i > len(name) - 2:
        return name
    return name[i + 1:]


def _normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


class XmlTokenizer:
    """Yield XML tokens from bytes or a binary stream without reading ahead."""

    def __init__(self, source: bytes | str | BinaryIO, record_raw: bool = False):
        if isinstance(source, str):
            source = io.BytesIO(source.encode("utf-8"))
        elif isinstance(source, (bytes, bytearray, memoryview)):
            source = io.BytesIO(bytes(source))
        self._stream = source
        self._record = record_raw
        self._raw = bytearray()
        self._pushed: int | None = None
        self._stack: list[str] = []
        self._pending_end: str | None = None
        self._line = 1

    # -- byte level -----------------------------------------------------

    def _getc(self) -> int | None:
        if self._pushed is not None:
            b = self._pushed
            self._pushed = None
        else:
            chunk = self._stream.read(1)
            if not chunk:
                return None
            b = chunk[0]
            if self._record:
                self._raw.append(b)
        if b == 0x0A:
            self._line += 1
        return b

    def _ungetc(self, b: int) -> None:
        if b == 0x0A:
            self._line -= 1
        self._pushed = b

    def _error(self, message: str) -> XmlDecodeError:
        return XmlDecodeError(f"XML syntax error on line {self._line}: {message}")

    def _mustgetc(self) -> int:
        b = self._getc()
        if b is None:
            raise self._error("unexpected EOF")
        return b

    def _decode(self, data: bytes | bytearray) -> str:
        try:
            return bytes(data).decode("utf-8")
        except UnicodeDecodeError:
            raise self._error("invalid UTF-8") from None

    def _skip_space(self) -> None:
        while True:
            b = self._getc()
            if b is None:
                return
            if b not in _SPACE:
                self._ungetc(b)
                return

    def _read_name(self) -> str:
        buf = bytearray()
        while True:
            b = self._getc()
            if b is None:
                break
            if b in _NAME_STOP:
                self._ungetc(b)
                break
            buf.append(b)
        name = self._decode(buf)
        if name and not (name[0].isalpha() or name[0] in "_:"):
            raise self._error(f"invalid XML name: {name}")
        return name

    def _unescape(self, text: str) -> str:
        out: list[str] = []
        pos = 0
        while True:
            amp = text.find("&", pos)
            if amp < 0:
                out.append(text[pos:])
                break
            out.append(text[pos:amp])
            match = _ENTITY.match(text, amp)
            if match is None:
                raise self._error(f"invalid character entity {text[amp:amp + 12]}")
            ref = match.group(1)
            if ref.startswith("#x"):
                out.append(self._char(int(ref[2:], 16), ref))
            elif ref.startswith("#"):
                out.append(self._char(int(ref[1:]), ref))
            elif ref in _NAMED:
                out.append(_NAMED[ref])
            else:
                raise self._error(f"invalid character entity &{ref};")
            pos = match.end()
        return "".join(out)

    def _char(self, code: int, ref: str) -> str:
        try:
            return chr(code)
        except (ValueError, OverflowError):
            raise self._error(f"invalid character entity &{ref};") from None

    def _read_until(self, terminator: bytes) -> bytes:
        buf = bytearray()
        while not buf.endswith(terminator):
            buf.append(self._mustgetc())
        return bytes(buf[: -len(terminator)])

    # -- tokens ---------------------------------------------------------

    def next_token(self) -> Token:
        """Return the next token; raise EndOfStream at the end of input."""
        if self._pending_end is not None:
            name = self._pending_end
            self._pending_end = None
            self._stack.pop()
            return EndElement(_local(name))

        b = self._getc()
        if b is None:
            if self._stack:
                raise self._error("unexpected EOF")
            raise EndOfStream()
        if b != ord("<"):
            return self._chardata(b)

        c = self._mustgetc()
        if c == ord("/"):
            return self._end_tag()
        if c == ord("?"):
            return self._procinst()
        if c == ord("!"):
            return self._bang()
        self._ungetc(c)
        return self._start_tag()

    def _chardata(self, first: int) -> CharData:
        buf = bytearray([first])
        while True:
            b = self._getc()
            if b is None:
                break
            if b == ord("<"):
                self._ungetc(b)
                break
            buf.append(b)
        return CharData(self._unescape(_normalize_newlines(self._decode(buf))))

    def _end_tag(self) -> EndElement:
        name = self._read_name()
        if not name:
            raise self._error("expected element name after </")
        self._skip_space()
        if self._mustgetc() != ord(">"):
            raise self._error(f"invalid characters between </{name} and >")
        if not self._stack:
            raise self._error(f"unexpected end element </{name}>")
        top = self._stack.pop()
        if top != name:
            raise self._error(f"element <{top}> closed by </{name}>")
        return EndElement(_local(name))

    def _procinst(self) -> ProcInst:
        target = self._read_name()
        if not target:
            raise self._error("expected target name after <?")
        self._skip_space()
        inst = self._decode(self._read_until(b"?>"))
        if target == "xml":
            match = _ENCODING.search(inst)
            if match and match.group(1).lower() not in ("utf-8", "utf8"):
                raise XmlDecodeError(
                    f'xml: encoding "{match.group(1)}" declared but no charset reader is available'
                )
        return ProcInst(target, inst)

    def _bang(self) -> Token:
        c = self._mustgetc()
        if c == ord("-"):
            if self._mustgetc() != ord("-"):
                raise self._error("invalid sequence <!- not part of <!--")
            return Comment(self._decode(self._read_until(b"-->")))
        if c == ord("["):
            head = bytes(self._mustgetc() for _ in range(6))
            if head != b"CDATA[":
                raise self._error("invalid <![ sequence")
            text = self._decode(self._read_until(b"]]>"))
            return CharData(_normalize_newlines(text))
        self._ungetc(c)
        buf = bytearray()
        quote: int | None = None
        depth = 0
        while True:
            b = self._mustgetc()
            if quote is not None:
                if b == quote:
                    quote = None
            elif b in (ord('"'), ord("'")):
                quote = b
            elif b == ord("<"):
                depth += 1
            elif b == ord(">"):
                if depth == 0:
                    break
                depth -= 1
            buf.append(b)
        return Directive(self._decode(buf))

    def _start_tag(self) -> StartElement:
        name = self._read_name()
        if not name:
            raise self._error("expected element name after <")
        attrs: list[tuple[str, str]] = []
        while True:
            self._skip_space()
            b = self._mustgetc()
            if b == ord("/"):
                if self._mustgetc() != ord(">"):
                    raise self._error(f"expected /> in element {name}")
                self._stack.append(name)
                self._pending_end = name
                return StartElement(_local(name), tuple(attrs))
            if b == ord(">"):
                self._stack.append(name)
                return StartElement(_local(name), tuple(attrs))
            self._ungetc(b)
            attr = self._read_name()
            if not attr:
                raise self._error("expected attribute name in element")
            self._skip_space()
            if self._mustgetc() != ord("="):
                raise self._error("attribute name without = in element")
            self._skip_space()
            quote = self._mustgetc()
            if quote not in (ord('"'), ord("'")):
                raise self._error("unquoted or missing attribute value in element")
            value = self._read_until(bytes([quote]))
            text = self._unescape(_normalize_newlines(self._decode(value)))
            attrs.append((_local(attr), text))

    def __iter__(self) -> Iterator[Token]:
        while True:
            try:
                yield self.next_token()
            except EndOfStream:
                return

    def raw(self) -> bytes:
        """Bytes consumed from the source so far, when recording."""
        return bytes(self._raw)