"""A dict type with methods for writing itself as XML."""

from __future__ import annotations

import io
from typing import IO, Any

from .encode import encode_xml, encode_xml_indent
from .seqencode import encode_xml_seq, encode_xml_seq_indent

__all__ = ["Map"]


def _write(writer: IO[Any], text: str) -> None:
    if isinstance(writer, io.TextIOBase):
        writer.write(text)
    else:
        writer.write(text.encode("utf-8"))


class Map(dict):
    """A dict of decoded XML that can be encoded back to XML.

    Writer methods accept text or binary streams; binary streams get UTF-8.
    The ``*_raw`` methods also return the XML that was written.
    """

    def xml(self, root_tag: str | None = None) -> str:
        """Encode as compact XML; keys are sorted."""
        return encode_xml(self, root_tag)

    def xml_indent(self, prefix: str = "", indent: str = "  ", root_tag: str | None = None) -> str:
        """Encode as indented XML."""
        return encode_xml_indent(self, prefix, indent, root_tag)

    def xml_writer(self, writer: IO[Any], root_tag: str | None = None) -> None:
        _write(writer, self.xml(root_tag))

    def xml_writer_raw(self, writer: IO[Any], root_tag: str | None = None) -> str:
        text = self.xml(root_tag)
        _write(writer, text)
        return text

    def xml_indent_writer(
        self, writer: IO[Any], prefix: str = "", indent: str = "  ", root_tag: str | None = None
    ) -> None:
        _write(writer, self.xml_indent(prefix, indent, root_tag))

    def xml_indent_writer_raw(
        self, writer: IO[Any], prefix: str = "", indent: str = "  ", root_tag: str | None = None
    ) -> str:
        text = self.xml_indent(prefix, indent, root_tag)
        _write(writer, text)
        return text

    def xml_seq(self, root_tag: str | None = None) -> str:
        """Encode a sequence-numbered value as compact XML in original order."""
        return encode_xml_seq(self, root_tag)

    def xml_seq_indent(
        self, prefix: str = "", indent: str = "  ", root_tag: str | None = None
    ) -> str:
        """Encode a sequence-numbered value as indented XML in original order."""
        return encode_xml_seq_indent(self, prefix, indent, root_tag)

    def xml_seq_writer(self, writer: IO[Any], root_tag: str | None = None) -> None:
        _write(writer, self.xml_seq(root_tag))

    def xml_seq_writer_raw(self, writer: IO[Any], root_tag: str | None = None) -> str:
        text = self.xml_seq(root_tag)
        _write(writer, text)
        return text

    def xml_seq_indent_writer(
        self, writer: IO[Any], prefix: str = "", indent: str = "  ", root_tag: str | None = None
    ) -> None:
        _write(writer, self.xml_seq_indent(prefix, indent, root_tag))

    def xml_seq_indent_writer_raw(
        self, writer: IO[Any], prefix: str = "", indent: str = "  ", root_tag: str | None = None
    ) -> str:
        text = self.xml_seq_indent(prefix, indent, root_tag)
        _write(writer, text)
        return text