"""Decode XML into dicts that keep the order of elements under ``#seq`` keys.

Attributes are held under ``#attr``, text under ``#text``, and comments,
directives and processing instructions under ``#comment``, ``#directive``
and ``#procinst``, so that the document can later be re-encoded in its
original order.
"""

from __future__ import annotations

from typing import Any

from .decode import cast_value
from .tokens import (
    CharData,
    Comment,
    Directive,
    EndElement,
    ProcInst,
    StartElement,
    Token,
    XmlDecodeError,
    XmlTokenizer,
)

__all__ = ["NoRootError", "parse_seq_map"]

_NOISE = "\t\r\b\n "


class NoRootError(Exception):
    """A comment, directive or processing instruction was found outside a root element.

    The decoded item is available as ``mapping``.
    """

    def __init__(self, mapping: dict[str, Any]):
        super().__init__("no root key")
        self.mapping = mapping


def _next(tokenizer: XmlTokenizer) -> Token:
    try:
        return tokenizer.next_token()
    except XmlDecodeError as exc:
        raise XmlDecodeError(f"token error - {exc}") from exc


def parse_seq_map(tokenizer: XmlTokenizer, cast: bool = False) -> dict[str, Any]:
    """Decode the next document from ``tokenizer`` with sequence numbers.

    Stray text before the root element is ignored. Raises EndOfStream if
    input ends before anything is found, and NoRootError if a comment,
    directive or processing instruction comes before the root element.
    """
    while True:
        token = _next(tokenizer)
        if isinstance(token, StartElement):
            return _parse_element(token, tokenizer, cast)
        if isinstance(token, Comment):
            raise NoRootError({"#comment": token.text})
        if isinstance(token, Directive):
            raise NoRootError({"#directive": token.text})
        if isinstance(token, ProcInst):
            raise NoRootError({"#procinst": {"#target": token.target, "#inst": token.inst}})


def _add_child(content: dict[str, Any], key: str, value: Any) -> None:
    if key in content:
        existing = content[key]
        if isinstance(existing, list):
            existing.append(value)
        else:
            content[key] = [existing, value]
    else:
        content[key] = value


def _parse_element(start: StartElement, tokenizer: XmlTokenizer, cast: bool) -> dict[str, Any]:
    content: dict[str, Any] = {}
    if start.attrs:
        content["#attr"] = {
            name: {"#text": cast_value(value, cast), "#seq": index}
            for index, (name, value) in enumerate(start.attrs)
        }

    seq = 0
    while True:
        token = _next(tokenizer)
        if isinstance(token, StartElement):
            child = _parse_element(token, tokenizer, cast)
            (child_key, value), = child.items()
            if isinstance(value, dict):
                value["#seq"] = seq
            else:
                value = {"#text": value, "#seq": seq}
            seq += 1
            _add_child(content, child_key, value)
        elif isinstance(token, EndElement):
            return {start.name: content if content else ""}
        elif isinstance(token, CharData):
            text = token.text.strip(_NOISE)
            if text:
                content["#text"] = cast_value(text, cast)
                content["#seq"] = seq
                seq += 1
        elif isinstance(token, Comment):
            content["#comment"] = {"#text": token.text, "#seq": seq}
            seq += 1
        elif isinstance(token, Directive):
            content["#directive"] = {"#text": token.text, "#seq": seq}
            seq += 1
        elif isinstance(token, ProcInst):
            content["#procinst"] = {"#target": token.target, "#inst": token.inst, "#seq": seq}
            seq += 1