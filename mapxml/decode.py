"""Decode an XML document from a tokenizer into nested dicts and lists."""

from __future__ import annotations

import math
import re
from typing import Any

from .options import settings
from .tokens import (
    CharData,
    EndElement,
    StartElement,
    XmlDecodeError,
    XmlTokenizer,
)

__all__ = ["cast_value", "parse_map"]

_DECIMAL = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_SPECIAL = re.compile(r"[+-]?(?:inf|infinity|nan)", re.IGNORECASE)
_BOOLS = {
    "TRUE": True,
    "True": True,
    "true": True,
    "FALSE": False,
    "False": False,
    "false": False,
}
_NOISE = "\t\r\b\n "


def cast_value(text: str, cast: bool = False) -> Any:
    """Return ``text`` as a float or bool when ``cast`` is set and it parses."""
    if not cast:
        return text
    if not settings.cast_nan_inf and text.lower() in ("nan", "inf", "-inf"):
        return text
    if _DECIMAL.fullmatch(text):
        value = float(text)
        if not math.isinf(value):
            return value
    elif _SPECIAL.fullmatch(text):
        return float(text)
    return _BOOLS.get(text, text)


def _next(tokenizer: XmlTokenizer):
    try:
        return tokenizer.next_token()
    except XmlDecodeError as exc:
        raise XmlDecodeError(f"token error - {exc}") from exc


def parse_map(tokenizer: XmlTokenizer, cast: bool = False) -> dict[str, Any]:
    """Decode the next document from ``tokenizer``.

    Raises EndOfStream if input ends before a root element is found.
    """
    while True:
        token = _next(tokenizer)
        if isinstance(token, StartElement):
            return _parse_element(token, tokenizer, cast)


def _parse_element(start: StartElement, tokenizer: XmlTokenizer, cast: bool) -> dict[str, Any]:
    key = start.name.lower() if settings.lower_case else start.name
    node: dict[str, Any] = {}
    content: dict[str, Any] = {}
    for name, value in start.attrs:
        attr_key = settings.attr_prefix + name
        if settings.lower_case:
            attr_key = attr_key.lower()
        content[attr_key] = cast_value(value, cast)

    seq = 0
    while True:
        token = _next(tokenizer)
        if isinstance(token, StartElement):
            child = _parse_element(token, tokenizer, cast)
            (child_key, value), = child.items()
            if settings.include_tag_seq_num:
                if isinstance(value, dict):
                    value["_seq"] = seq
                else:
                    value = {"#text": value, "_seq": seq}
                seq += 1
            if child_key in content:
                existing = content[child_key]
                if isinstance(existing, list):
                    existing.append(value)
                else:
                    content[child_key] = [existing, value]
            else:
                content[child_key] = value
        elif isinstance(token, EndElement):
            if not node:
                node[key] = content if content else ""
            return node
        elif isinstance(token, CharData):
            text = token.text.strip(_NOISE)
            if text:
                if content:
                    content["#text"] = cast_value(text, cast)
                else:
                    node[key] = cast_value(text, cast)