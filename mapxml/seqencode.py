"""Encode dicts decoded with sequence numbers back to XML in their original order.

Only useful for values produced by ``parse_seq_map``: ``#seq`` keys order
elements and attributes and are not written. ``#attr`` holds attributes,
``#text`` holds text, and ``#comment``, ``#directive`` and ``#procinst``
are written as markup.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Mapping

from .encode import DEFAULT_ROOT_TAG, XmlEncodeError, _format_scalar, _Pretty
from .options import settings

__all__ = ["encode_xml_seq", "encode_xml_seq_indent"]

_NO_SEQ = 9999999
_UNKNOWN = "UNKNOWN"
_MARKUP_KEYS = frozenset({"#comment", "#directive", "#procinst"})


def _seq_of(value: Any) -> int:
    if isinstance(value, Mapping):
        seq = value.get("#seq")
        if isinstance(seq, int) and not isinstance(seq, bool):
            return seq
    return _NO_SEQ


def _markup_text(key: str, value: Mapping[str, Any], field: str) -> str:
    text = value.get(field)
    if not isinstance(text, str):
        raise XmlEncodeError(f"missing or invalid {field} value for: {key}")
    return text


def _encode_map(
    do_indent: bool, out: list[str], key: str, value: Mapping[str, Any], p: _Pretty
) -> tuple[bool, bool, bool, int]:
    """Write a mapping's markup; return (end_tag, is_simple, no_end_tag, elen)."""
    if key == "#comment":
        out.append(f"<!--{_markup_text(key, value, '#text')}-->")
        return False, False, True, 0
    if key == "#directive":
        out.append(f"<!{_markup_text(key, value, '#text')}>")
        return False, False, True, 0
    if key == "#procinst":
        target = _markup_text(key, value, "#target")
        inst = _markup_text(key, value, "#inst")
        out.append(f"<?{target} {inst}?>")
        return False, False, True, 0

    attrs = value.get("#attr")
    have_attrs = isinstance(attrs, Mapping)
    if have_attrs:
        for name, attr in sorted(attrs.items(), key=lambda item: _seq_of(item[1])):
            if not isinstance(attr, Mapping):
                raise XmlEncodeError(f"invalid attribute value for: {name}")
            text = _format_scalar(attr.get("#text"))
            if text is None:
                raise XmlEncodeError(f"invalid attribute value for: {name}")
            out.append(f' {name}="{text}"')

    seq_ok = "#seq" in value
    has_text = "#text" in value
    size = len(value)
    if has_text and seq_ok and size == (3 if have_attrs else 2):
        text = value["#text"]
        if isinstance(text, str) and text:
            out.append(">" + text)
            return True, True, False, 1
        return False, True, False, 0
    if not has_text and seq_ok and size == (2 if have_attrs else 1):
        return False, False, False, 0

    children: list[tuple[str, Any]] = []
    for child_key, child in value.items():
        if child_key in ("#attr", "#seq"):
            continue
        if isinstance(child, (list, tuple)):
            children.extend((child_key, item) for item in child)
        else:
            children.append((child_key, child))
    children.sort(key=lambda item: _seq_of(item[1]))

    out.append(">")
    if do_indent:
        out.append("\n")
    for child_key, child in children:
        single = not isinstance(child, (list, tuple))
        if single and do_indent:
            p.indent_more()
        _encode(do_indent, out, child_key, child, p)
        if single and do_indent:
            p.outdent()
    return True, False, False, 1


def _encode(do_indent: bool, out: list[str], key: str, value: Any, pp: _Pretty) -> None:
    p = replace(pp)

    if isinstance(value, (list, tuple)):
        for item in value:
            if do_indent:
                p.indent_more()
            _encode(do_indent, out, key, item, p)
            if do_indent:
                p.outdent()
        return

    end_tag = is_simple = no_end_tag = False
    elen = 0
    if value is None:
        out.append("<" + key)
    else:
        if do_indent:
            out.append(p.padding)
        if key not in _MARKUP_KEYS:
            out.append("<" + key)
        if isinstance(value, Mapping):
            end_tag, is_simple, no_end_tag, elen = _encode_map(do_indent, out, key, value, p)
        else:
            text = _format_scalar(value)
            if text is None:
                text = _UNKNOWN
            elen = len(text)
            if elen:
                out.append(">" + text)
            end_tag = is_simple = True

    if no_end_tag:
        pass
    elif end_tag:
        if do_indent and not is_simple:
            out.append(p.padding)
        if elen > 0 or settings.go_empty_elem_syntax:
            if elen == 0:
                out.append(">")
            out.append(f"</{key}>")
        else:
            out.append("/>")
    else:
        out.append(f"></{key}>" if settings.go_empty_elem_syntax else "/>")

    if do_indent:
        if p.cnt > 0:
            out.append("\n")
        p.outdent()


def encode_xml_seq(mapping: Mapping[str, Any], root_tag: str | None = None) -> str:
    """Encode a sequence-numbered mapping as compact XML in decoding order."""
    out: list[str] = []
    pretty = _Pretty()
    if len(mapping) == 1 and root_tag is None:
        (key, value), = mapping.items()
        if isinstance(value, (list, tuple)) and not all(isinstance(v, Mapping) for v in value):
            _encode(False, out, DEFAULT_ROOT_TAG, mapping, pretty)
        else:
            _encode(False, out, key, value, pretty)
    else:
        _encode(False, out, root_tag if root_tag is not None else DEFAULT_ROOT_TAG, mapping, pretty)
    return "".join(out)


def encode_xml_seq_indent(
    mapping: Mapping[str, Any], prefix: str = "", indent: str = "  ", root_tag: str | None = None
) -> str:
    """Encode a sequence-numbered mapping as indented XML in decoding order."""
    out: list[str] = []
    pretty = _Pretty(indent=indent, padding=prefix)
    if len(mapping) == 1 and root_tag is None:
        (key, value), = mapping.items()
        if isinstance(value, (list, tuple)):
            _encode(True, out, DEFAULT_ROOT_TAG, mapping, pretty)
        else:
            _encode(True, out, key, value, pretty)
    else:
        _encode(True, out, root_tag if root_tag is not None else DEFAULT_ROOT_TAG, mapping, pretty)
    return "".join(out)