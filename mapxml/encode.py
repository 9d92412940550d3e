"""Encode nested dicts and lists as XML text."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Any, Mapping

from .options import settings

__all__ = ["XmlEncodeError", "DEFAULT_ROOT_TAG", "encode_xml", "encode_xml_indent"]

DEFAULT_ROOT_TAG = "doc"
_UNKNOWN = "UNKNOWN"


class XmlEncodeError(ValueError):
    """A value cannot be written as XML."""


@dataclass
class _Pretty:
    indent: str = ""
    cnt: int = 0
    padding: str = ""

    def indent_more(self) -> None:
        self.padding += self.indent
        self.cnt += 1

    def outdent(self) -> None:
        if self.cnt > 0:
            self.padding = self.padding[: len(self.padding) - len(self.indent)]
            self.cnt -= 1


def _format_float(value: float) -> str:
    """Shortest representation, switching to exponent form like ``%g``."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"
    sign, digit_tuple, exponent = Decimal(repr(value)).as_tuple()
    all_digits = "".join(map(str, digit_tuple))
    dp = len(all_digits) + exponent
    digits = all_digits.rstrip("0")
    nd = len(digits)
    neg = "-" if sign else ""
    exp = dp - 1
    if exp < -4 or exp >= 6:
        mantissa = digits[0] + ("." + digits[1:] if nd > 1 else "")
        esign = "-" if exp < 0 else "+"
        return f"{neg}{mantissa}e{esign}{abs(exp):02d}"
    if dp <= 0:
        return f"{neg}0.{'0' * -dp}{digits}"
    if dp >= nd:
        return f"{neg}{digits}{'0' * (dp - nd)}"
    return f"{neg}{digits[:dp]}.{digits[dp:]}"


def _format_scalar(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _format_float(value)
    return None


def _text_value(value: Any) -> str:
    text = _format_scalar(value)
    return str(value) if text is None else text


def _attr_text(key: str, value: Any) -> str:
    text = _format_scalar(value)
    if text is None:
        raise XmlEncodeError(f"invalid attribute value for: {key}:<{type(value).__name__}>")
    return text


def _close_tag(key: str) -> str:
    return f"></{key}>" if settings.go_empty_elem_syntax else "/>"


def _encode(do_indent: bool, out: list[str], key: str, value: Any, pp: _Pretty) -> None:
    p = replace(pp)
    end_tag = False
    is_simple = False
    elen = 0

    if isinstance(value, (list, tuple)):
        if value:
            for item in value:
                if do_indent:
                    p.indent_more()
                _encode(do_indent, out, key, item, p)
                if do_indent:
                    p.outdent()
            return
        if do_indent:
            out.append(p.padding + p.indent)
        out.append("<" + key)
        end_tag = True
    else:
        if do_indent:
            out.append(p.padding)
        out.append("<" + key)
        if isinstance(value, Mapping):
            prefix = settings.attr_prefix
            attrs = sorted(
                (k[len(prefix):], _attr_text(k, v))
                for k, v in value.items()
                if k.startswith(prefix)
            )
            out.extend(f' {name}="{text}"' for name, text in attrs)
            if len(attrs) == len(value):
                out.append(_close_tag(key))
            elif "#text" in value and len(attrs) + 1 == len(value):
                out.append(">" + _text_value(value["#text"]))
                end_tag = True
                is_simple = True
                elen = 1
            else:
                out.append(">")
                if do_indent:
                    out.append("\n")
                for child_key in sorted(k for k in value if not k.startswith(prefix)):
                    child = value[child_key]
                    single = not isinstance(child, (list, tuple))
                    if single and do_indent:
                        p.indent_more()
                    _encode(do_indent, out, child_key, child, p)
                    if single and do_indent:
                        p.outdent()
                end_tag = True
                elen = 1
        elif value is None:
            end_tag = True
            is_simple = True
        else:
            text = _format_scalar(value)
            if text is None:
                text = _UNKNOWN
            elen = len(text)
            if elen:
                out.append(">" + text)
            end_tag = True
            is_simple = True

    if end_tag:
        if do_indent and not is_simple:
            out.append(p.padding)
        if elen > 0 or settings.go_empty_elem_syntax:
            if elen == 0:
                out.append(">")
            out.append(f"</{key}>")
        else:
            out.append("/>")
    if do_indent:
        if p.cnt > 0:
            out.append("\n")
        p.outdent()


def encode_xml(mapping: Mapping[str, Any], root_tag: str | None = None) -> str:
    """Encode ``mapping`` as compact XML.

    A single-key mapping uses its key as the root tag unless ``root_tag`` is
    given or the value is a list holding anything other than dicts.
    """
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


def encode_xml_indent(
    mapping: Mapping[str, Any], prefix: str = "", indent: str = "  ", root_tag: str | None = None
) -> str:
    """Encode ``mapping`` as indented XML; each line starts with ``prefix``."""
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