"""Process-wide switches that control how XML is decoded and encoded."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    "Settings",
    "settings",
    "prepend_attr_with_hyphen",
    "set_attr_prefix",
    "coerce_keys_to_lower",
    "include_tag_seq_num",
    "cast_nan_inf",
    "xml_go_empty_elem_syntax",
    "xml_default_empty_elem_syntax",
]


@dataclass
class Settings:
    """Current decoding and encoding options."""

    attr_prefix: str = "-"
    lower_case: bool = False
    include_tag_seq_num: bool = False
    cast_nan_inf: bool = False
    go_empty_elem_syntax: bool = False


settings = Settings()


def prepend_attr_with_hyphen(value: bool) -> None:
    """Prefix attribute keys with '-' when true, with nothing when false."""
    settings.attr_prefix = "-" if value else ""


def set_attr_prefix(prefix: str) -> None:
    """Use ``prefix`` in front of attribute keys."""
    settings.attr_prefix = prefix


def coerce_keys_to_lower(value: bool | None = None) -> None:
    """Set lower-casing of keys, or toggle it when no value is given."""
    if value is None:
        settings.lower_case = not settings.lower_case
    else:
        settings.lower_case = bool(value)


def include_tag_seq_num(value: bool) -> None:
    """Add a ``_seq`` entry to each inner element when decoding."""
    settings.include_tag_seq_num = bool(value)


def cast_nan_inf(value: bool) -> None:
    """Allow "NaN", "Inf" and "-Inf" to be cast to floats."""
    settings.cast_nan_inf = bool(value)


def xml_go_empty_elem_syntax() -> None:
    """Encode empty elements as ``<tag></tag>``."""
    settings.go_empty_elem_syntax = True


def xml_default_empty_elem_syntax() -> None:
    """Encode empty elements as ``<tag/>``."""
    settings.go_empty_elem_syntax = False