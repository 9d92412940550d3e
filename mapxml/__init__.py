"""Decode XML documents into nested dictionaries and encode them back to XML."""

__version__ = "0.1.0"
__all__ = ["options", "tokens", "decode", "encode", "seqdecode", "seqencode", "mapvalue", "readers"]