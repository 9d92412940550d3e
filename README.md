# mapxml

Turn XML documents into nested Python dictionaries and turn such
dictionaries back into XML text. It uses only the standard library.

## Decoding

```python
from mapxml.readers import new_map_xml

m = new_map_xml(b'<doc><item id="1">one</item><item id="2">two</item></doc>')
# {'doc': {'item': [{'-id': '1', '#text': 'one'}, {'-id': '2', '#text': 'two'}]}}
```

`new_map_xml` accepts `bytes` or `str` and returns a `mapxml.mapvalue.Map`,
a `dict` subclass.

- Attributes become keys with a prefix, `-` by default. Change it with
  `mapxml.options.set_attr_prefix(prefix)` or
  `prepend_attr_with_hyphen(False)` (no prefix).
- When an element has attributes or child elements, its text is stored under
  `#text`. An element with neither attributes nor text decodes to `""`.
- If a tag repeats among siblings, its values are collected into a list.
- Pass `cast=True` to turn numeric text into `float` and
  `true`/`True`/`TRUE`/`false`/`False`/`FALSE` into `bool`. `NaN`, `Inf`
  and `-Inf` stay as strings unless `cast_nan_inf(True)` has been called.
- `coerce_keys_to_lower(True)` makes every key lower case; called with no
  argument it toggles the setting.
- `include_tag_seq_num(True)` adds a `_seq` key with each child element's
  position; plain text children become `{"#text": ..., "_seq": n}`.

These switches live in `mapxml.options` and apply to the whole process.

Text before the root element is skipped. Malformed XML raises
`mapxml.tokens.XmlDecodeError`; input with no root element raises
`mapxml.tokens.EndOfStream`. Only UTF-8 input is supported: an XML
declaration naming another encoding raises `XmlDecodeError`.

### Streams

`new_map_xml_reader(reader, cast=False)` reads the next document from a
binary stream, consuming it one byte at a time, so repeated calls return the
stream's documents one after another. `new_map_xml_reader_raw` also returns
the bytes it consumed; when it fails, the raised exception carries those
bytes as its `raw` attribute.

`handle_xml_reader(reader, map_handler, err_handler)` passes each document to
`map_handler(m)` until input ends or the handler returns false. Decoding
errors go to `err_handler(err)`, prefixed with `[xmlReader: N]`; if it
returns false the error is raised. `handle_xml_reader_raw` does the same and
also passes the raw bytes to both handlers.

## Encoding

```python
from mapxml.mapvalue import Map

Map({"tag": {"-id": "1", "#text": "value"}}).xml()
# '<tag id="1">value</tag>'
```

- Keys that start with the attribute prefix are written as attributes;
  `#text` is the element's text.
- Attributes and child elements are written sorted by name. Lists repeat
  the tag for each item.
- A single-key map uses its key as the root tag; otherwise, or when that
  value is a list holding anything but dicts, the root tag is `doc`. Pass
  `root_tag` to choose it yourself.
- Empty elements and `None` are written as `<tag/>`; call
  `mapxml.options.xml_go_empty_elem_syntax()` to get `<tag></tag>`, and
  `xml_default_empty_elem_syntax()` to go back.
- An attribute value that is not a string, bytes, number or bool raises
  `mapxml.encode.XmlEncodeError`.

`xml_indent(prefix="", indent="  ", root_tag=None)` writes indented output.
`xml_writer`, `xml_indent_writer` and their `*_raw` forms write to a stream:
text streams get `str`, binary streams get UTF-8 bytes, and the `*_raw`
methods also return the text written. The same encoders are available as
`mapxml.encode.encode_xml` and `encode_xml_indent`.

## Order-preserving round trips

`new_map_xml_seq`, `new_map_xml_seq_reader` and `new_map_xml_seq_reader_raw`
record the position of every element under a `#seq` key. Attributes go under
`#attr` as `{"#text": value, "#seq": n}`, and comments, directives and
processing instructions are kept under `#comment`, `#directive` and
`#procinst`. `Map.xml_seq`, `Map.xml_seq_indent` and their writer methods
(or `mapxml.seqencode.encode_xml_seq` / `encode_xml_seq_indent`) use those
positions to write the document back in its original order.

A comment, directive or processing instruction that comes before the root
element raises `mapxml.seqdecode.NoRootError`; the decoded item is on its
`mapping` attribute.

## What this package does not do

It converts between XML and dictionaries only. It has no JSON conversion, no
path or key queries over decoded maps, no charset conversion for non-UTF-8
input, and no command-line tool.