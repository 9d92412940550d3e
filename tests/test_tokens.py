import io

import pytest

from mapxml.tokens import (
    CharData,
    Comment,
    Directive,
    EndElement,
    EndOfStream,
    ProcInst,
    StartElement,
    XmlDecodeError,
    XmlTokenizer,
)

BOMS = [
    b"\xef\xbb\xbf",
    b"\xfe\xff",
    b"\xff\xfe",
    b"\x00\x00\xfe\xff",
    b"\xff\xfe\x00\x00",
]


def test_utf8_bom_only_reaches_end_of_stream():
    tok = XmlTokenizer(BOMS[0])
    assert tok.next_token() == CharData("\ufeff")
    with pytest.raises(EndOfStream):
        tok.next_token()


def test_bom_followed_by_document():
    data = BOMS[0] + b"<Allitems><Item></Item></Allitems>"
    tokens = list(XmlTokenizer(data))
    assert tokens[0] == CharData("\ufeff")
    assert tokens[1] == StartElement("Allitems")
    assert tokens[-1] == EndElement("Allitems")


def test_elements_attributes_and_text():
    tokens = list(XmlTokenizer(b'<a x="1" y=\'two\'>hi &amp; &#65;&#x42;</a>'))
    assert tokens == [
        StartElement("a", (("x", "1"), ("y", "two"))),
        CharData("hi & AB"),
        EndElement("a"),
    ]


def test_self_closing_element():
    tokens = list(XmlTokenizer(b'<r><e id="3"/></r>'))
    assert tokens == [
        StartElement("r"),
        StartElement("e", (("id", "3"),)),
        EndElement("e"),
        EndElement("r"),
    ]


def test_comment_directive_procinst_cdata():
    data = b"<?cat first_name last_name?><!DOCTYPE x><r><!-- note --><![CDATA[<raw>]]></r>"
    tokens = list(XmlTokenizer(data))
    assert tokens == [
        ProcInst("cat", "first_name last_name"),
        Directive("DOCTYPE x"),
        StartElement("r"),
        Comment(" note "),
        CharData("<raw>"),
        EndElement("r"),
    ]


def test_namespace_prefix_dropped_from_local_name():
    tokens = list(XmlTokenizer(b'<ns:a xmlns:ns="u"></ns:a>'))
    assert tokens == [StartElement("a", (("ns", "u"),)), EndElement("a")]


def test_mismatched_end_tag():
    tok = XmlTokenizer(b"<a></b>")
    tok.next_token()
    with pytest.raises(XmlDecodeError, match="closed by"):
        tok.next_token()


def test_unexpected_eof_inside_element():
    with pytest.raises(XmlDecodeError, match="unexpected EOF"):
        list(XmlTokenizer(b"<a><b>text"))


def test_bad_entity():
    with pytest.raises(XmlDecodeError, match="entity"):
        list(XmlTokenizer(b"<a>&bogus;</a>"))


def test_unquoted_attribute():
    with pytest.raises(XmlDecodeError):
        list(XmlTokenizer(b"<a x=1></a>"))


def test_reads_no_further_than_needed():
    stream = io.BytesIO(b"<a>x</a><b/>")
    first = XmlTokenizer(stream, record_raw=True)
    assert first.next_token() == StartElement("a")
    assert first.next_token() == CharData("x")
    assert first.next_token() == EndElement("a")
    assert first.raw() == b"<a>x</a>"
    second = XmlTokenizer(stream)
    assert second.next_token() == StartElement("b")


def test_crlf_normalised():
    tokens = list(XmlTokenizer(b"<a>1\r\n2</a>"))
    assert tokens[1] == CharData("1\n2")