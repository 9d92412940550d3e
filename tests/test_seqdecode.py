import pytest

from mapxml.seqdecode import NoRootError, parse_seq_map
from mapxml.tokens import EndOfStream, XmlDecodeError, XmlTokenizer

BOOKS = b"""<doc> 
   <books>
      <book seq="1">
         <author>William T. Gaddis</author>
         <review>Gaddis is one of the most influential but little know authors in America.</review>
         <title>The Recognitions</title>
         <!-- here's the rest of the review -->
         <review>One of the great seminal American novels of the 20th century.</review>
         <review>Without it Thomas Pynchon probably wouldn't have written Gravity's Rainbow.</review>
      </book>
      <book seq="2">
         <author>Austin Tappan Wright</author>
         <title>Islandia</title>
         <review>An example of earlier 20th century American utopian fiction.</review>
      </book>
      <book>
         <author>John Hawkes</author>
         <title>The Beetle Leg</title>
         <!throw in a directive here>
         <review>A lyrical novel about the construction of Ft. Peck Dam in Montana.</review>
      </book>
      <book> 
         <author>
            <?cat first_name last_name?>
            <first_name>T.E.</first_name>
            <last_name>Porter</last_name>
         </author>
         <title>King's Day</title>
         <review>A magical novella.</review>
      </book>
   </books>
</doc>"""

BADDATA = b"""
	something strange
<Allitems>
	<Item>
	</Item>
   <Item>
        <link>http://www.something.com</link>
        <description>Some description goes here.</description>
   </Item>
</Allitems>
"""

BOM = b"\xef\xbb\xbf"


def parse(data, cast=False):
    return parse_seq_map(XmlTokenizer(data), cast)


@pytest.fixture
def books():
    return parse(BOOKS)["doc"]["books"]["book"]


def test_books_is_list_of_four(books):
    assert len(books) == 4
    assert [b["#seq"] for b in books] == [0, 1, 2, 3]


def test_first_book_reviews_and_comment(books):
    first = books[0]
    assert first["#attr"] == {"seq": {"#text": "1", "#seq": 0}}
    assert first["author"] == {"#text": "William T. Gaddis", "#seq": 0}
    assert first["title"] == {"#text": "The Recognitions", "#seq": 2}
    assert first["#comment"] == {"#text": " here's the rest of the review ", "#seq": 3}
    assert [r["#seq"] for r in first["review"]] == [1, 4, 5]
    assert first["review"][1]["#text"] == (
        "One of the great seminal American novels of the 20th century."
    )


def test_directive_in_third_book(books):
    third = books[2]
    assert "#attr" not in third
    assert third["#directive"] == {"#text": "throw in a directive here", "#seq": 2}
    assert third["review"]["#seq"] == 3


def test_procinst_in_fourth_book(books):
    author = books[3]["author"]
    assert author["#procinst"] == {"#target": "cat", "#inst": "first_name last_name", "#seq": 0}
    assert author["first_name"] == {"#text": "T.E.", "#seq": 1}
    assert author["last_name"] == {"#text": "Porter", "#seq": 2}
    assert author["#seq"] == 0


def test_bad_xml_stray_text_is_skipped():
    m = parse(BADDATA)
    items = m["Allitems"]["Item"]
    assert items[0] == {"#text": "", "#seq": 0}
    assert items[1]["link"] == {"#text": "http://www.something.com", "#seq": 0}
    assert items[1]["#seq"] == 1


def test_bom_only_is_end_of_stream():
    with pytest.raises(EndOfStream):
        parse(BOM)


def test_bom_then_document():
    m = parse(BOM + b"<a><b>x</b></a>")
    assert m == {"a": {"b": {"#text": "x", "#seq": 0}}}


def test_empty_root_element():
    assert parse(b"<a/>") == {"a": ""}


def test_simple_root_has_text_and_seq():
    assert parse(b"<a>hello</a>") == {"a": {"#text": "hello", "#seq": 0}}


def test_attribute_only_child():
    m = parse(b'<a><b x="1" y="2"/></a>')
    assert m == {
        "a": {
            "b": {
                "#attr": {"x": {"#text": "1", "#seq": 0}, "y": {"#text": "2", "#seq": 1}},
                "#seq": 0,
            }
        }
    }


def test_cast_values():
    m = parse(b'<a n="3"><b>1.5</b><c>true</c></a>', cast=True)
    assert m["a"]["#attr"]["n"]["#text"] == 3.0
    assert m["a"]["b"] == {"#text": 1.5, "#seq": 0}
    assert m["a"]["c"] == {"#text": True, "#seq": 1}


def test_comment_before_root_raises_no_root():
    with pytest.raises(NoRootError) as info:
        parse(b"<!-- hi --><root/>")
    assert info.value.mapping == {"#comment": " hi "}


def test_procinst_before_root_raises_no_root():
    with pytest.raises(NoRootError) as info:
        parse(b'<?xml version="1.0"?><root/>')
    assert info.value.mapping == {"#procinst": {"#target": "xml", "#inst": 'version="1.0"'}}


def test_directive_before_root_raises_no_root():
    with pytest.raises(NoRootError) as info:
        parse(b"<!DOCTYPE root><root/>")
    assert info.value.mapping == {"#directive": "DOCTYPE root"}


def test_malformed_raises_decode_error():
    with pytest.raises(XmlDecodeError):
        parse(b"<a><b></a>")


def test_empty_input_is_end_of_stream():
    with pytest.raises(EndOfStream):
        parse(b"")


def test_consecutive_documents():
    tokenizer = XmlTokenizer(b"<a>1</a><b>2</b>")
    assert parse_seq_map(tokenizer) == {"a": {"#text": "1", "#seq": 0}}
    assert parse_seq_map(tokenizer) == {"b": {"#text": "2", "#seq": 0}}
    with pytest.raises(EndOfStream):
        parse_seq_map(tokenizer)