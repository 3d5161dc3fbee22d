"""Decoder tests: the line shapes it reads, and the structure it cannot."""

from toon_convert import UNDEFINED, ToonDecoder, decode, encode, parse_scalar


def test_table_block():
    text = "items[2]{id,name}:\n  1,x\n  2,y"
    assert decode(text) == [{"id": 1, "name": "x"}, {"id": 2, "name": "y"}]


def test_table_round_trip_of_flat_rows():
    rows = [
        {"id": 1, "name": "Alice", "active": True, "score": 9.5},
        {"id": 2, "name": "Bob", "active": False, "score": None},
    ]
    assert decode(encode({"users": rows})) == rows


def test_nested_object_is_not_reconstructed():
    """Only the first line's value comes back; indentation is not parsed."""
    text = encode({"a": 1, "b": {"c": 2}})
    assert decode(text) == 1
    assert ToonDecoder().decode_all(text) == [1, "", 2]


def test_list_block_reads_scalars():
    text = encode([1, "a,b", {"x": 1}], "arr")
    # the object element comes back as its raw "key:value" text
    assert decode(text) == [1, "a,b", "x:1"]


def test_root_array_header():
    assert decode("[2]:\n  1\n  2") == [1, 2]


def test_key_value_line():
    assert decode("name:Ada") == "Ada"
    assert decode('note:"x, y"') == "x, y"


def test_bare_line():
    assert decode("just text") == "just text"
    assert decode("42") == 42


def test_blank_input():
    assert decode("") is None
    assert decode("\n  \n") is None


def test_blank_lines_are_skipped():
    assert decode("\n\nitems[1]{id}:\n\n  7\n") == [{"id": 7}]


def test_empty_array_header_is_not_recognised():
    """"X[0]" has no trailing colon, so it reads as a plain string."""
    assert decode("X[0]") == "X[0]"


def test_quoted_comma_breaks_row_split():
    """Rows are split on every comma, quoted or not."""
    assert decode('t[1]{a,b}:\n  "x,y",2') == [{"a": '"x', "b": 'y"'}]


def test_short_block_decodes_what_exists():
    assert decode("t[3]{a}:\n  1") == [{"a": 1}]


def test_missing_row_fields_are_undefined():
    assert decode("t[1]{a,b}:\n  1") == [{"a": 1, "b": UNDEFINED}]


def test_extra_row_fields_are_dropped():
    assert decode("t[1]{a}:\n  1,2,3") == [{"a": 1}]


def test_decode_all_walks_constructs():
    text = "id:7\ntags[2]:\n  red\n  blue\nrows[1]{k}:\n  v"
    assert ToonDecoder().decode_all(text) == [7, ["red", "blue"], [{"k": "v"}]]


# ---------------------------------------------------------------------------
# parse_scalar
# ---------------------------------------------------------------------------

def test_parse_literals():
    assert parse_scalar("null") is None
    assert parse_scalar("undefined") is UNDEFINED
    assert parse_scalar("true") is True
    assert parse_scalar(" false ") is False


def test_parse_numbers():
    assert parse_scalar("42") == 42
    assert isinstance(parse_scalar("42"), int)
    assert parse_scalar("-3.5") == -3.5
    assert parse_scalar("1e3") == 1000.0
    assert parse_scalar(".5") == 0.5
    assert parse_scalar("007") == 7


def test_parse_strings():
    assert parse_scalar("  text ") == "text"
    assert parse_scalar("1.2.3") == "1.2.3"
    assert parse_scalar("nan") == "nan"
    assert parse_scalar('"hi"') == "hi"
    assert parse_scalar('""') == ""
    assert parse_scalar('"') == '"'


def test_quoted_numbers_stay_strings():
    assert parse_scalar('"42"') == "42"


def test_unescape():
    assert parse_scalar('"a,\\"b\\""') == 'a,"b"'
    assert parse_scalar('"x\\ny"') == "x\ny"
    assert parse_scalar('"c:\\\\tmp"') == "c:\\tmp"
    assert parse_scalar('"keep \\q"') == "keep \\q"


def test_unescape_disabled():
    assert parse_scalar('"a,\\"b\\""', unescape=False) == 'a,\\"b\\"'
    assert ToonDecoder(unescape=False).decode('s:"x\\ny"') == "x\\ny"


def test_escaped_value_round_trip():
    for text in ['say "hi", then: leave', "two\nlines", "brace {x}", "back\\slash, too"]:
        assert decode(encode({"v": text})) == text


def test_bare_quoted_string_loses_its_quotes():
    """A string wrapped in quotes but free of trigger characters is written
    bare, and the decoder strips the quotes on the way back."""
    text = encode({"v": '"hi"'})
    assert text == 'v:"hi"'
    assert decode(text) == "hi"
