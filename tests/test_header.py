from songslides.header import (
    paste_text,
    parse_prefix,
    render_prefix,
    song_document,
    song_references,
    strip_prefix,
    text_only,
)

# ---------------------------------------------------------------------------
# parse_prefix
# ---------------------------------------------------------------------------


def test_parse_title_and_fields():
    header = parse_prefix("# Amazing Grace\n# Author: John Newton\n# CCLI: 22025\nAmazing grace\n")
    assert header.title == "Amazing Grace"
    assert header.author == "John Newton"
    assert header.ccli == "22025"
    assert header.body_offset == len("# Amazing Grace\n# Author: John Newton\n# CCLI: 22025\n")


def test_parse_field_names_case_insensitive():
    header = parse_prefix("# Title\n# author: Jane\n#ccli:1\nBody\n")
    assert header.author == "Jane"
    assert header.ccli == "1"


def test_parse_empty_field_is_none():
    header = parse_prefix("# Title\n# Author: \n# CCLI:\nBody\n")
    assert header.author is None
    assert header.ccli is None
    assert header.body_offset == len("# Title\n# Author: \n# CCLI:\n")


def test_parse_fields_before_title():
    header = parse_prefix("# Author: Jane\n# Title\nBody\n")
    assert header.title == "Title"
    assert header.author == "Jane"


def test_parse_no_prefix():
    header = parse_prefix("Amazing grace\n")
    assert header.title is None
    assert header.body_offset == 0


def test_parse_empty_text():
    assert parse_prefix("").body_offset == 0


def test_parse_stops_at_second_title():
    text = "# Title\n# Verse 1\nLine\n"
    header = parse_prefix(text)
    assert header.title == "Title"
    assert text[header.body_offset :] == "# Verse 1\nLine\n"


def test_parse_unterminated_title_line():
    header = parse_prefix("# Title")
    assert header.title == "Title"
    assert header.body_offset == len("# Title")


def test_parse_unterminated_field_line():
    header = parse_prefix("# Title\n# Author: Jane")
    assert header.title == "Title"
    assert header.author == "Jane"
    assert header.body_offset == len("# Title\n# Author: Jane")


def test_parse_strips_every_leading_hash():
    assert parse_prefix("## Title\nBody\n").title == "Title"
    assert parse_prefix("###Title\nBody\n").title == "Title"


def test_parse_unknown_field_is_title():
    header = parse_prefix("# Key: G\nBody\n")
    assert header.title == "Key: G"


def test_strip_prefix():
    assert strip_prefix("# Title\n# Author: Jane\nLine one\n") == "Line one\n"


# ---------------------------------------------------------------------------
# render_prefix / song_document
# ---------------------------------------------------------------------------


def test_render_prefix_writes_every_field():
    assert render_prefix("Title") == "# Title\n# Author: \n# CCLI: \n"


def test_render_prefix_with_values():
    assert render_prefix("Title", "Jane", "123") == "# Title\n# Author: Jane\n# CCLI: 123\n"


def test_song_document_parses_back():
    doc = song_document("Title", "Line one\nLine two", author="Jane", ccli="123")
    header = parse_prefix(doc)
    assert header.title == "Title"
    assert header.author == "Jane"
    assert header.ccli == "123"
    assert doc[header.body_offset :] == "Line one\nLine two\n"


# ---------------------------------------------------------------------------
# Deck helpers
# ---------------------------------------------------------------------------


def test_paste_text_with_id():
    assert paste_text("Amazing Grace", "Line", song_id="42") == "# Amazing Grace (@42)\nLine\n"


def test_paste_text_without_id():
    assert paste_text("Amazing Grace", "Line") == "# Amazing Grace\nLine\n"


def test_song_references_in_order():
    deck = "# Welcome\nHello\n\n# Amazing Grace (@42)\nLine\n\n## How Great (@7)\nLine\n"
    assert song_references(deck) == ("42", "7")


def test_song_references_ignore_body_lines():
    assert song_references("Pay (@42) attention\n") == ()


def test_text_only_drops_header_line():
    assert text_only("# Amazing Grace (@42)\nLine one\nLine two") == "Line one\nLine two"


def test_text_only_keeps_plain_text():
    assert text_only("Line one\n# not first") == "Line one\n# not first"


def test_text_only_single_header_line():
    assert text_only("# Title") == ""
