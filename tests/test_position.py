from songslides.position import PositionIndex, locate
from songslides.segmenter import SegmentMode, segment, segment_song

CHORDS = "G   D/F#  Em  C\nAmazing grace\nG   D/F#  Em  C\nHow sweet\n"


def test_locate_inside_slides():
    slides = segment("Hello\n\n\nWorld\n")
    assert locate(slides, 0).text == "Hello"
    assert locate(slides, 5).text == "Hello"
    assert locate(slides, 8).text == "World"
    assert locate(slides, 13).text == "World"


def test_locate_in_gap_is_none():
    slides = segment("Hello\n\n\nWorld\n")
    assert locate(slides, 6) is None
    assert locate(slides, 7) is None


def test_locate_past_end_is_none():
    slides = segment("Hello\n\n\nWorld\n")
    assert locate(slides, 14) is None
    assert locate(slides, 1000) is None


def test_locate_negative_offset_is_none():
    assert locate(segment("Hello\n"), -1) is None


def test_locate_on_leading_chord_line_is_none():
    slides = segment(CHORDS)
    assert locate(slides, 5) is None


def test_locate_on_inner_chord_line_is_slide():
    slides = segment(CHORDS)
    assert locate(slides, 35).text == "Amazing grace\nHow sweet"


def test_locate_end_of_text():
    slides = segment(CHORDS)
    assert locate(slides, len(CHORDS)) is None


def test_index_ignores_end_sentinel():
    text = "Chorus:\nHey\n"
    slides = segment(text, SegmentMode.LABEL)
    index = PositionIndex(slides)
    assert len(index) == 2
    assert index.locate(len(text)) is None


def test_locate_label_slide():
    slides = segment("Chorus:\nHey\n", SegmentMode.LABEL)
    found = locate(slides, 3)
    assert found.is_label
    assert found.text == "Chorus:"


def test_locate_in_song_prefix_is_none():
    text = "# Title\n# Author: Jane\nVerse 1:\nLine one\n"
    _, slides = segment_song(text)
    assert locate(slides, 2) is None
    assert locate(slides, text.index("Line one")).text == "Line one"


def test_locate_empty_slides():
    assert locate([], 0) is None
