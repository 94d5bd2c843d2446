from songslides.grammar import (
    CLEANUP_RULES,
    LineType,
    classify_line,
    clean_line,
    is_chord_line,
    match_label,
    stable_label,
)

# ---------------------------------------------------------------------------
# clean_line
# ---------------------------------------------------------------------------


def test_clean_trims_whitespace():
    assert clean_line("   Amazing grace \t") == "Amazing grace"


def test_clean_strips_repeat_annotation():
    assert clean_line("Amazing grace (repeat 2x)") == "Amazing grace"
    assert clean_line("Hallelujah (REPEAT)") == "Hallelujah"


def test_clean_strips_column_break():
    assert clean_line("column_break") == ""
    assert clean_line("COLUMN_BREAK") == ""


def test_clean_keeps_words_containing_column_break():
    assert clean_line("my_column_breaker") == "my_column_breaker"


def test_clean_strips_inline_chords():
    assert clean_line("Hey [Am7] there") == "Hey there"
    assert clean_line("[G]Amazing [D/F#]grace") == "Amazing grace"


def test_clean_strips_chord_groups():
    assert clean_line("[G///   | C2///   | 2x|]") == ""
    assert clean_line("[G ///  | C2/G/ |]") == ""


def test_clean_strips_chord_with_added_tone():
    assert clean_line("You [Dadd4]face") == "You face"


def test_clean_keeps_section_brackets():
    assert clean_line("[Verse 1]") == "[Verse 1]"
    assert clean_line("[Chorus 2x]") == "[Chorus 2x]"


def test_clean_collapses_whitespace():
    assert clean_line("How   great  thou art") == "How great thou art"


def test_clean_joins_syllables():
    assert clean_line("sna - ror") == "snaror"


def test_clean_is_idempotent():
    samples = [
        "(repe(repeat x)at y) Hello",
        "You [Dadd4]face  (repeat)",
        "sna - ror [G] - x",
        "[[G]]",
    ]
    for line in samples:
        once = clean_line(line)
        assert clean_line(once) == once


def test_clean_leaves_unmatched_brackets_alone():
    assert clean_line("[unclosed bracket") == "[unclosed bracket"
    assert clean_line("closed] only") == "closed] only"


def test_cleanup_rules_are_ordered_pairs():
    assert len(CLEANUP_RULES) == 6
    for pattern, replacement in CLEANUP_RULES:
        assert hasattr(pattern, "sub")
        assert isinstance(replacement, str) or callable(replacement)


# ---------------------------------------------------------------------------
# is_chord_line
# ---------------------------------------------------------------------------


def test_chord_line_spaces_and_slashes():
    assert is_chord_line("G   D/F#  Em  C")


def test_chord_line_pipes():
    assert is_chord_line("Cmaj7 | Am7 / D")


def test_chord_line_flats_and_sus():
    assert is_chord_line("Bb F/A Gm7 Dsus4 C#m7")


def test_chord_line_trailing_dot():
    assert is_chord_line("G. D.")


def test_chord_line_rejects_lyrics():
    assert not is_chord_line("G D Hello")
    assert not is_chord_line("Amazing grace")


def test_chord_line_rejects_lowercase():
    assert not is_chord_line("g d em")


def test_chord_line_needs_a_token():
    assert not is_chord_line("")
    assert not is_chord_line("| / |")


# ---------------------------------------------------------------------------
# match_label
# ---------------------------------------------------------------------------


def test_label_colon_form_keeps_colon():
    assert match_label("Verse 1:") == "Verse 1:"
    assert match_label("Chorus:") == "Chorus:"
    assert match_label("Förspel:") == "Förspel:"


def test_label_colon_form_at_most_two_words():
    assert match_label("Three word label:") is None


def test_label_markdown_header():
    assert match_label("# Amazing Grace") == "Amazing Grace"
    assert match_label("## Chorus") == "Chorus"


def test_label_bare_hash_is_empty():
    assert match_label("#") == ""
    assert match_label("##") == ""


def test_label_section_keywords():
    assert match_label("intro") == "intro"
    assert match_label("Outro 2") == "Outro 2"
    assert match_label("[Bridge]") == "Bridge"
    assert match_label("verse2") == "verse2"


def test_label_section_multiplier():
    assert match_label("[Chorus 2x]") == "Chorus 2x"
    assert match_label("Chorus 2 3x") == "Chorus 2 3x"


def test_label_not_matched_for_lyrics():
    assert match_label("Just some lyrics") is None
    assert match_label("Chorus of angels") is None


# ---------------------------------------------------------------------------
# stable_label
# ---------------------------------------------------------------------------


def test_stable_label_unchanged_for_plain_labels():
    for label in ["Verse 1:", "Chorus 2x", "Amazing Grace", "Author: Jane"]:
        assert stable_label(label) == label


def test_stable_label_settles_leading_dash():
    assert stable_label("- foo") == "foo"
    assert stable_label("- - foo") == "foo"


def test_stable_label_is_fixed_point():
    for label in ["- foo", "- - foo", "-x", "a - b"]:
        settled = stable_label(label)
        assert stable_label(settled) == settled


# ---------------------------------------------------------------------------
# classify_line
# ---------------------------------------------------------------------------


def test_classify_blank():
    assert classify_line("") == LineType.BLANK


def test_classify_chord():
    assert classify_line("G D") == LineType.CHORD


def test_classify_label():
    assert classify_line("Chorus:") == LineType.LABEL
    assert classify_line("# Title") == LineType.LABEL


def test_classify_lyric():
    assert classify_line("Amazing grace") == LineType.LYRIC


def test_classify_chord_wins_over_label():
    # A lone chord symbol is never a section keyword
    assert classify_line("C") == LineType.CHORD
