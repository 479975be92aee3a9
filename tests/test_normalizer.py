"""Unit tests for text normalization and word deduplication."""

import pytest

from scene_text.modules.text import dedupe_words, filter_text, join_fragments


class TestFilterText:
    """Character filter and whitespace collapsing."""

    def test_mixed_noise(self):
        assert filter_text("H3ll0!\n\n\nWorld??  foo") == "H3ll0!World?? foo"

    def test_only_disallowed_characters(self):
        assert filter_text("@#$%^&*()_+=[]{}<>~|") == ""

    def test_empty(self):
        assert filter_text("") == ""

    def test_isolated_newline_kept(self):
        assert filter_text("abc\ndef") == "abc\ndef"

    def test_leading_and_trailing_newlines_dropped(self):
        assert filter_text("\nabc\n") == "abc"

    def test_double_newline_dropped_entirely(self):
        assert filter_text("first\n\nsecond") == "firstsecond"

    def test_removed_character_between_newlines(self):
        assert filter_text("a\n#\nb") == "a\nb"

    def test_newline_before_removed_tail_dropped(self):
        assert filter_text("abc\n#") == "abc"

    def test_newline_after_removed_head_dropped(self):
        assert filter_text("#\nabc") == "abc"

    def test_newline_exposed_by_space_stripping(self):
        assert filter_text("abc\n ") == "abc"

    @pytest.mark.parametrize("raw", [
        "a\n#\n#\nb", "x\n$\ny\n%\nz", "\n#\n#\n", "one\n \ntwo", "#\n\n#\nq\n&",
    ])
    def test_no_adjacent_or_edge_newlines(self, raw):
        out = filter_text(raw)
        assert "\n\n" not in out
        assert not out.startswith("\n")
        assert not out.endswith("\n")

    def test_leading_spaces_stripped(self):
        assert filter_text("   hello") == "hello"

    def test_single_trailing_space_stripped(self):
        assert filter_text("hello ") == "hello"

    def test_trailing_space_run_keeps_one(self):
        # Only the last character is stripped; the space before it survives
        assert filter_text("hello  ") == "hello "

    def test_space_runs_collapse(self):
        assert filter_text("a    b c") == "a b c"

    def test_removed_characters_can_create_space_runs(self):
        assert filter_text("a # b") == "a b"

    def test_allowed_punctuation(self):
        assert filter_text("Yes, no. Maybe! Why?") == "Yes, no. Maybe! Why?"

    def test_non_ascii_letters_dropped(self):
        assert filter_text("café") == "caf"

    def test_carriage_return_dropped_newline_kept(self):
        assert filter_text("line\r\nnext") == "line\nnext"

    def test_tabs_dropped(self):
        assert filter_text("a\tb") == "ab"


class TestJoinFragments:

    def test_each_fragment_followed_by_space(self):
        assert join_fragments(["Hello", "World"]) == "Hello World "

    def test_empty_fragments_skipped(self):
        assert join_fragments(["", "a", "", "b"]) == "a b "

    def test_nothing_to_join(self):
        assert join_fragments([]) == ""


class TestDedupeWords:
    """Order-preserving uniqueness over space-delimited words."""

    def test_first_occurrence_order(self):
        assert dedupe_words("cat dog cat bird dog") == "cat dog bird"

    def test_case_sensitive(self):
        assert dedupe_words("Cat cat CAT cat") == "Cat cat CAT"

    def test_trailing_separator_dropped(self):
        assert dedupe_words("cat dog cat ") == "cat dog"

    def test_final_token_without_delimiter(self):
        assert dedupe_words("a b c") == "a b c"

    @pytest.mark.parametrize("text", ["", " ", "     "])
    def test_empty_or_separators_only(self, text):
        assert dedupe_words(text) == ""

    def test_punctuation_is_part_of_word(self):
        assert dedupe_words("stop stop. stop") == "stop stop."
