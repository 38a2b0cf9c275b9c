"""Tests for input sanitization and output grouping."""

import pytest

from codebreakers.services.output.formatter import format_output
from codebreakers.services.preprocessing.normalizer import (
    NormalizationMode,
    TextNormalizer,
    sanitize,
)


class TestTextNormalizer:
    """Test suite for the sanitizer."""

    @pytest.fixture
    def normalizer(self):
        return TextNormalizer()

    def test_strips_everything_but_letters(self, normalizer):
        assert normalizer.normalize("We are discovered. Flee at once!") == (
            "WEAREDISCOVEREDFLEEATONCE"
        )

    def test_bytes_input(self, normalizer):
        assert normalizer.normalize(b"Over the horizon\nShe's\xff smooth") == (
            "OVERTHEHORIZONSHESSMOOTH"
        )

    def test_non_ascii_letters_dropped(self, normalizer):
        assert normalizer.normalize("café") == "CAF"
        assert normalizer.normalize("straße") == "STRAE"
        assert normalizer.normalize("\ufb01ne") == "NE"
        assert normalizer.normalize("\uff21\uff22C") == "C"

    @pytest.mark.parametrize(
        "text",
        ["straße", "\ufb01ne print", "\uff21\uff22C", "Ærø café", "plain ascii"],
    )
    def test_str_and_utf8_bytes_agree(self, normalizer, text):
        assert normalizer.normalize(text) == normalizer.normalize(text.encode("utf-8"))

    def test_unknown_characters_tracked(self, normalizer):
        result = normalizer.normalize_full("aß")

        assert result.text == "A"
        assert result.removed_chars == {"ß": 1}

    def test_idempotent(self, normalizer):
        text = "Mixed CASE, digits 42 and\ttabs"
        once = normalizer.normalize(text)
        assert normalizer.normalize(once) == once

    def test_empty(self, normalizer):
        assert normalizer.normalize("") == ""
        assert normalizer.normalize(b"") == ""

    def test_removed_chars_tracked(self, normalizer):
        result = normalizer.normalize_full("A B.C")

        assert result.text == "ABC"
        assert result.removed_chars == {" ": 1, ".": 1}
        assert result.mode == NormalizationMode.STRICT

    def test_preserve_spaces(self, normalizer):
        assert normalizer.normalize("a b, c", NormalizationMode.PRESERVE_SPACES) == "A B C"

    def test_sanitize_helper(self):
        assert sanitize("attack at dawn") == "ATTACKATDAWN"


class TestFormatOutput:
    """Test suite for output grouping."""

    def test_groups_of_five(self):
        assert format_output("WEAREDISCOVEREDFLEEATONCE") == "WEARE DISCO VERED FLEEA TONCE"

    def test_partial_group(self):
        assert format_output("ATTACKATDAWN") == "ATTAC KATDA WN"

    def test_line_break_every_25_letters(self):
        letters = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
        assert format_output(letters) == "ABCDE FGHIJ KLMNO PQRST UVWXY \nZ"

    def test_short_and_empty(self):
        assert format_output("ABC") == "ABC"
        assert format_output("") == ""

    def test_custom_grouping(self):
        assert format_output("ABCDEFGH", group_size=4, line_length=8) == "ABCD EFGH"
        assert format_output("ABCDEFGHI", group_size=2, line_length=4) == "AB CD \nEF GH \nI"

    def test_formatting_preserves_letters(self):
        letters = "THEQUICKBROWNFOXJUMPSOVERTHELAZYDOG" * 3
        assert sanitize(format_output(letters)) == letters
