"""Unit tests for gateway text chunking and output cleanup."""

import pytest

from storyglot.core.gateway.cleanup import clean_translation, split_into_chunks


class TestSplitIntoChunks:

    def test_fixed_size_slices(self):
        assert split_into_chunks("abcdefg", 3) == ["abc", "def", "g"]

    def test_short_text_is_one_chunk(self):
        assert split_into_chunks("Hello", 1000) == ["Hello"]

    def test_empty_text(self):
        assert split_into_chunks("", 10) == []

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            split_into_chunks("abc", 0)


class TestCleanTranslation:
    """Test removal of model commentary from translations."""

    def test_plain_text_untouched(self):
        assert clean_translation("Bonjour le monde") == "Bonjour le monde"

    def test_strips_note_lines(self):
        text = "Il était une fois un roi.\nNote: I kept the name unchanged."
        assert clean_translation(text) == "Il était une fois un roi."

    def test_strips_meta_prefix(self):
        text = "I'll provide feedback on this text. Once upon a time there was a cat."
        assert clean_translation(text) == "Once upon a time there was a cat."

    def test_strips_parenthetical_asides(self):
        text = "Hola ( translated from English) amigo"
        assert clean_translation(text) == "Hola amigo"

    def test_collapses_duplicate_words(self):
        assert clean_translation("le le chat chat noir") == "le chat noir"

    def test_collapses_whitespace_and_blank_lines(self):
        assert clean_translation("  Bonjour\n\n\n   monde  ") == "Bonjour monde"

    def test_collapses_repeated_long_sections(self):
        section = "Der Drache schlief tief in seiner Höhle unter dem Berg, und niemand im ganzen Königreich wagte es, ihn zu wecken. "
        assert len(section) >= 100
        assert clean_translation(section * 3) == section.strip()
