"""Tests for the tokenizer."""

from text_search import Config, Tokenizer, tokenize


class TestTokenizer:
    """Tests for Tokenizer class."""

    def test_lowercase_and_punctuation(self) -> None:
        assert tokenize("Hello, World!") == ["hello", "world"]

    def test_whitespace_runs_collapse(self) -> None:
        assert tokenize("  multiple   spaces\n\tand tabs ") == ["multiple", "spaces", "and", "tabs"]

    def test_empty_text(self) -> None:
        assert tokenize("") == []
        assert tokenize("   \n\t ") == []

    def test_punctuation_only_chunks_dropped(self) -> None:
        assert tokenize("--- ... !!") == []

    def test_only_boundary_characters_stripped(self) -> None:
        assert tokenize("don't (stop) e-mail") == ["don't", "stop", "e-mail"]

    def test_underscores_stripped_at_boundaries(self) -> None:
        assert tokenize("_private_ snake_case") == ["private", "snake_case"]

    def test_casefold(self) -> None:
        assert tokenize("Straße") == ["strasse"]

    def test_digits_kept(self) -> None:
        assert tokenize("Python 3.12 (2024)") == ["python", "3.12", "2024"]

    def test_order_preserved_with_repeats(self) -> None:
        assert tokenize("b a b") == ["b", "a", "b"]

    def test_deterministic(self) -> None:
        text = "The quick brown fox; the LAZY dog."
        assert tokenize(text) == tokenize(text)

    def test_lowercase_disabled(self) -> None:
        tokenizer = Tokenizer(Config(LOWERCASE=False))
        assert tokenizer.tokenize("Hello World") == ["Hello", "World"]

    def test_stop_words(self) -> None:
        tokenizer = Tokenizer(Config(STOP_WORDS=("The", "a")))
        assert tokenizer.tokenize("The cat and a dog") == ["cat", "and", "dog"]

    def test_term_frequencies(self) -> None:
        counts = Tokenizer().term_frequencies("to be or not to be")
        assert counts == {"to": 2, "be": 2, "or": 1, "not": 1}
