"""Tests for utility helpers."""

import io
import logging

from text_search.utils import format_terms, setup_logging


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_level_and_output(self) -> None:
        stream = io.StringIO()
        logger = setup_logging("debug", stream=stream)
        try:
            assert logger.level == logging.DEBUG
            logging.getLogger("text_search.indexer").debug("hello")
            assert "hello" in stream.getvalue()
        finally:
            setup_logging("WARNING")

    def test_repeated_calls_replace_handler(self) -> None:
        setup_logging("INFO")
        logger = setup_logging("INFO")
        installed = [h for h in logger.handlers if getattr(h, "_text_search_handler", False)]
        assert len(installed) == 1
        setup_logging("WARNING")


class TestFormatTerms:
    """Tests for format_terms."""

    def test_short_list(self) -> None:
        assert format_terms(["a", "b"]) == "[a, b]"

    def test_truncated(self) -> None:
        terms = [str(i) for i in range(20)]
        assert format_terms(terms, maxn=4) == "[0, 1, …, 18, 19]"
