"""
Unit tests for text escaping helpers.
"""

import pytest

from qbl_toolkit.common.text import html_escape, js_string, latex_escape


class TestLatexEscape:
    """Tests for latex_escape function."""

    @pytest.mark.parametrize(
        "raw, escaped",
        [
            ("50%", r"50\%"),
            ("$5 & #1", r"\$5 \& \#1"),
            ("a_b", r"a\_b"),
            ("{x}", r"\{x\}"),
            ("~^", r"\textasciitilde{}\textasciicircum{}"),
            ("C:\\dir", r"C:\textbackslash{}dir"),
            ("plain text", "plain text"),
        ],
    )
    def test_latex_escape_specials(self, raw, escaped):
        assert latex_escape(raw) == escaped

    def test_latex_escape_newline_forces_line_break(self):
        assert latex_escape("one\ntwo") == "one\\\\\ntwo"


class TestHtmlEscape:
    """Tests for html_escape function."""

    def test_html_escape_specials(self):
        assert html_escape('<b> & "q"') == "&lt;b&gt; &amp; &quot;q&quot;"

    def test_html_escape_newline_becomes_br(self):
        assert html_escape("a\nb") == "a<br>\nb"


class TestJsString:
    """Tests for js_string function."""

    def test_js_string_quotes_and_escapes(self):
        assert js_string('say "hi"') == '"say \\"hi\\""'

    def test_js_string_keeps_unicode(self):
        assert js_string("é") == '"é"'
