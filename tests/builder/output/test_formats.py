"""
Unit tests for OutputFormat.
"""

import pytest

from qbl_toolkit.builder.output import OutputFormat


class TestOutputFormat:
    """Tests for extension rules."""

    @pytest.mark.parametrize(
        "extension, expected",
        [
            (".csv", OutputFormat.D2L),
            (".d2l", OutputFormat.D2L),
            (".gscope", OutputFormat.GRADESCOPE),
            (".html", OutputFormat.WEB),
            (".HTM", OutputFormat.WEB),
            (".tex", OutputFormat.LATEX),
            (".qbl", OutputFormat.QBL),
        ],
    )
    def test_from_extension_known(self, extension, expected):
        assert OutputFormat.from_extension(extension) is expected

    def test_from_extension_unknown_then_none(self):
        assert OutputFormat.from_extension(".docx") is None
        assert OutputFormat.from_extension("") is None

    def test_default_extension(self):
        assert OutputFormat.D2L.default_extension == ".csv"
        assert OutputFormat.WEB.default_extension == ".html"
