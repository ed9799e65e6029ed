"""Unit tests for script direction classification."""

import pytest

from folio.contexts.intake.classifier import Direction, classify, requires_rtl


@pytest.mark.unit
@pytest.mark.parametrize(
    "text",
    [
        "",
        None,
        "# Assignment\n\nPlain English text with numbers 123.",
        "Accents and symbols: café, naïve, €, ✓",
        "Hebrew is RTL but not Arabic script: שלום",
    ],
)
def test_ltr_text(text):
    assert requires_rtl(text) is False
    assert classify(text) is Direction.LTR


@pytest.mark.unit
@pytest.mark.parametrize(
    "text",
    [
        "اردو",
        "Mostly English with one Urdu word: سلام",
        "\u0628",
        "\u0600",  # first code point of the Arabic block
        "\u06ff",  # last code point of the Arabic block
        "\u0750",  # Arabic Supplement
        "\u077f",
    ],
)
def test_rtl_text(text):
    assert requires_rtl(text) is True
    assert classify(text) is Direction.RTL


@pytest.mark.unit
def test_block_boundaries_excluded():
    """Code points just outside the Arabic blocks stay LTR."""
    assert classify("\u05ff") is Direction.LTR
    assert classify("\u0780") is Direction.LTR


@pytest.mark.unit
def test_direction_values():
    assert Direction.LTR.value == "ltr"
    assert Direction.RTL == "rtl"
