"""Unit tests for direction profiles."""

import pytest

from folio.contexts.intake.classifier import Direction
from folio.contexts.templating.profiles import LTR_PROFILE, RTL_PROFILE, profile_for


@pytest.mark.unit
def test_profile_for_direction():
    assert profile_for(Direction.LTR) is LTR_PROFILE
    assert profile_for(Direction.RTL) is RTL_PROFILE
    assert RTL_PROFILE.is_rtl and not LTR_PROFILE.is_rtl


@pytest.mark.unit
@pytest.mark.parametrize(
    "number, expected",
    [("1", "اول"), ("2", "دوم"), ("3", "سوم"), ("4", "چہارم"), ("5", "پنجم"), ("6", "6"), ("01", "01")],
)
def test_urdu_ordinals(number, expected):
    assert RTL_PROFILE.ordinal(number) == expected


@pytest.mark.unit
def test_title_lines():
    assert LTR_PROFILE.title_line("2") == "ASSIGNMENT 2"
    assert RTL_PROFILE.title_line("2") == "اسائنمنٹ دوم"
    assert RTL_PROFILE.title_line("9") == "اسائنمنٹ 9"


@pytest.mark.unit
def test_footers_carry_page_placeholders():
    assert 'class="pageNumber"' in LTR_PROFILE.footer_template
    assert 'class="totalPages"' in LTR_PROFILE.footer_template
    assert "Page" in LTR_PROFILE.footer_template

    assert 'class="pageNumber"' in RTL_PROFILE.footer_template
    assert "صفحہ نمبر" in RTL_PROFILE.footer_template
    assert "direction:rtl" in RTL_PROFILE.footer_template


@pytest.mark.unit
def test_labels():
    assert LTR_PROFILE.labels.name == "Submitted By"
    assert RTL_PROFILE.labels.course == "کورس کوڈ"
    assert LTR_PROFILE.lang_code == "en"
    assert RTL_PROFILE.lang_code == "ur"
