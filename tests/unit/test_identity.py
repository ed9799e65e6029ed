"""Unit tests for filename identity parsing and request construction."""

import pytest

from folio.contexts.intake.identity import AssignmentIdentity, output_stem, parse_identity
from folio.contexts.intake.request import RenderRequest, StudentConfig
from folio.exceptions import InvalidFilenameError


@pytest.mark.unit
@pytest.mark.parametrize(
    "filename, course, number",
    [
        ("1423_1.md", "1423", "1"),
        ("1423_2.md", "1423", "2"),
        ("0042_07_draft.md", "0042", "07"),
        ("5_12", "5", "12"),
    ],
)
def test_parse_identity_matches(filename, course, number):
    identity = parse_identity(filename)
    assert identity == AssignmentIdentity(course_code=course, assignment_number=number)


@pytest.mark.unit
@pytest.mark.parametrize("filename", ["", None, "notes.md", "1423-1.md", "abc_1423_1.md", "_1.md"])
def test_parse_identity_defaults(filename):
    identity = parse_identity(filename, strict=False)
    assert identity.course_code == "----"
    assert identity.assignment_number == "1"


@pytest.mark.unit
def test_parse_identity_strict_rejects():
    with pytest.raises(InvalidFilenameError) as exc_info:
        parse_identity("notes.md", strict=True)
    assert exc_info.value.filename == "notes.md"


@pytest.mark.unit
def test_parse_identity_strict_accepts_valid():
    assert parse_identity("1423_3.md", strict=True).assignment_number == "3"


@pytest.mark.unit
def test_output_stem():
    identity = AssignmentIdentity("1423", "2")
    assert output_stem("1423_2.md", identity) == "1423_2"
    assert output_stem("course/1423_2.md", identity) == "1423_2"
    assert output_stem("1423_2.markdown", identity) == "1423_2.markdown"
    assert output_stem("", identity) == "Assignment_2"


@pytest.mark.unit
def test_student_config_aliases():
    config = StudentConfig.from_dict(
        {
            "name": "Ali",
            "roll": "R-1",
            "semester": "Spring",
            "nameUrdu": "علی",
            "rollLocalized": "ر-۱",
        }
    )
    assert config.name == "Ali"
    assert config.name_localized == "علی"
    assert config.roll_localized == "ر-۱"
    assert config.semester_localized is None


@pytest.mark.unit
def test_render_request_from_dict_tolerates_missing():
    request = RenderRequest.from_dict({"content": None, "config": None})
    assert request.content == ""
    assert request.filename == ""
    assert request.config == StudentConfig()


@pytest.mark.unit
def test_student_config_keeps_falsy_values():
    config = StudentConfig.from_dict({"name": "Ali", "roll": 0, "semester": ""})
    assert config.roll == "0"
    assert config.semester is None
