import pytest
from pydantic import ValidationError

from contact_watchman.ingest.errors import RuleEvaluationError
from contact_watchman.ingest.validator import (
    MSG_ID_FORMAT,
    MSG_PHONE_FORMAT,
    RecordValidator,
    validate_row,
)
from contact_watchman.models.schemas import Contact


def test_valid_row_builds_contact():
    contact = validate_row(["12345678", "Jo", "", "Smith", "555-123-4567"], 2)

    assert contact == Contact(id=12345678, first="Jo", middle="", last="Smith", phone="555-123-4567")
    assert contact.as_json_ready() == {
        "id": 12345678,
        "first": "Jo",
        "last": "Smith",
        "phone": "555-123-4567",
    }


def test_middle_name_kept_when_present():
    contact = validate_row(["12345678", "Jo", "Ann", "Smith", "555-123-4567"], 2)

    assert contact.as_json_ready()["middle"] == "Ann"


@pytest.mark.parametrize("raw_id", ["1234", "123456789", "1234567a", "", " 12345678"])
def test_non_eight_digit_identifier_rejected(raw_id):
    outcome = validate_row([raw_id, "Jo", "", "Smith", "555-123-4567"], 2)

    assert isinstance(outcome, list)
    assert MSG_ID_FORMAT in outcome


def test_numeric_short_identifier_only_reports_format():
    assert validate_row(["1234", "Jo", "", "Smith", "555-123-4567"], 2) == [MSG_ID_FORMAT]


def test_non_numeric_identifier_reports_both_id_rules():
    outcome = validate_row(["abcdefgh", "Jo", "", "Smith", "555-123-4567"], 2)

    assert outcome[0] == MSG_ID_FORMAT
    assert outcome[1].startswith("Failed to parse INTERNAL_ID: ")
    assert "abcdefgh" in outcome[1]
    assert len(outcome) == 2


def test_well_formed_identifier_never_falsely_rejected():
    for raw_id in ("00000000", "00000001", "99999999"):
        contact = validate_row([raw_id, "Jo", "", "Smith", "555-123-4567"], 2)
        assert isinstance(contact, Contact)
        assert contact.id == int(raw_id)


@pytest.mark.parametrize("phone", ["5551234567", "555-1234-567", "555-123-45678", "(555)123-4567", ""])
def test_bad_phone_rejected(phone):
    assert validate_row(["12345678", "Jo", "", "Smith", phone], 2) == [MSG_PHONE_FORMAT]


def test_all_violations_collected_in_rule_order():
    outcome = validate_row(["x", "Jo", "", "Smith", "nope"], 2)

    assert outcome[0] == MSG_ID_FORMAT
    assert outcome[1].startswith("Failed to parse INTERNAL_ID")
    assert outcome[2] == MSG_PHONE_FORMAT


def test_long_names_truncated_to_fourteen_characters():
    name = "A" * 20
    contact = validate_row(["12345678", name, name, name, "555-123-4567"], 2)

    assert contact.first == "A" * 14
    assert contact.middle == "A" * 14
    assert contact.last == "A" * 14


def test_rejected_row_skips_truncation():
    # scenario: valid id, long name, bad phone
    outcome = validate_row(["12345678", "Jonathansonlongname", "", "Smith", "5551234567"], 2)

    assert outcome == [MSG_PHONE_FORMAT]


def test_revalidation_is_idempotent():
    row = ["12345678", "Bartholomew-James", "Q", "Featherstonehaugh", "555-123-4567"]

    first = validate_row(row, 2)
    second = validate_row(row, 2)

    assert first == second
    assert validate_row([str(first.id), first.first, first.middle, first.last, first.phone], 2) == first


def test_contact_is_immutable():
    contact = validate_row(["12345678", "Jo", "", "Smith", "555-123-4567"], 2)

    with pytest.raises(ValidationError):
        contact.first = "Changed"


def test_malformed_pattern_raises_rule_evaluation_error():
    validator = RecordValidator(phone_pattern="[0-9")

    with pytest.raises(RuleEvaluationError):
        validator.validate(["12345678", "Jo", "", "Smith", "555-123-4567"], 2)


def test_short_row_cannot_be_evaluated():
    with pytest.raises(RuleEvaluationError):
        validate_row(["12345678", "Jo"], 3)


@pytest.mark.parametrize("raw_id", [" 1234567", "1234567 ", "1_234_56", "١٢٣٤٥٦٧٨"])
def test_identifier_parse_is_strict(raw_id):
    outcome = validate_row([raw_id, "Jo", "", "Smith", "555-123-4567"], 2)

    assert outcome[0] == MSG_ID_FORMAT
    assert outcome[1].startswith("Failed to parse INTERNAL_ID: ")
    assert len(outcome) == 2


def test_signed_identifier_parses_but_fails_format():
    assert validate_row(["+1234567", "Jo", "", "Smith", "555-123-4567"], 2) == [MSG_ID_FORMAT]


def test_identifier_out_of_int64_range_reports_parse_error():
    outcome = validate_row(["9" * 20, "Jo", "", "Smith", "555-123-4567"], 2)

    assert outcome[0] == MSG_ID_FORMAT
    assert "out of range" in outcome[1]
