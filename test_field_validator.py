"""
Field validation rules — unit tests.
Run:  pytest test_field_validator.py -v
"""
import pytest

from contact_directory.models.domain import RawRecord
from contact_directory.services.field_validator import (
    parse_joined_date, strip_phone, validate, validate_all,
)


def _record(name="김클로", email="clo@clovf.com", phone="010-1111-2424", joined="2012-01-05"):
    return RawRecord(name=name, email=email, phone=phone, joined=joined)


def _fields(errors):
    return [e.field for e in errors]


class TestValidRecords:
    def test_valid_record_has_no_errors(self):
        assert validate(_record()) == []

    @pytest.mark.parametrize("joined", ["2012.01.05", "2012-01-05", "2012/01/05"])
    def test_all_date_formats_accepted(self, joined):
        assert validate(_record(joined=joined)) == []

    @pytest.mark.parametrize("phone", ["0101234567", "01012345678", "010 1234 5678", "02-1234-5678"])
    def test_phone_variants_accepted(self, phone):
        assert validate(_record(phone=phone)) == []

    def test_surrounding_whitespace_tolerated(self):
        assert validate(_record(email="  clo@clovf.com ", joined=" 2012-01-05 ")) == []


class TestRequiredFields:
    def test_empty_record_reports_every_field(self):
        errors = validate(RawRecord())
        assert _fields(errors) == ["name", "email", "phone", "joined"]
        assert errors[0].message == "Name is required."

    def test_whitespace_name_is_missing(self):
        assert _fields(validate(_record(name="   "))) == ["name"]


class TestEmail:
    @pytest.mark.parametrize("email", ["plainaddress", "a@b", "a @b.com", "a@ b.com", "@b.com", "a@b."])
    def test_bad_shapes_rejected(self, email):
        errors = validate(_record(email=email))
        assert _fields(errors) == ["email"]
        assert errors[0].value == email
        assert "Invalid email format" in errors[0].message


class TestPhone:
    @pytest.mark.parametrize("phone", ["123", "1012345678", "010123456", "010123456789", "010-abcd-5678"])
    def test_bad_numbers_rejected(self, phone):
        errors = validate(_record(phone=phone))
        assert _fields(errors) == ["phone"]
        assert errors[0].value == phone

    def test_non_ascii_digits_rejected(self):
        assert _fields(validate(_record(phone="٠١٠١٢٣٤٥٦٧٨"))) == ["phone"]

    @pytest.mark.parametrize("phone", ["010-1234-5678", " 010 1234-5678 ", "01012345678", "--"])
    def test_strip_phone_is_idempotent(self, phone):
        assert strip_phone(strip_phone(phone)) == strip_phone(phone)


class TestJoinedDate:
    @pytest.mark.parametrize("joined", [
        "bad-date", "2012-1-5", "12-01-05", "2012.01-05", "20120105",
        "2021-02-30", "2012-13-01", "2012-01-05T00:00:00",
    ])
    def test_non_exact_dates_rejected(self, joined):
        errors = validate(_record(joined=joined))
        assert _fields(errors) == ["joined"]
        assert "Invalid date format" in errors[0].message

    def test_leap_day(self):
        assert parse_joined_date("2020-02-29").isoformat() == "2020-02-29"
        assert parse_joined_date("2019-02-29") is None


class TestValidateAll:
    def test_only_failing_indices_reported(self):
        records = [_record(name="A"), _record(name="B", phone="123", joined="bad-date"), _record(name="C")]
        errors = validate_all(records)
        assert list(errors) == [1]
        assert _fields(errors[1]) == ["phone", "joined"]

    def test_empty_batch_has_no_errors(self):
        assert validate_all([]) == {}
