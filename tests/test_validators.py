from __future__ import annotations

from datetime import date

import pytest

from internship_portal.common.datetime_utils import parse_iso_date
from internship_portal.common.validators import optional_int, require_email, require_int_in_range, require_non_empty
from internship_portal.core.enums import Role
from internship_portal.core.exceptions import ValidationError


def test_require_non_empty_strips():
    assert require_non_empty("  CSE ", "Name") == "CSE"
    with pytest.raises(ValidationError, match="Name is required"):
        require_non_empty("   ", "Name")


@pytest.mark.parametrize("value", ["a@b", "no-at.example.com", "two@@x.com", "sp ace@x.com"])
def test_require_email_rejects_malformed(value):
    with pytest.raises(ValidationError):
        require_email(value)


def test_require_email_lowercases():
    assert require_email(" Asha@Demo.EDU ") == "asha@demo.edu"


def test_int_helpers():
    assert require_int_in_range("3", "Academic year", 1, 6) == 3
    assert optional_int("", "Contact") is None
    assert optional_int(" 98765 ", "Contact") == 98765
    with pytest.raises(ValidationError, match="Contact must be a number"):
        optional_int("98-76", "Contact")


def test_parse_iso_date():
    assert parse_iso_date("2026-03-01") == date(2026, 3, 1)
    with pytest.raises(ValidationError, match="Start date"):
        parse_iso_date("2026-13-01", "Start date")


def test_role_label():
    assert Role.DEPARTMENT_COORDINATOR.label == "department coordinator"
