from __future__ import annotations

from datetime import date, time, timedelta

import pytest

from core.validators import (
    PasswordPolicy,
    ValidationResult,
    clean_mobile_number,
    format_mobile_number,
    is_blank,
    validate_choice,
    validate_date_of_birth,
    validate_email,
    validate_email_or_phone,
    validate_date_range,
    validate_end_date,
    validate_end_time,
    validate_end_year,
    validate_event_date,
    validate_event_name,
    validate_host_name,
    validate_max_length,
    validate_mobile_number,
    validate_name,
    validate_password,
    validate_past_date,
    validate_selection,
    validate_time_range,
    validate_year,
    validate_year_range,
)

STRICT_POLICY = PasswordPolicy(
    min_length=8,
    require_uppercase=True,
    require_lowercase=True,
    require_number=True,
    require_special_char=True,
)


def test_name_length_bounds() -> None:
    """Two characters pass, one fails with the minimum in the message."""

    assert validate_name("Al").is_valid
    result = validate_name("A")
    assert not result.is_valid
    assert result.error == "Name must be at least 2 characters"
    assert validate_name("   ").error == "Name is required"
    assert not validate_name("x" * 51).is_valid


def test_name_accepts_unicode_letters_and_punctuation() -> None:
    assert validate_name("José O'Neil-Smith").is_valid
    assert validate_name("Zoë").is_valid
    assert not validate_name("R2D2").is_valid


def test_validators_are_deterministic() -> None:
    assert validate_name("A") == validate_name("A")
    assert validate_email("nope") == validate_email("nope")


@pytest.mark.parametrize("value", ["user@mail.com", "  first.last@campus.edu.in  "])
def test_email_accepts_valid_addresses(value: str) -> None:
    assert validate_email(value).is_valid


@pytest.mark.parametrize("value", ["plainaddress", "user@", "user name@mail.com", "@mail.com"])
def test_email_rejects_invalid_addresses(value: str) -> None:
    assert validate_email(value).error == "Please enter a valid email address"


def test_email_required() -> None:
    assert validate_email("").error == "Email is required"


def test_mobile_number_cleaning_and_digit_rule() -> None:
    """Non-digits are stripped before the digit count is checked."""

    assert clean_mobile_number("abc123def456") == "123456"
    assert validate_mobile_number("abc123def456").error == "Mobile number must be 10 digits"
    assert validate_mobile_number("1234567890").is_valid
    assert validate_mobile_number("(123) 456-7890").is_valid
    assert not validate_mobile_number("1111111111").is_valid
    assert validate_mobile_number("").error == "Mobile number is required"


def test_only_ascii_digits_count() -> None:
    """Fullwidth and Arabic-Indic digits are stripped or rejected, never sent on."""

    fullwidth = "\uff11\uff12\uff13\uff14\uff15\uff16\uff17\uff18\uff19\uff10"
    assert clean_mobile_number(fullwidth) == ""
    assert validate_mobile_number(fullwidth).error == "Mobile number is required"
    assert clean_mobile_number("555\u0661\u0662 1234567") == "5551234567"
    assert validate_year("\u0662\u0660\u0662\u0660").error == "Year must be a valid 4-digit year"
    assert validate_date_of_birth("\u0662\u0660\u0660\u0660-01-01").error is not None
    assert not validate_password("Passw\u0660rd!", STRICT_POLICY).is_valid


def test_mobile_number_formatting() -> None:
    assert format_mobile_number("1234567890") == "123 456 7890"
    assert format_mobile_number("1234") == "123 4"


def test_email_or_phone() -> None:
    assert validate_email_or_phone("user@mail.com").is_valid
    assert validate_email_or_phone("9876543210").is_valid
    assert not validate_email_or_phone("12345").is_valid
    assert not validate_email_or_phone("").is_valid


def test_password_lists_every_missing_class() -> None:
    result = validate_password("abcdefgh", STRICT_POLICY)
    assert not result.is_valid
    assert "one uppercase letter" in result.error
    assert "one number" in result.error
    assert "one special character" in result.error
    assert "lowercase" not in result.error


def test_password_length_and_success() -> None:
    assert validate_password("Ab1!", STRICT_POLICY).error == "Password must be at least 8 characters"
    assert validate_password("Abcdef1!", STRICT_POLICY).is_valid
    assert validate_password("abcdefgh").is_valid
    assert validate_password("").error == "Password is required"


def test_date_of_birth_rules(today: date) -> None:
    adult = date(today.year - 30, 1, 1)
    assert validate_date_of_birth(adult.isoformat(), today=today).is_valid
    assert validate_date_of_birth(adult, today=today).is_valid
    assert validate_date_of_birth("2000-02-30", today=today).error == "Please enter a valid date"
    assert validate_date_of_birth("01/02/2000", today=today).error == "Please enter a valid date (YYYY-MM-DD)"
    future = today + timedelta(days=1)
    assert validate_date_of_birth(future, today=today).error == "Date of birth cannot be in the future"
    child = date(today.year - 5, 1, 1)
    assert validate_date_of_birth(child, today=today).error == "You must be at least 13 years old"
    ancient = date(today.year - 130, 1, 1)
    assert not validate_date_of_birth(ancient, today=today).is_valid


def test_year_rules(today: date) -> None:
    assert validate_year("2020", today=today).is_valid
    assert validate_year(2020, today=today).is_valid
    assert validate_year("20", today=today).error == "Year must be a valid 4-digit year"
    assert not validate_year("1900", today=today).is_valid
    assert not validate_year(str(today.year + 1), today=today).is_valid


def test_year_range(today: date) -> None:
    """End year must not precede start; it is optional while currently enrolled."""

    assert validate_year_range("2018", "2022", today=today).is_valid
    assert validate_year_range("2018", "2018", today=today).is_valid
    assert validate_year_range("2022", "2018", today=today).error == "End year must be after start year"
    assert validate_year_range("2018", "", currently=True, today=today).is_valid
    assert validate_end_year("", "2018", today=today).error == "End year is required"
    assert validate_end_year("2016", "garbage", today=today).is_valid


def test_date_rules(today: date) -> None:
    yesterday = today - timedelta(days=1)
    tomorrow = today + timedelta(days=1)
    assert validate_past_date(yesterday, "Start date", today=today).is_valid
    assert validate_past_date(tomorrow, "Start date", today=today).error == "Start date cannot be in the future"
    week_ago = today - timedelta(days=7)
    assert validate_end_date(week_ago, yesterday, today=today).error == "End date must be after start date"
    assert validate_end_date(None, yesterday, currently=True, today=today).is_valid
    assert validate_end_date(today, week_ago, today=today).is_valid
    assert validate_date_range(week_ago, yesterday, today=today).is_valid
    assert validate_date_range(yesterday, week_ago, today=today).error == "End date must be after start date"
    assert validate_date_range(tomorrow, None, currently=True, today=today).error == "Start date cannot be in the future"
    assert validate_date_range(week_ago, "", currently=True, today=today).is_valid


def test_event_date_rejects_past(today: date) -> None:
    assert validate_event_date(today, today=today).is_valid
    assert validate_event_date(today + timedelta(days=3), today=today).is_valid
    past = today - timedelta(days=1)
    assert validate_event_date(past, today=today).error == "Event date cannot be in the past"
    assert validate_event_date(None, today=today).error == "Event date is required"


def test_time_range_compares_minutes() -> None:
    assert validate_time_range(time(10, 0), time(11, 30)).is_valid
    assert validate_end_time("10:00", "10:00").error == "End time must be after start time"
    assert validate_end_time(time(10, 0, 59), time(10, 0, 1)).error == "End time must be after start time"
    assert validate_end_time("9:00 PM", "8:15 PM").is_valid
    assert validate_end_time(None, "10:00").error == "End time is required"
    assert validate_time_range(None, "11:00").error == "Start time is required"


def test_event_and_host_names() -> None:
    assert validate_event_name("Jam").is_valid
    assert not validate_event_name("Jo").is_valid
    assert validate_host_name("Jo").is_valid
    assert validate_host_name("J").error == "Host name must be at least 2 characters"


def test_selection_choice_and_length_helpers() -> None:
    assert validate_selection(("design",)).is_valid
    assert validate_selection((), "Pick one").error == "Pick one"
    assert validate_selection("music").is_valid
    assert validate_choice("Online", ("Online", "Offline")).is_valid
    assert validate_choice("Hybrid", ("Online", "Offline"), "event mode").error == "Please choose a valid event mode"
    assert validate_max_length("x" * 501, 500, "About me").error == "About me must be less than 500 characters"
    assert validate_max_length("", 500).is_valid


def test_blank_detection() -> None:
    assert is_blank(None)
    assert is_blank("  ")
    assert is_blank(())
    assert not is_blank(False)
    assert not is_blank("x")
    assert ValidationResult.ok().is_valid
