"""Tests for date, duration and name resolution utilities."""

from datetime import date, datetime

import pytest

from lifeledger.domain.entities import Domain
from lifeledger.utils.date_parser import day_bounds, get_date_range, parse_date, parse_datetime
from lifeledger.utils.duration_parser import parse_duration
from lifeledger.utils.resolvers import resolve_domain


@pytest.mark.parametrize(
    "value, minutes",
    [("45", 45), ("45m", 45), ("45min", 45), ("1h", 60), ("1.5h", 90), ("1h30m", 90), ("1h 30m", 90), ("1:30", 90)],
)
def test_parse_duration(value, minutes):
    """Test supported duration formats."""
    assert parse_duration(value) == minutes


@pytest.mark.parametrize("value", ["", "abc", "0", "1:75", "-5", "h"])
def test_parse_duration_invalid(value):
    """Test rejected duration strings."""
    with pytest.raises(ValueError):
        parse_duration(value)


def test_parse_date():
    """Test absolute and relative dates."""
    assert parse_date("2024-01-15") == date(2024, 1, 15)
    assert parse_date("today") == date.today()
    with pytest.raises(ValueError):
        parse_date("not a date")


def test_parse_datetime_uses_default_day():
    """Test that a bare time takes its date from the default."""
    default = datetime(2024, 3, 15, 12, 34, 56)
    assert parse_datetime("18:30", default=default) == datetime(2024, 3, 15, 18, 30)
    assert parse_datetime("2024-01-02 07:15", default=default) == datetime(2024, 1, 2, 7, 15)


def test_parse_datetime_aware_becomes_naive():
    """Test that offsets are converted to local naive time."""
    parsed = parse_datetime("2024-03-15T12:00:00+00:00")
    assert parsed.tzinfo is None


def test_day_bounds():
    """Test day bounds span one local day."""
    assert day_bounds(date(2024, 2, 29)) == (datetime(2024, 2, 29), datetime(2024, 3, 1))


def test_get_date_range_unknown():
    """Test that unknown periods are rejected."""
    with pytest.raises(ValueError):
        get_date_range("next-year")


def test_resolve_domain():
    """Test resolving domains by ID or case-insensitive name."""
    domains = [
        Domain(id=1, name="Business", base_rate=16, lifetime_minutes=0, level=1, multiplier=1.0, is_active=True),
        Domain(id=2, name="Education", base_rate=10, lifetime_minutes=0, level=1, multiplier=1.0, is_active=True),
    ]

    assert resolve_domain(domains, 2) == 2
    assert resolve_domain(domains, "1") == 1
    assert resolve_domain(domains, "education") == 2
    with pytest.raises(ValueError, match="not found"):
        resolve_domain(domains, "Cooking")
    with pytest.raises(ValueError, match="ID 7"):
        resolve_domain(domains, "7")
