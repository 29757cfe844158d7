from datetime import date

import pytest

from exceptions import ParseError
from expressions import next_weekday_after, parse
from rendering import render
from schemas import EveryInterval, EveryWeekday, IntervalUnit, OneOff, ParseMode, Weekday

WEDNESDAY = date(2022, 1, 5)
MONDAY = date(2022, 1, 3)


@pytest.mark.parametrize("weekday", [w.value for w in Weekday])
def test_recurring_weekday_renders_as_every_weekday(weekday):
    assert render(parse(weekday, ParseMode.RECURRING, WEDNESDAY)) == f"every {weekday}"


@pytest.mark.parametrize("raw", ["monday", "MONDAY", "Monday", "  Monday "])
def test_weekday_names_are_case_insensitive(raw):
    assert parse(raw, ParseMode.RECURRING, WEDNESDAY) == EveryWeekday(weekday=Weekday.MONDAY)


def test_one_off_weekday_resolves_to_the_coming_date():
    assert parse("Monday", ParseMode.ONE_OFF, WEDNESDAY) == OneOff(on=date(2022, 1, 10))


def test_one_off_weekday_on_the_same_weekday_means_next_week():
    assert parse("Monday", ParseMode.ONE_OFF, MONDAY) == OneOff(on=date(2022, 1, 10))


def test_one_off_weekday_tomorrow():
    assert parse("Thursday", ParseMode.ONE_OFF, WEDNESDAY) == OneOff(on=date(2022, 1, 6))


def test_next_weekday_after_never_returns_the_start():
    for offset in range(7):
        today = date(2022, 1, 3 + offset)
        for weekday in Weekday:
            resolved = next_weekday_after(today, weekday)
            assert 1 <= (resolved - today).days <= 7
            assert resolved.weekday() == weekday.number


@pytest.mark.parametrize("count", [1, 2, 3, 10, 365])
@pytest.mark.parametrize("unit", [IntervalUnit.DAY, IntervalUnit.WEEK])
def test_intervals(count, unit):
    raw = f"{count}.{unit.value.lower()}s"
    assert parse(raw, ParseMode.RECURRING, WEDNESDAY) == EveryInterval(count=count, unit=unit)


@pytest.mark.parametrize("raw", ["1.day", "1.DAY", "2.Weeks", "1.week"])
def test_singular_and_mixed_case_units(raw):
    schedule = parse(raw, ParseMode.RECURRING, WEDNESDAY)
    assert isinstance(schedule, EveryInterval)


@pytest.mark.parametrize("raw", ["0.days", "-1.days", "3.months", "3.dayz", "three.days", "3days", "3."])
def test_malformed_intervals_fail(raw):
    with pytest.raises(ParseError) as e:
        parse(raw, ParseMode.RECURRING, WEDNESDAY)
    assert e.value.raw == raw


def test_intervals_are_only_recurring():
    with pytest.raises(ParseError, match="--every"):
        parse("3.days", ParseMode.ONE_OFF, WEDNESDAY)


def test_date_without_year_uses_the_current_year():
    assert parse("12.Mar", ParseMode.ONE_OFF, WEDNESDAY) == OneOff(on=date(2022, 3, 12))


def test_date_with_year():
    assert parse("12.Mar.2023", ParseMode.ONE_OFF, WEDNESDAY) == OneOff(on=date(2023, 3, 12))


def test_four_letter_months():
    assert parse("1.Sept", ParseMode.ONE_OFF, WEDNESDAY) == OneOff(on=date(2022, 9, 1))
    assert parse("4.july", ParseMode.ONE_OFF, WEDNESDAY) == OneOff(on=date(2022, 7, 4))


def test_past_date_without_year_rolls_to_next_year():
    assert parse("1.Jan", ParseMode.ONE_OFF, WEDNESDAY) == OneOff(on=date(2023, 1, 1))


def test_today_does_not_roll_forward():
    assert parse("5.Jan", ParseMode.ONE_OFF, WEDNESDAY) == OneOff(on=WEDNESDAY)


def test_past_date_with_explicit_year_fails():
    with pytest.raises(ParseError, match="in the past"):
        parse("1.Jan.2022", ParseMode.ONE_OFF, WEDNESDAY)


def test_recurring_date_does_not_roll_forward():
    assert parse("1.Jan", ParseMode.RECURRING, WEDNESDAY) == OneOff(on=date(2022, 1, 1))


@pytest.mark.parametrize("raw", ["31.Feb", "12.Foo", "32.Jan", "12-Mar", "tomorrow", "", "Mon"])
def test_unknown_expressions_fail_with_the_original_text(raw):
    with pytest.raises(ParseError) as e:
        parse(raw, ParseMode.ONE_OFF, WEDNESDAY)
    assert e.value.raw == raw
    assert f"'{raw}'" in str(e.value)


def test_interval_reaching_past_the_calendar_fails():
    with pytest.raises(ParseError, match="last supported date"):
        parse("3000000.days", ParseMode.RECURRING, WEDNESDAY)
    with pytest.raises(ParseError, match="last supported date"):
        parse("500000.weeks", ParseMode.RECURRING, WEDNESDAY)
