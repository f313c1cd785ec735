import logging
from datetime import date, datetime, timedelta, timezone

import pytest

from camlbuilder import Value, ValueType


def test_integer_value():
    assert Value.of(ValueType.INTEGER, 42).render() == '<Value Type="Integer">42</Value>'


def test_number_value():
    assert Value.of("number", 3.5).render() == '<Value Type="Number">3.5</Value>'


def test_boolean_value():
    assert Value.of(ValueType.BOOLEAN, True).render() == '<Value Type="Boolean">1</Value>'
    assert Value.of(ValueType.BOOLEAN, False).caml_text() == "0"


def test_text_value():
    assert Value.of("Text", "Report").render() == '<Value Type="Text">Report</Value>'


def test_datetime_value_defaults_to_time_component():
    v = Value.of(ValueType.DATETIME, datetime(2024, 3, 1, 9, 30))
    assert v.render() == '<Value Type="DateTime">2024-03-01T09:30:00Z</Value>'


def test_datetime_value_include_time():
    v = Value.of(ValueType.DATETIME, datetime(2024, 3, 1, 9, 30), include_time=True)
    assert (
        v.render()
        == '<Value Type="DateTime" IncludeTimeValue="TRUE">2024-03-01T09:30:00Z</Value>'
    )


def test_datetime_value_without_time():
    v = Value.of(ValueType.DATETIME, datetime(2024, 3, 1, 9, 30), include_time=False)
    assert v.render() == '<Value Type="DateTime">2024-03-01</Value>'


def test_date_value():
    assert Value.of(ValueType.DATE, date(2024, 3, 1)).caml_text() == "2024-03-01"
    v = Value.of(ValueType.DATE, date(2024, 3, 1), include_time=True)
    assert v.caml_text() == "2024-03-01T00:00:00Z"


def test_aware_datetime_converted_to_utc():
    tz = timezone(timedelta(hours=2))
    v = Value.of(ValueType.DATETIME, datetime(2024, 3, 1, 11, 0, tzinfo=tz))
    assert v.caml_text() == "2024-03-01T09:00:00Z"


def test_aware_datetime_keeps_calendar_date_without_time():
    tz = timezone(timedelta(hours=2))
    payload = datetime(2024, 3, 1, 0, 30, tzinfo=tz)
    assert Value.of(ValueType.DATE, payload).caml_text() == "2024-03-01"
    v = Value.of(ValueType.DATETIME, payload, include_time=False)
    assert v.caml_text() == "2024-03-01"
    assert Value.of(ValueType.DATETIME, payload).caml_text() == "2024-02-29T22:30:00Z"


def test_preformatted_date_string():
    v = Value.of(ValueType.DATETIME, "2024-03-01T09:30:00Z")
    assert v.caml_text() == "2024-03-01T09:30:00Z"


def test_date_payload_type_checked():
    with pytest.raises(ValueError):
        Value.of(ValueType.DATE, 5)


def test_multi_choice_value():
    v = Value.of(ValueType.MULTI_CHOICE, ["Red", "Blue"])
    assert v.render() == '<Value Type="MultiChoice">;#Red;#Blue;#</Value>'
    assert v.payload == ("Red", "Blue")


def test_lookup_id_value_type():
    assert Value.of("LookupId", 12).render() == '<Value Type="Lookup">12</Value>'


def test_current_user():
    assert Value.current_user().render() == '<Value Type="Integer"><UserID/></Value>'


def test_current_user_ignores_payload():
    v = Value.of(ValueType.CURRENT_USER, 17)
    assert v.payload is None
    assert v.render() == Value.current_user().render()


def test_now():
    assert Value.now().render() == '<Value Type="DateTime"><Now/></Value>'
    assert Value.now(False).render() == Value.now().render()


def test_now_include_time():
    assert (
        Value.now(include_time=True).render()
        == '<Value Type="DateTime" IncludeTimeValue="TRUE"><Now/></Value>'
    )


def test_today():
    assert Value.today().render() == '<Value Type="DateTime"><Today/></Value>'
    assert (
        Value.today(offset_days=-7).render()
        == '<Value Type="DateTime"><Today OffsetDays="-7"/></Value>'
    )


def test_offset_days_only_for_today():
    with pytest.raises(ValueError):
        Value(value_type=ValueType.NOW, offset_days=1)


def test_literal_requires_payload():
    with pytest.raises(ValueError):
        Value.of(ValueType.TEXT, None)


def test_unknown_value_type():
    with pytest.raises(ValueError):
        Value.of("bogus", 1)


def test_include_time_ignored_for_non_dates(caplog):
    with caplog.at_level(logging.WARNING):
        v = Value.of(ValueType.TEXT, "x", include_time=True)
    assert v.include_time is None
    assert "include_time ignored" in caplog.text
    assert v.render() == '<Value Type="Text">x</Value>'


def test_value_is_immutable():
    v = Value.of(ValueType.TEXT, "x")
    with pytest.raises(ValueError):
        v.payload = "y"
