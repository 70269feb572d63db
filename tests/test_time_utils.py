from datetime import UTC, date

from feedesk.app.core.time import format_date_ddmmyyyy, utc_now


def test_utc_now_is_timezone_aware_utc():
    value = utc_now()
    assert value.tzinfo is UTC


def test_format_date_ddmmyyyy():
    assert format_date_ddmmyyyy(date(2024, 1, 5)) == "05-01-2024"
    assert format_date_ddmmyyyy("2024-02-29") == "29-02-2024"
    assert format_date_ddmmyyyy(None) == "-"
    assert format_date_ddmmyyyy("") == "-"
    assert format_date_ddmmyyyy("2024") == "2024"
