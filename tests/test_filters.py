from datetime import datetime

import pytest

from labdesk.core.filters import filter_tests


def _ids(tests):
    return [t.id for t in tests]


def test_filter_by_search_term(engine):
    tests = engine.tests.all_tests

    assert _ids(filter_tests(tests, "smith")) == ["LT002"]
    assert _ids(filter_tests(tests, "complete blood")) == ["LT001", "LT008"]


def test_filter_by_category(engine):
    tests = engine.tests.all_tests

    assert _ids(filter_tests(tests, category="radiology")) == ["LT006", "LT007", "LT010", "LT011"]


def test_filter_by_date_strings(engine):
    tests = engine.tests.all_tests

    found = filter_tests(tests, start_date="2023-08-16", end_date="2023-08-17")

    assert _ids(found) == ["LT002", "LT003", "LT004", "LT005"]


def test_filter_combined(engine):
    tests = engine.tests.all_tests

    found = filter_tests(
        tests, "test",
        start_date=datetime(2023, 8, 1),
        end_date=datetime(2023, 8, 16),
        category="pathology",
    )

    assert _ids(found) == ["LT003"]


def test_filter_without_criteria_returns_all(engine):
    tests = engine.tests.all_tests

    assert len(filter_tests(tests)) == len(tests)


def test_filter_invalid_category(engine):
    with pytest.raises(ValueError):
        filter_tests(engine.tests.all_tests, category="cardiology")


def test_filter_with_timezone_aware_dates(engine):
    tests = engine.tests.all_tests

    found = filter_tests(tests, start_date="2023-08-16T00:00Z", end_date="2023-08-16T23:59+03:00")

    assert _ids(found) == ["LT002", "LT003"]
