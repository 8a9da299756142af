"""
Фильтрация списков тестов
"""

from datetime import datetime
from typing import Iterable, List, Optional, Union

from dateutil.parser import parse as parse_date

from .models import LabTest, TestCategory

DateLike = Union[datetime, str, None]


def _to_datetime(value: DateLike) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if not isinstance(value, datetime):
        value = parse_date(value)
    # Даты заказа хранятся без часового пояса
    return value.replace(tzinfo=None)


def filter_tests(
    tests: Iterable[LabTest],
    search_term: Optional[str] = None,
    start_date: DateLike = None,
    end_date: DateLike = None,
    category: Union[TestCategory, str, None] = None,
) -> List[LabTest]:
    """
    Фильтрует тесты по строке поиска, диапазону дат заказа и категории

    Args:
        tests: исходные тесты
        search_term: подстрока имени пациента или названия теста
        start_date: начало диапазона (включительно), datetime или строка
        end_date: конец диапазона (включительно), datetime или строка
        category: категория анализа

    Returns:
        Список подходящих тестов в исходном порядке
    """
    start = _to_datetime(start_date)
    end = _to_datetime(end_date)
    term = (search_term or "").lower()
    category = TestCategory(category) if category else None

    result = []
    for test in tests:
        matches_search = (
            not term
            or term in test.patient_name.lower()
            or term in test.test_name.lower()
        )
        in_date_range = (
            (start is None or test.ordered_date >= start)
            and (end is None or test.ordered_date <= end)
        )
        matches_category = category is None or test.category == category

        if matches_search and in_date_range and matches_category:
            result.append(test)

    return result
