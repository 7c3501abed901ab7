"""Tests del Value Object DateRange y del predicado de superposición."""

from datetime import date

import pytest

from app.domain.errors import InvalidDateRangeError, ValidationError
from app.domain.value_objects.date_range import DateRange


def _range(start_day: int, end_day: int) -> DateRange:
    return DateRange(start=date(2030, 1, start_day), end=date(2030, 1, end_day))


class TestDateRangeConstruction:
    def test_start_must_be_before_end(self):
        with pytest.raises(InvalidDateRangeError):
            _range(5, 5)
        with pytest.raises(InvalidDateRangeError):
            _range(6, 5)

    def test_invalid_range_is_a_validation_error(self):
        with pytest.raises(ValidationError) as exc_info:
            _range(3, 1)
        assert exc_info.value.code == "INVALID_INPUT"
        assert exc_info.value.field == "end_date"

    def test_days_includes_both_ends(self):
        days = list(_range(1, 3).days())
        assert days == [date(2030, 1, 1), date(2030, 1, 2), date(2030, 1, 3)]


class TestOverlap:
    @pytest.mark.parametrize(
        "first, second, expected",
        [
            ((1, 3), (3, 5), True),   # mismo día de entrega y recogida
            ((1, 3), (4, 6), False),  # adyacentes sin compartir día
            ((1, 10), (3, 5), True),  # contenido
            ((3, 5), (1, 10), True),  # contenedor
            ((1, 5), (4, 8), True),   # solapamiento parcial
            ((10, 12), (1, 3), False),
        ],
    )
    def test_overlap_is_symmetric(self, first, second, expected):
        a = _range(*first)
        b = _range(*second)
        assert a.overlaps(b) is expected
        assert b.overlaps(a) is expected

    def test_range_overlaps_itself(self):
        a = _range(1, 2)
        assert a.overlaps(a)
