from datetime import time, timedelta

import pytest

from src.hris_admin.hris_admin.database.mysql_base import as_time_of_day, build_where


@pytest.mark.parametrize(
    "raw,expected",
    [
        (None, None),
        (time(8, 30), time(8, 30)),
        (timedelta(hours=8, minutes=30, seconds=5), time(8, 30, 5)),
        (timedelta(hours=25), time(1, 0)),
        ("08:30:00", time(8, 30)),
        (" 17:05 ", time(17, 5)),
    ],
)
def test_as_time_of_day(raw, expected):
    assert as_time_of_day(raw) == expected


def test_as_time_of_day_rejects_garbage():
    with pytest.raises(ValueError):
        as_time_of_day("noon")
    with pytest.raises(TypeError):
        as_time_of_day(830)


def test_build_where():
    assert build_where([]) == ""
    assert build_where(["a = %s", "b = %s"]) == "WHERE a = %s AND b = %s"
