import pytest

from src.attendance_admin.attendance_admin.payroll.month_matcher import matches

MARCH = ("2024-03", "2024-03-01", "2024-03-31")


@pytest.mark.parametrize(
    "obj, expected",
    [
        ({"month": "2024-03"}, True),
        ({"month": "2024-02"}, False),
        ({"period": "2024-03-15T00:00:00"}, True),
        ({"for_month": "2024-04"}, False),
        ({"from": "2024-03-01", "to": "2024-03-31"}, True),
        ({"start": "2024-03-01T00:00:00", "end": "2024-03-31T23:59:59"}, True),
        ({"from": "2024-02-01", "to": "2024-02-29"}, False),
        ({"rows": [{"date": "2024-02-28"}, {"day": "2024-03-01"}]}, True),
        ({"rows": [{"date": "2024-02-28"}]}, False),
        ({"rows": []}, False),
        ({"days": {"2024-03-05": 8}}, True),
        ({"days": {"2024-02-05": 8}}, False),
        ({"hours_total": 10}, True),
        (None, True),
        ([{"month": "2024-02"}], True),
    ],
)
def test_matches(obj, expected):
    assert matches(obj, *MARCH) is expected


def test_month_field_wins_over_rows():
    obj = {"month": "2024-03", "rows": [{"date": "2024-02-01"}]}
    assert matches(obj, *MARCH) is True


def test_only_one_of_from_to_falls_through_to_rows():
    obj = {"from": "2024-03-01", "rows": [{"date": "2024-02-01"}]}
    assert matches(obj, *MARCH) is False


def test_empty_month_field_is_ignored():
    assert matches({"month": "", "days": {"2024-03-01": 1}}, *MARCH) is True
