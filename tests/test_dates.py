from datetime import date

import pytest

from tsebo.models import EmploymentEntry, estimate_experience_years
from tsebo.utils import months_between, normalize_date


@pytest.mark.parametrize(
    "value",
    ["2021-03-15", "2021/03/15", "15/03/2021", "15-03-2021", "March 15, 2021", "15 March 2021", "on 15 Mar 2021"],
)
def test_full_dates_normalize(value):
    assert normalize_date(value) == "2021-03-15"


def test_impossible_dates_give_none():
    assert normalize_date("2021-02-30") is None
    assert normalize_date("31/04/2021") is None


def test_unparseable_input_gives_none():
    assert normalize_date("not a date") is None
    assert normalize_date("") is None
    assert normalize_date(None) is None


def test_partial_forms_need_partial_mode():
    assert normalize_date("March 2021") is None
    assert normalize_date("March 2021", partial=True) == "2021-03-01"
    assert normalize_date("2020-07", partial=True) == "2020-07-01"
    assert normalize_date("2019", partial=True) == "2019-01-01"


def test_full_date_preferred_in_partial_mode():
    assert normalize_date("15 March 2021", partial=True) == "2021-03-15"


def test_months_between():
    assert months_between(date(2019, 1, 1), date(2022, 1, 1)) == 36
    assert months_between(date(2020, 5, 1), date(2020, 3, 1)) == -2


def test_experience_years_from_history():
    history = [
        EmploymentEntry(company_name="Acme", job_title="Developer", start_date="2019-01-01", end_date="2022-01-01"),
        EmploymentEntry(company_name="Globex", job_title="Engineer", start_date="2022-01-01", end_date=None),
        EmploymentEntry(company_name="Initech", job_title="Intern"),
    ]
    # 36 months closed + 18 months open-ended = 4.5 years, rounded half up
    assert estimate_experience_years(history, as_of=date(2023, 7, 1)) == 5


def test_experience_years_empty_history():
    assert estimate_experience_years([]) == 0
