from datetime import date

import pytest
from django.db.models import Q

from core.models import Staff
from core.services.filters import combine, day_q, department_q, department_value, range_q, search_q, status_q

pytestmark = pytest.mark.django_db


def make_staff(first, last, dept, email=None):
    return Staff.objects.create(
        first_name=first, last_name=last, department=dept, role='Nurse',
        email=email or f'{first.lower()}.{last.lower()}@example.com',
    )


@pytest.mark.parametrize('raw', [None, '', '   ', 'all', 'ALL', 'All'])
def test_department_value_treats_all_and_blank_as_unset(raw):
    assert department_value(raw) is None
    assert department_q(raw) == Q()


def test_department_value_keeps_real_department():
    assert department_value(' Surgery ') == 'Surgery'


@pytest.mark.parametrize('term', [None, '', '   '])
def test_empty_search_is_no_constraint(term):
    assert search_q(term, ['first_name', 'last_name']) == Q()


def test_unset_filters_produce_empty_q():
    assert status_q(None) == Q()
    assert status_q('') == Q()
    assert day_q('date', None) == Q()
    assert range_q('date', None, None) == Q()
    assert combine() == Q()


def test_search_matches_any_field_case_insensitive():
    a = make_staff('Anna', 'Lopez', 'Emergency')
    b = make_staff('Bob', 'Annandale', 'Surgery')
    make_staff('Carl', 'Weber', 'Surgery')

    found = set(Staff.objects.filter(search_q('ANN', ['first_name', 'last_name'])))
    assert found == {a, b}


def test_empty_search_returns_everything():
    make_staff('Anna', 'Lopez', 'Emergency')
    make_staff('Bob', 'Stone', 'Surgery')
    assert Staff.objects.filter(search_q('', ['first_name'])).count() == 2


def test_department_all_matches_unset():
    make_staff('Anna', 'Lopez', 'Emergency')
    make_staff('Bob', 'Stone', 'Surgery')

    unfiltered = list(Staff.objects.order_by('id'))
    for raw in (None, '', 'all', 'ALL'):
        assert list(Staff.objects.filter(department_q(raw)).order_by('id')) == unfiltered
    assert [s.first_name for s in Staff.objects.filter(department_q('Surgery'))] == ['Bob']


def test_combine_ands_predicates():
    make_staff('Anna', 'Lopez', 'Emergency')
    make_staff('Anna', 'Stone', 'Surgery')

    q = combine(search_q('anna', ['first_name']), department_q('Surgery'))
    assert [s.last_name for s in Staff.objects.filter(q)] == ['Stone']


def test_range_is_inclusive_on_both_ends():
    s = make_staff('Anna', 'Lopez', 'Emergency')
    for day in (date(2024, 3, 1), date(2024, 3, 15), date(2024, 3, 31), date(2024, 4, 1)):
        s.attendance.create(date=day, status='Present')

    q = range_q('date', date(2024, 3, 1), date(2024, 3, 31))
    assert sorted(a.date.day for a in s.attendance.filter(q)) == [1, 15, 31]
