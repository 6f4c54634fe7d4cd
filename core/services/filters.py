"""
Query/filter building for list endpoints.

Turns the free-text ``search`` parameter and the structured filters
(department, day, date range, status) into ``Q`` objects.  A filter
that is not set never constrains the result: an empty search, an empty
department or the literal ``"all"`` all produce an empty ``Q()``.
"""
from __future__ import annotations

import operator
from datetime import date, datetime
from functools import reduce
from typing import Iterable, Optional

from django.db.models import Q

ALL_DEPARTMENTS = 'all'


def search_q(search: Optional[str], fields: Iterable[str]) -> Q:
    """OR together case-insensitive ``contains`` lookups over ``fields``."""
    term = (search or '').strip()
    if not term:
        return Q()
    return reduce(operator.or_, (Q(**{f'{field}__icontains': term}) for field in fields), Q())


def department_value(raw: Optional[str]) -> Optional[str]:
    value = (raw or '').strip()
    if not value or value.lower() == ALL_DEPARTMENTS:
        return None
    return value


def department_q(raw: Optional[str], field: str = 'department') -> Q:
    value = department_value(raw)
    return Q(**{field: value}) if value else Q()


def status_q(raw: Optional[str], field: str = 'status') -> Q:
    value = (raw or '').strip()
    return Q(**{field: value}) if value else Q()


def day_q(field: str, day: Optional[date]) -> Q:
    return Q(**{field: day}) if day else Q()


def range_q(field: str, start: Optional[datetime | date], end: Optional[datetime | date]) -> Q:
    """Inclusive ``[start, end]`` on ``field``; either bound may be open."""
    q = Q()
    if start is not None:
        q &= Q(**{f'{field}__gte': start})
    if end is not None:
        q &= Q(**{f'{field}__lte': end})
    return q


def combine(*predicates: Q) -> Q:
    return reduce(operator.and_, predicates, Q())
