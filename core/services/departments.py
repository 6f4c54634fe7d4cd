"""
Departments are the distinct ``Staff.department`` values; there is no
table behind them.
"""
from __future__ import annotations

from django.db.models import Count

from core.models import Staff


def department_entry(name: str, staff_count: int = 0, description: str | None = None) -> dict:
    return {
        'id': name,
        'name': name,
        'description': description if description is not None else f"{name} department",
        'staffCount': staff_count,
    }


def list_departments() -> list[dict]:
    rows = (Staff.objects.values('department')
            .annotate(staff_count=Count('id'))
            .order_by('department'))
    return [department_entry(r['department'], r['staff_count']) for r in rows]
