"""
Revenue rollups over recorded payments.

Revenue is the sum of :class:`Payment` amounts, whatever the payment
status and whatever the status of the owning bill.  A bill marked
``Paid`` without a payment row adds nothing.

Windows are whole local days with an inclusive end
(``23:59:59.999999`` on the last day).
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from django.db.models import Q, Sum
from django.utils import timezone

from core.models import Payment
from core.services.filters import range_q
from core.services.formatters import iso, money

TIMEFRAMES = ('week', 'month', 'quarter', 'year')
DEFAULT_TIMEFRAME = 'month'

# Growth reported when the previous period took nothing.
ZERO_BASELINE_GROWTH = 100.0

ZERO = Decimal('0')


@dataclass(frozen=True)
class Window:
    first_day: date
    last_day: date

    @property
    def start(self) -> datetime:
        return timezone.make_aware(datetime.combine(self.first_day, time.min))

    @property
    def end(self) -> datetime:
        return timezone.make_aware(datetime.combine(self.last_day, time.max))

    def q(self, field: str = 'payment_date') -> Q:
        return range_q(field, self.start, self.end)


def add_months(first_of_month: date, months: int) -> date:
    years, month_index = divmod(first_of_month.month - 1 + months, 12)
    return date(first_of_month.year + years, month_index + 1, 1)


def month_window(day: date) -> Window:
    first = day.replace(day=1)
    return Window(first, add_months(first, 1) - timedelta(days=1))


def year_window(day: date) -> Window:
    return Window(date(day.year, 1, 1), date(day.year, 12, 31))


def timeframe_windows(timeframe: str, today: date) -> tuple[Window, Window]:
    """Return ``(current, previous)`` windows for ``timeframe`` anchored at ``today``."""
    if timeframe == 'week':
        return (
            Window(today - timedelta(days=6), today),
            Window(today - timedelta(days=13), today - timedelta(days=7)),
        )
    if timeframe == 'month':
        current = month_window(today)
        return current, month_window(current.first_day - timedelta(days=1))
    if timeframe == 'quarter':
        first = add_months(today.replace(day=1), -2)
        current = Window(first, month_window(today).last_day)
        return current, Window(add_months(first, -3), first - timedelta(days=1))
    if timeframe == 'year':
        return year_window(today), year_window(date(today.year - 1, 1, 1))
    raise ValueError(f"unknown timeframe: {timeframe!r}")


def total_amount(q: Optional[Q] = None) -> Decimal:
    qs = Payment.objects.all()
    if q is not None:
        qs = qs.filter(q)
    return qs.aggregate(total=Sum('amount'))['total'] or ZERO


def growth_percent(current: Decimal, previous: Decimal) -> float:
    """Percentage change from ``previous`` to ``current``.

    A zero baseline reports :data:`ZERO_BASELINE_GROWTH` rather than
    dividing by zero, so callers should read 100 from a zero baseline
    as "new revenue", not as a measured change.
    """
    if previous == 0:
        return ZERO_BASELINE_GROWTH
    change = (Decimal(current) - Decimal(previous)) / Decimal(previous) * 100
    return float(change.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP))


def format_revenue_point(payment: Payment) -> dict:
    return {
        'id': payment.id,
        'date': iso(payment.payment_date),
        'amount': money(payment.amount),
        'source': payment.payment_method,
        'status': payment.status,
    }


def revenue_rollup(timeframe: str = DEFAULT_TIMEFRAME, today: Optional[date] = None) -> dict:
    today = today or timezone.localdate()
    current, previous = timeframe_windows(timeframe, today)

    payments = list(Payment.objects.filter(current.q()).order_by('payment_date', 'id'))
    current_total = sum((p.amount for p in payments), ZERO)
    previous_total = total_amount(previous.q())

    stats = {
        'totalRevenue': money(total_amount()),
        'monthlyRevenue': money(total_amount(month_window(today).q())),
        'yearlyRevenue': money(total_amount(year_window(today).q())),
        'revenueGrowth': growth_percent(current_total, previous_total),
    }
    period = {
        'timeframe': timeframe,
        'startDate': iso(current.first_day),
        'endDate': iso(current.last_day),
        'previousStartDate': iso(previous.first_day),
        'previousEndDate': iso(previous.last_day),
        'currentTotal': money(current_total),
        'previousTotal': money(previous_total),
    }
    return {
        'stats': stats,
        'period': period,
        'revenueData': [format_revenue_point(p) for p in payments],
    }


def revenue_for_range(first_day: date, last_day: date) -> dict:
    window = Window(first_day, last_day)
    payments = list(Payment.objects.filter(window.q()).order_by('payment_date', 'id'))
    return {
        'payments': [format_revenue_point(p) for p in payments],
        'total': money(sum((p.amount for p in payments), ZERO)),
        'startDate': iso(first_day),
        'endDate': iso(last_day),
    }
