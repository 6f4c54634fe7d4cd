"""
URL mappings for the hospital dashboard API.

Paths carry no trailing slash, matching the paths the dashboard
front end requests.
"""
from django.urls import path, include

from .views.admissions import admissions, discharge_admission
from .views.appointments import appointments
from .views.attendance import attendance, attendance_report, attendance_summary
from .views.bills import bill_detail, bills, record_payment
from .views.departments import departments
from .views.health import healthz
from .views.insurance import insurance_claims
from .views.patients import patients
from .views.revenue import revenue, revenue_range
from .views.shifts import shifts
from .views.staff import initial_data, seed, staff

urlpatterns = [
    # Patients
    path('api/patients', patients),
    path('api/appointments', appointments),
    path('api/admissions', admissions),
    path('api/admissions/<int:admission_id>/discharge', discharge_admission),

    # Billing & revenue
    path('api/bills', bills),
    path('api/bills/<int:bill_id>', bill_detail),
    path('api/bills/<int:bill_id>/payments', record_payment),
    path('api/insurance', insurance_claims),
    path('api/revenue', revenue),
    path('api/revenue/range', revenue_range),

    # Staff
    path('api/staff', staff),
    path('api/staff/seed', seed),
    path('api/staff/initial-data', initial_data),
    path('api/staff/attendance', attendance),
    path('api/staff/attendance/stats', attendance_summary),
    path('api/staff/attendance/report', attendance_report),
    path('api/staff/shifts', shifts),
    path('api/departments', departments),

    # Ops
    path('healthz', healthz),
    path('', include('django_prometheus.urls')),
]
