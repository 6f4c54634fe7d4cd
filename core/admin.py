"""
Django admin registrations for the core models.

Useful during development to inspect rows created through the API and
to correct records by hand.
"""

from django.contrib import admin

from .models import (
    Admission,
    Appointment,
    Attendance,
    Bill,
    InsuranceClaim,
    Patient,
    Payment,
    Shift,
    Staff,
)


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = ('id', 'first_name', 'last_name', 'phone', 'status', 'created_at')
    list_filter = ('status', 'gender')
    search_fields = ('first_name', 'last_name', 'phone', 'email')


@admin.register(Staff)
class StaffAdmin(admin.ModelAdmin):
    list_display = ('id', 'first_name', 'last_name', 'email', 'department', 'role', 'status')
    list_filter = ('department', 'status')
    search_fields = ('first_name', 'last_name', 'email')


@admin.register(Appointment)
class AppointmentAdmin(admin.ModelAdmin):
    list_display = ('id', 'patient', 'date_time', 'type', 'status')
    list_filter = ('status',)
    search_fields = ('patient__first_name', 'patient__last_name', 'type')


@admin.register(Admission)
class AdmissionAdmin(admin.ModelAdmin):
    list_display = ('id', 'patient', 'room_number', 'admission_date', 'discharge_date', 'status')
    list_filter = ('status',)
    search_fields = ('patient__first_name', 'patient__last_name', 'room_number')


class PaymentInline(admin.TabularInline):
    model = Payment
    extra = 0


@admin.register(Bill)
class BillAdmin(admin.ModelAdmin):
    list_display = ('id', 'patient', 'amount', 'due_date', 'status', 'created_at')
    list_filter = ('status',)
    search_fields = ('patient__first_name', 'patient__last_name')
    inlines = [PaymentInline]


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ('id', 'bill', 'amount', 'payment_date', 'payment_method', 'status')
    list_filter = ('status', 'payment_method')


@admin.register(InsuranceClaim)
class InsuranceClaimAdmin(admin.ModelAdmin):
    list_display = ('id', 'patient', 'provider', 'policy_number', 'claim_amount', 'status')
    list_filter = ('status', 'provider')
    search_fields = ('policy_number', 'provider', 'patient__last_name')


@admin.register(Attendance)
class AttendanceAdmin(admin.ModelAdmin):
    list_display = ('id', 'staff', 'date', 'status', 'check_in', 'check_out')
    list_filter = ('status', 'staff__department')
    date_hierarchy = 'date'


@admin.register(Shift)
class ShiftAdmin(admin.ModelAdmin):
    list_display = ('id', 'staff', 'date', 'start_time', 'end_time')
    list_filter = ('staff__department',)
    date_hierarchy = 'date'
