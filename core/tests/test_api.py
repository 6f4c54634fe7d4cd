"""
Integration tests for the hospital dashboard API.

These tests drive the HTTP routes end to end with DRF's APIClient: the
create/list flows, the status codes for validation, missing records and
duplicates, and the reporting endpoints.

To run the tests:

```
pytest -q core/tests
```
"""
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from unittest import mock

from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from core.models import Admission, Attendance, Bill, Patient, Payment, Shift, Staff


def at(day, hour, minute=0):
    return timezone.make_aware(datetime.combine(day, time(hour, minute)))


class HospitalAPITests(APITestCase):
    def setUp(self) -> None:
        self.patient = Patient.objects.create(first_name='Ada', last_name='King', phone='555-0101')
        self.other_patient = Patient.objects.create(first_name='Brian', last_name='Lee', phone='555-0202')
        self.nurse = Staff.objects.create(first_name='Anna', last_name='Lopez', email='anna@example.com',
                                          department='Emergency', role='Nurse')
        self.surgeon = Staff.objects.create(first_name='Bob', last_name='Stone', email='bob@example.com',
                                            department='Surgery', role='Surgeon')

    # Patients ---------------------------------------------------------------

    def test_create_and_search_patients(self):
        resp = self.client.post('/api/patients', {
            'firstName': 'Carmen', 'lastName': 'Diaz', 'dateOfBirth': '1990-07-21', 'phone': '555-0303',
        }, format='json')
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertEqual(resp.data['status'], 'Active')
        self.assertEqual(resp.data['dateOfBirth'], '1990-07-21')

        resp = self.client.get('/api/patients', {'search': 'diaz'})
        self.assertEqual([p['name'] for p in resp.data], ['Carmen Diaz'])

        resp = self.client.get('/api/patients', {'search': '0202'})
        self.assertEqual([p['name'] for p in resp.data], ['Brian Lee'])

        resp = self.client.get('/api/patients', {'search': ''})
        self.assertEqual(len(resp.data), 3)

    def test_patient_list_includes_latest_appointment(self):
        for offset in (-3, 5, 1):
            self.patient.appointments.create(date_time=timezone.now() + timedelta(days=offset), type=f'd{offset}')
        resp = self.client.get('/api/patients', {'search': 'King'})
        self.assertEqual(resp.data[0]['lastAppointment']['type'], 'd5')
        resp = self.client.get('/api/patients', {'search': 'Lee'})
        self.assertIsNone(resp.data[0]['lastAppointment'])

    def test_create_patient_requires_names(self):
        resp = self.client.post('/api/patients', {'lastName': 'Diaz'}, format='json')
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('firstName', resp.data['fields'])
        self.assertIn('error', resp.data)

    def test_appointments_and_unknown_patient(self):
        resp = self.client.post('/api/appointments', {
            'patientId': self.patient.id, 'dateTime': '2024-03-01T10:00:00Z', 'type': 'Checkup',
        }, format='json')
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertEqual(resp.data['status'], 'Scheduled')
        self.assertEqual(resp.data['patientName'], 'Ada King')

        resp = self.client.get('/api/appointments', {'search': 'check'})
        self.assertEqual(len(resp.data), 1)

        resp = self.client.post('/api/appointments', {'patientId': 9999, 'dateTime': '2024-03-01'}, format='json')
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(resp.data, {'error': 'Patient not found'})

    def test_admission_discharge(self):
        resp = self.client.post('/api/admissions', {'patientId': self.patient.id, 'roomNumber': '12B'}, format='json')
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertEqual(resp.data['status'], 'Active')
        self.assertEqual(resp.data['dischargeDate'], '')
        admission_id = resp.data['id']

        resp = self.client.put(f'/api/admissions/{admission_id}/discharge')
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data['status'], 'Discharged')
        self.assertTrue(resp.data['dischargeDate'])

        admission = Admission.objects.get(pk=admission_id)
        self.assertEqual(admission.status, Admission.STATUS_DISCHARGED)
        self.assertIsNotNone(admission.discharge_date)

        resp = self.client.get('/api/admissions', {'search': '12b'})
        self.assertEqual(resp.data[0]['status'], 'Discharged')

        resp = self.client.put('/api/admissions/9999/discharge')
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)

    # Billing ----------------------------------------------------------------

    def test_bill_status_flow_and_revenue(self):
        resp = self.client.post('/api/bills', {
            'patientId': self.patient.id, 'amount': '100.00', 'dueDate': '2024-03-01',
        }, format='json')
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertEqual(resp.data['status'], 'Pending')
        self.assertEqual(resp.data['amount'], 100.0)
        bill_id = resp.data['id']

        resp = self.client.patch(f'/api/bills/{bill_id}', {'status': 'Paid'}, format='json')
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        resp = self.client.get(f'/api/bills/{bill_id}')
        self.assertEqual(resp.data['status'], 'Paid')
        self.assertEqual(resp.data['payments'], [])

        # a Paid bill without payments adds nothing to revenue
        resp = self.client.get('/api/revenue')
        self.assertEqual(resp.data['stats']['totalRevenue'], 0.0)

        resp = self.client.post(f'/api/bills/{bill_id}/payments', {'amount': '40.00', 'paymentMethod': 'Card'},
                                format='json')
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertEqual(resp.data['status'], Payment.STATUS_COMPLETED)

        resp = self.client.get(f'/api/bills/{bill_id}')
        self.assertEqual(resp.data['status'], 'Paid')
        self.assertEqual([p['amount'] for p in resp.data['payments']], [40.0])

        resp = self.client.get('/api/revenue', {'timeframe': 'week'})
        self.assertEqual(resp.data['stats']['totalRevenue'], 40.0)
        self.assertEqual(resp.data['stats']['revenueGrowth'], 100.0)
        self.assertEqual(len(resp.data['revenueData']), 1)

    def test_bill_status_must_be_known(self):
        bill = Bill.objects.create(patient=self.patient, amount=Decimal('10.00'), due_date=timezone.now())
        resp = self.client.patch(f'/api/bills/{bill.id}', {'status': 'Bogus'}, format='json')
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        bill.refresh_from_db()
        self.assertEqual(bill.status, Bill.STATUS_PENDING)

    def test_missing_bill(self):
        resp = self.client.get('/api/bills/9999')
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(resp.data, {'error': 'Bill not found'})
        resp = self.client.post('/api/bills/9999/payments', {'amount': '5.00'}, format='json')
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)

    def test_bill_search_by_status(self):
        Bill.objects.create(patient=self.patient, amount=Decimal('10.00'), due_date=timezone.now())
        Bill.objects.create(patient=self.other_patient, amount=Decimal('20.00'), due_date=timezone.now(),
                            status=Bill.STATUS_OVERDUE)
        resp = self.client.get('/api/bills', {'search': 'overdue'})
        self.assertEqual([b['patientName'] for b in resp.data], ['Brian Lee'])

    def test_insurance_claims(self):
        resp = self.client.post('/api/insurance', {
            'patientId': self.patient.id, 'insuranceProvider': 'Acme', 'claimNumber': 'CLM-1', 'amount': '250.00',
        }, format='json')
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertEqual(resp.data['status'], 'Pending')
        self.assertEqual(resp.data['processedDate'], '')

        self.assertEqual(len(self.client.get('/api/insurance', {'status': 'Pending'}).data), 1)
        self.assertEqual(len(self.client.get('/api/insurance', {'status': 'Approved'}).data), 0)
        self.assertEqual(len(self.client.get('/api/insurance', {'search': 'acme'}).data), 1)

    def test_revenue_validation(self):
        resp = self.client.get('/api/revenue', {'timeframe': 'decade'})
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('timeframe', resp.data['error'])

        resp = self.client.get('/api/revenue/range', {'startDate': '2024-03-01'})
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

        resp = self.client.get('/api/revenue/range', {'startDate': '2024-03-01', 'endDate': '2024-03-31'})
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data['total'], 0.0)

    def test_unexpected_error_reports_route_message(self):
        with mock.patch('core.views.revenue.revenue_rollup', side_effect=RuntimeError('db down')):
            resp = self.client.get('/api/revenue')
        self.assertEqual(resp.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(resp.data, {'error': 'Failed to fetch revenue data'})

    # Staff ------------------------------------------------------------------

    def test_create_staff_and_duplicate_email(self):
        payload = {'firstName': 'Cara', 'lastName': 'Ng', 'email': 'cara@example.com',
                   'department': 'Pediatrics', 'role': 'Doctor'}
        resp = self.client.post('/api/staff', payload, format='json')
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertEqual(resp.data['status'], 'Active')

        resp = self.client.post('/api/staff', dict(payload, email='CARA@example.com'), format='json')
        self.assertEqual(resp.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(resp.data, {'error': 'Email already exists'})

    def test_create_staff_requires_role(self):
        resp = self.client.post('/api/staff', {'firstName': 'Cara', 'lastName': 'Ng', 'email': 'cara@example.com',
                                               'department': 'Pediatrics'}, format='json')
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('role', resp.data['fields'])

    def test_department_all_matches_unset(self):
        baseline = self.client.get('/api/staff').data
        self.assertEqual(len(baseline), 2)
        for value in ('all', 'ALL', ''):
            self.assertEqual(self.client.get('/api/staff', {'department': value}).data, baseline)
        resp = self.client.get('/api/staff', {'department': 'Surgery'})
        self.assertEqual([s['email'] for s in resp.data], ['bob@example.com'])

    def test_seed_is_idempotent(self):
        Staff.objects.all().delete()
        resp = self.client.post('/api/staff/seed')
        self.assertEqual(resp.data['created'], 6)
        resp = self.client.post('/api/staff/seed')
        self.assertEqual(resp.data['message'], 'Staff already seeded')
        self.assertEqual(Staff.objects.count(), 6)

    def test_departments(self):
        resp = self.client.get('/api/departments')
        self.assertEqual(resp.data, [
            {'id': 'Emergency', 'name': 'Emergency', 'description': 'Emergency department', 'staffCount': 1},
            {'id': 'Surgery', 'name': 'Surgery', 'description': 'Surgery department', 'staffCount': 1},
        ])
        resp = self.client.post('/api/departments', {'name': 'Radiology', 'description': 'Imaging'}, format='json')
        self.assertEqual(resp.data, {'id': 'Radiology', 'name': 'Radiology', 'description': 'Imaging',
                                     'staffCount': 0})
        self.assertEqual(len(self.client.get('/api/departments').data), 2)

    def test_shift_validation(self):
        day = date(2024, 6, 12)
        payload = {'staffId': self.nurse.id, 'date': '2024-06-12',
                   'startTime': at(day, 9).isoformat(), 'endTime': at(day, 17).isoformat()}

        resp = self.client.post('/api/staff/shifts', dict(payload, staffId=9999), format='json')
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(resp.data, {'error': 'Staff not found'})

        resp = self.client.post('/api/staff/shifts', dict(payload, endTime=payload['startTime']), format='json')
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('End time must be after start time', resp.data['error'])
        self.assertEqual(Shift.objects.count(), 0)

        resp = self.client.post('/api/staff/shifts', payload, format='json')
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertEqual(resp.data['department'], 'Emergency')

        resp = self.client.get('/api/staff/shifts', {'date': '2024-06-12', 'department': 'Surgery'})
        self.assertEqual(resp.data, [])
        resp = self.client.get('/api/staff/shifts', {'date': '2024-06-12', 'department': 'all'})
        self.assertEqual(len(resp.data), 1)

    def test_initial_data(self):
        day = timezone.localdate()
        Shift.objects.create(staff=self.nurse, date=day, start_time=at(day, 8), end_time=at(day, 16))
        resp = self.client.get('/api/staff/initial-data')
        self.assertEqual(set(resp.data), {'date', 'shifts', 'staff', 'departmentWorkload'})
        self.assertEqual(len(resp.data['shifts']), 1)
        self.assertEqual([d['department'] for d in resp.data['departmentWorkload']], ['Emergency', 'Surgery'])

    # Attendance ---------------------------------------------------------------

    def test_mark_attendance(self):
        day = date(2024, 6, 12)
        payload = {'staffId': self.nurse.id, 'date': '2024-06-12', 'status': 'Present',
                   'checkIn': at(day, 8).isoformat(), 'checkOut': at(day, 16).isoformat()}
        resp = self.client.post('/api/staff/attendance', payload, format='json')
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertEqual(resp.data['staffName'], 'Anna Lopez')

        resp = self.client.post('/api/staff/attendance', dict(payload, status='Sleeping'), format='json')
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

        resp = self.client.post('/api/staff/attendance', dict(payload, checkOut=at(day, 7).isoformat()),
                                format='json')
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

        resp = self.client.post('/api/staff/attendance', dict(payload, staffId=9999), format='json')
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)

        resp = self.client.get('/api/staff/attendance', {'date': '2024-06-12', 'search': 'lopez'})
        self.assertEqual(len(resp.data), 1)
        resp = self.client.get('/api/staff/attendance', {'date': '2024-06-12', 'department': 'Surgery'})
        self.assertEqual(resp.data, [])

    def test_attendance_stats_and_report(self):
        for day in range(1, 4):
            Attendance.objects.create(staff=self.nurse, date=date(2024, 6, day), status='Present',
                                      check_in=at(date(2024, 6, day), 8))

        resp = self.client.get('/api/staff/attendance/stats', {'date': '2024-06-15', 'department': 'Emergency'})
        self.assertEqual(resp.data['present'], 3)
        self.assertEqual(resp.data['staffCount'], 1)
        self.assertEqual(resp.data['attendanceRate'], 10.0)

        resp = self.client.get('/api/staff/attendance/report', {'date': '2024-06-15'})
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp['Content-Type'], 'text/csv')
        self.assertEqual(resp['Content-Disposition'], 'attachment; filename=attendance-report-2024-06.csv')
        lines = resp.content.decode().splitlines()
        self.assertEqual(lines[0], 'Date,Staff Name,Department,Check In,Check Out,Status,Leave Type,Leave Reason')
        self.assertEqual(len(lines), 4)

    def test_healthz(self):
        resp = self.client.get('/healthz')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {'ok': True, 'db': True})
